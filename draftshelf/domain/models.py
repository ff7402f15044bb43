# draftshelf/domain/models.py
# Domain models must be pure (no I/O, no external libs)
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType


@dataclass(frozen=True)
class Document:
    """
    Immutable record for one draft post.

    - title:            display title (empty only for files without front matter)
    - layout:           opaque rendering template identifier
    - category_path:    ordered taxonomy segments from `categories`
    - body:             raw text after the closing delimiter, passed through unchanged
    - slug:             derived identifier, unique within a loaded collection
    - front_matter:     every parsed key/value pair, read-only
    - source_path:      file the document was loaded from (None for in-memory text)
    - has_front_matter: whether the source opened with a front-matter block
    """

    title: str
    layout: str
    category_path: tuple[str, ...]
    body: str
    slug: str = ""
    front_matter: Mapping[str, str] = field(default_factory=dict)
    source_path: str | None = None
    has_front_matter: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "category_path", tuple(self.category_path))
        object.__setattr__(self, "front_matter", MappingProxyType(dict(self.front_matter)))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Document):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def _key(self) -> tuple:
        return (
            self.title,
            self.layout,
            self.category_path,
            self.body,
            self.slug,
            tuple(sorted(self.front_matter.items())),
            self.source_path,
            self.has_front_matter,
        )

    def to_dict(self) -> dict[str, object]:
        return {
            "slug": self.slug,
            "title": self.title,
            "layout": self.layout,
            "category_path": list(self.category_path),
            "body": self.body,
            "front_matter": dict(self.front_matter),
            "source_path": self.source_path,
        }

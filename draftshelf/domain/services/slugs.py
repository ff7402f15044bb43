"""Slug derivation for documents.

Why: The publishing side addresses posts by a path-like identifier
     (`category/.../name`); it must be stable and unique per collection.
"""

from __future__ import annotations

import re
import unicodedata
from collections.abc import Iterable, Sequence
from pathlib import PurePath

from ..models import Document

_NON_ALNUM = re.compile(r"[^a-z0-9]+")
_DATE_PREFIX = re.compile(r"^\d{4}-\d{2}-\d{2}-")


def slugify(text: str) -> str:
    folded = unicodedata.normalize("NFKD", text).encode("ascii", "ignore").decode("ascii")
    return _NON_ALNUM.sub("-", folded.lower()).strip("-")


def derive_slug(
    category_path: Sequence[str],
    source_path: str | None = None,
    title: str = "",
    explicit: str | None = None,
) -> str:
    """Build `cat/sub/name` from categories plus explicit slug, file stem or title.

    A leading `YYYY-MM-DD-` date on the file stem is dropped.
    """
    if explicit:
        name = slugify(explicit)
    elif source_path:
        name = slugify(_DATE_PREFIX.sub("", PurePath(source_path).stem))
    else:
        name = slugify(title)

    segments = [s for s in (slugify(c) for c in category_path) if s]
    if name:
        segments.append(name)
    return "/".join(segments)


def find_duplicate_slugs(documents: Iterable[Document]) -> dict[str, list[str | None]]:
    seen: dict[str, list[str | None]] = {}
    for doc in documents:
        seen.setdefault(doc.slug, []).append(doc.source_path)
    return {slug: paths for slug, paths in seen.items() if len(paths) > 1}

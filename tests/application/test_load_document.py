from dataclasses import dataclass, field

import pytest

from draftshelf.application.ports.document_source_port import DocumentSourcePort
from draftshelf.application.use_cases.load_document import LoadDocument
from draftshelf.domain.errors import MalformedFrontMatter, MissingRequiredField


@dataclass
class FakeSource(DocumentSourcePort):
    files: dict[str, str] = field(default_factory=dict)

    def list_paths(self, root: str, pattern: str) -> list[str]:  # type: ignore[override]
        return list(self.files)

    def read_text(self, path: str) -> str:  # type: ignore[override]
        if path not in self.files:
            raise FileNotFoundError(path)
        return self.files[path]


def test_load_document_parses_file():
    src = FakeSource({"_drafts/2015-06-08-monads.md": "---\ntitle: Monads\ncategories: swift\n---\nB"})
    doc = LoadDocument(source=src).execute("_drafts/2015-06-08-monads.md")

    assert doc.title == "Monads"
    assert doc.layout == "post"
    assert doc.slug == "swift/monads"
    assert doc.source_path == "_drafts/2015-06-08-monads.md"


def test_load_document_propagates_io_errors_unchanged():
    with pytest.raises(FileNotFoundError):
        LoadDocument(source=FakeSource()).execute("missing.md")


def test_load_document_propagates_parse_errors():
    src = FakeSource({"a.md": "---\ntitle: open"})
    with pytest.raises(MalformedFrontMatter):
        LoadDocument(source=src).execute("a.md")


def test_load_document_strict_mode():
    src = FakeSource({"a.md": "no front matter"})
    assert LoadDocument(source=src).execute("a.md").body == "no front matter"
    with pytest.raises(MissingRequiredField):
        LoadDocument(source=src, strict=True).execute("a.md")

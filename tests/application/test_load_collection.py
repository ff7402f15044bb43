from dataclasses import dataclass, field
from typing import Any

from draftshelf.application.dto.load_dto import LoadCollectionRequest
from draftshelf.application.ports.document_source_port import DocumentSourcePort
from draftshelf.application.use_cases.load_collection import LoadCollection
from draftshelf.domain.errors import (
    DuplicateSlug,
    MalformedFrontMatter,
    MissingRequiredField,
    ValidationError,
)


@dataclass
class FakeSource(DocumentSourcePort):
    files: dict[str, str] = field(default_factory=dict)
    broken: set[str] = field(default_factory=set)

    def list_paths(self, root: str, pattern: str) -> list[str]:  # type: ignore[override]
        if root == "missing":
            raise FileNotFoundError(root)
        # unsorted on purpose
        return list(reversed(sorted(self.files)))

    def read_text(self, path: str) -> str:  # type: ignore[override]
        if path in self.broken:
            raise PermissionError(path)
        return self.files[path]


class FakeTelemetry:
    def __init__(self) -> None:
        self.counters: list[tuple[str, dict[str, Any]]] = []
        self.observed: list[tuple[str, float]] = []

    def incr(self, name, tags=None):  # type: ignore[no-untyped-def]
        self.counters.append((name, dict(tags or {})))

    def observe(self, name, value, tags=None):  # type: ignore[no-untyped-def]
        self.observed.append((name, value))


def _post(title: str, categories: str = "swift") -> str:
    return f"---\nlayout: post\ntitle: {title}\ncategories: {categories}\n---\nBody of {title}\n"


FILES = {
    "d/2015-01-01-monads.md": _post("Monads"),
    "d/2015-02-01-functors.md": _post("Functors"),
    "d/2015-03-01-wwdc.md": _post("WWDC", "conferences"),
}


def _uc(source, **kwargs):
    return LoadCollection(source=source, telemetry=FakeTelemetry(), **kwargs)


def test_loads_all_documents_in_path_order():
    r = _uc(FakeSource(dict(FILES))).execute(LoadCollectionRequest(root="d"))

    assert r.ok and r.value is not None
    assert [d.source_path for d in r.value.documents] == sorted(FILES)
    assert [d.slug for d in r.value.documents] == [
        "swift/monads",
        "swift/functors",
        "conferences/wwdc",
    ]
    assert r.value.failures == ()
    assert r.value.ok


def test_parallel_load_keeps_order():
    files = {f"d/post-{i:02d}.md": _post(f"Post {i}") for i in range(20)}
    r = _uc(FakeSource(files)).execute(LoadCollectionRequest(root="d", workers=4))

    assert r.value is not None
    assert [d.source_path for d in r.value.documents] == sorted(files)


def test_per_file_failures_do_not_abort_batch():
    files = dict(FILES)
    files["d/open.md"] = "---\ntitle: never closed\n"
    files["d/untitled.md"] = "---\nlayout: post\n---\n"
    files["d/locked.md"] = _post("Locked")
    source = FakeSource(files, broken={"d/locked.md"})

    r = _uc(source).execute(LoadCollectionRequest(root="d"))

    assert r.ok and r.value is not None
    assert len(r.value.documents) == 3
    errors = {f.path: type(f.error) for f in r.value.failures}
    assert errors == {
        "d/locked.md": PermissionError,
        "d/open.md": MalformedFrontMatter,
        "d/untitled.md": MissingRequiredField,
    }
    assert not r.value.ok


def test_duplicate_slug_keeps_first_in_path_order():
    files = {
        "a/2015-01-01-monads.md": _post("Monads"),
        "b/monads.md": _post("Monads again"),
    }
    r = _uc(FakeSource(files)).execute(LoadCollectionRequest(root="."))

    assert r.value is not None
    assert [d.source_path for d in r.value.documents] == ["a/2015-01-01-monads.md"]
    (failure,) = r.value.failures
    assert isinstance(failure.error, DuplicateSlug)
    assert failure.error.existing_path == "a/2015-01-01-monads.md"
    assert failure.path == "b/monads.md"
    assert failure.reason.startswith("DuplicateSlug: ")


def test_strict_mode_reports_files_without_front_matter():
    files = {"d/plain.md": "just text", **FILES}
    r = _uc(FakeSource(files), strict=True).execute(LoadCollectionRequest(root="d"))

    assert r.value is not None
    assert [f.path for f in r.value.failures] == ["d/plain.md"]


def test_missing_root_is_validation_error():
    r = _uc(FakeSource()).execute(LoadCollectionRequest(root="missing"))
    assert not r.ok
    assert isinstance(r.error, ValidationError)


def test_invalid_worker_count_is_validation_error():
    r = _uc(FakeSource(dict(FILES))).execute(LoadCollectionRequest(root="d", workers=0))
    assert not r.ok
    assert isinstance(r.error, ValidationError)


def test_telemetry_counts_loaded_and_failed():
    telemetry = FakeTelemetry()
    files = {"d/open.md": "---\n", **FILES}
    uc = LoadCollection(source=FakeSource(files), telemetry=telemetry)

    uc.execute(LoadCollectionRequest(root="d"))

    names = [name for name, _ in telemetry.counters]
    assert names.count("documents.loaded") == 3
    assert names.count("documents.failed") == 1
    failed_tags = [tags for name, tags in telemetry.counters if name == "documents.failed"]
    assert failed_tags[0]["error_type"] == "MalformedFrontMatter"
    assert [name for name, _ in telemetry.observed] == ["documents.load_seconds"]


def test_failures_are_logged(caplog):
    files = {"d/open.md": "---\n"}
    with caplog.at_level("WARNING"):
        _uc(FakeSource(files)).execute(LoadCollectionRequest(root="d"))
    assert "d/open.md" in caplog.text
    assert "MalformedFrontMatter" in caplog.text


class UndecodableSource(FakeSource):
    def read_text(self, path: str) -> str:  # type: ignore[override]
        if path in self.broken:
            raise UnicodeDecodeError("utf-8", b"\xff", 0, 1, "invalid start byte")
        return super().read_text(path)


def test_undecodable_file_does_not_abort_batch():
    files = {"d/latin1.md": "", **FILES}
    source = UndecodableSource(files, broken={"d/latin1.md"})

    r = _uc(source).execute(LoadCollectionRequest(root="d", workers=2))

    assert r.value is not None
    assert [d.source_path for d in r.value.documents] == sorted(FILES)
    (failure,) = r.value.failures
    assert failure.path == "d/latin1.md"
    assert isinstance(failure.error, UnicodeDecodeError)
    assert failure.reason.startswith("UnicodeDecodeError: ")

from __future__ import annotations

from dataclasses import dataclass, field

from draftshelf.domain.models import Document


@dataclass(frozen=True)
class LoadCollectionRequest:
    root: str  # Verzeichnis mit den Entwürfen
    pattern: str = "**/*.md"
    workers: int = 1


@dataclass(frozen=True)
class LoadFailure:
    path: str
    error: Exception

    @property
    def reason(self) -> str:
        return f"{type(self.error).__name__}: {self.error}"


@dataclass(frozen=True)
class LoadReport:
    documents: tuple[Document, ...] = field(default_factory=tuple)
    failures: tuple[LoadFailure, ...] = field(default_factory=tuple)

    @property
    def ok(self) -> bool:
        return not self.failures

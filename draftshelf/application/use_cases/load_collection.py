"""Batch loading of a draft collection.

Why: Ein kaputter Entwurf darf den Rest nicht blockieren; jede Datei wird
     isoliert geparst, Fehler landen mit Pfad und Grund im LoadReport.
"""

from __future__ import annotations

import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass

from draftshelf.application.dto.load_dto import LoadCollectionRequest, LoadFailure, LoadReport
from draftshelf.application.ports.document_source_port import DocumentSourcePort
from draftshelf.application.ports.telemetry_port import TelemetryPort
from draftshelf.application.use_cases.load_document import LoadDocument
from draftshelf.config.logging import get_logger
from draftshelf.domain.errors import DocumentError, DuplicateSlug, ValidationError
from draftshelf.domain.models import Document
from draftshelf.domain.types import Result

logger = get_logger(__name__)

# Per-file failures that are reported instead of aborting the batch.
ISOLATED_ERRORS = (DocumentError, OSError, UnicodeDecodeError)


@dataclass
class LoadCollection:
    source: DocumentSourcePort
    telemetry: TelemetryPort
    strict: bool = False
    default_layout: str = "post"

    def execute(self, req: LoadCollectionRequest) -> Result[LoadReport, ValidationError]:
        """Load every file under ``req.root`` matching ``req.pattern``.

        Returns:
            Result with a LoadReport (documents in path order, plus per-file
            failures), or ValidationError if the request itself is unusable.
        """
        if req.workers < 1:
            return Result.failure(ValidationError(f"workers must be >= 1, got {req.workers}"))

        try:
            paths = sorted(self.source.list_paths(req.root, req.pattern))
        except FileNotFoundError:
            return Result.failure(ValidationError(f"content root not found: {req.root}"))
        except NotADirectoryError:
            return Result.failure(ValidationError(f"content root is not a directory: {req.root}"))

        started = time.perf_counter()
        single = LoadDocument(
            source=self.source, strict=self.strict, default_layout=self.default_layout
        )

        if req.workers == 1 or len(paths) <= 1:
            outcomes = [self._load_one(single, p) for p in paths]
        else:
            with ThreadPoolExecutor(max_workers=req.workers) as pool:
                # map() keeps input order regardless of completion order
                outcomes = list(pool.map(lambda p: self._load_one(single, p), paths))

        documents: list[Document] = []
        failures: list[LoadFailure] = []
        claimed: dict[str, str | None] = {}
        for path, outcome in zip(paths, outcomes):
            if isinstance(outcome, Document) and outcome.slug in claimed:
                outcome = DuplicateSlug(
                    slug=outcome.slug, source_path=path, existing_path=claimed[outcome.slug]
                )
            if isinstance(outcome, Document):
                claimed[outcome.slug] = outcome.source_path
                documents.append(outcome)
            else:
                failure = LoadFailure(path=path, error=outcome)
                logger.warning(f"Skipping {path}: {failure.reason}")
                failures.append(failure)

        tags = {"root": req.root}
        for _ in documents:
            self.telemetry.incr("documents.loaded", tags)
        for f in failures:
            self.telemetry.incr("documents.failed", {**tags, "error_type": type(f.error).__name__})
        self.telemetry.observe("documents.load_seconds", time.perf_counter() - started, tags)

        logger.info(
            f"Loaded {len(documents)} document(s) from {req.root}, {len(failures)} failed"
        )
        return Result.success(LoadReport(documents=tuple(documents), failures=tuple(failures)))

    @staticmethod
    def _load_one(single: LoadDocument, path: str) -> Document | Exception:
        try:
            return single.execute(path)
        except ISOLATED_ERRORS as ex:
            return ex

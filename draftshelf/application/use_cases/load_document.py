from __future__ import annotations

from dataclasses import dataclass

from ...domain.models import Document
from ...domain.services.front_matter import parse_document
from ..ports.document_source_port import DocumentSourcePort


@dataclass
class LoadDocument:
    """Read one source file and parse it; every error reaches the caller."""

    source: DocumentSourcePort
    strict: bool = False
    default_layout: str = "post"

    def execute(self, path: str) -> Document:
        text = self.source.read_text(path)
        return parse_document(
            text, source_path=path, strict=self.strict, default_layout=self.default_layout
        )

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from draftshelf.application.ports.document_source_port import DocumentSourcePort


@dataclass
class FileSystemSource(DocumentSourcePort):
    encoding: str = "utf-8"

    def list_paths(self, root: str, pattern: str) -> list[str]:  # type: ignore[override]
        base = Path(root)
        if not base.exists():
            raise FileNotFoundError(root)
        if not base.is_dir():
            raise NotADirectoryError(root)
        return sorted(str(p) for p in base.glob(pattern) if p.is_file())

    def read_text(self, path: str) -> str:  # type: ignore[override]
        # newline="" keeps \r\n as-is; read errors propagate unchanged
        with open(path, encoding=self.encoding, newline="") as f:
            return f.read()

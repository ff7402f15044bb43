from __future__ import annotations

from typing import Protocol


class DocumentSourcePort(Protocol):
    def list_paths(self, root: str, pattern: str) -> list[str]: ...

    def read_text(self, path: str) -> str: ...

"""Domain errors (typed) for document loading.

Why: One error family for the application layer; per-file failures carry
     the offending path so batch reports can say which file failed and why.
"""

from dataclasses import dataclass


class DomainError(Exception):
    """Base class for domain-specific errors."""


class ValidationError(DomainError):
    """Invalid input/request state."""


class DocumentError(DomainError):
    """Document loading/parsing failed."""


@dataclass(eq=False)
class MalformedFrontMatter(DocumentError):
    """Front-matter block is unterminated or not a flat key/value mapping."""

    message: str
    source_path: str | None = None
    line: int | None = None

    def __str__(self) -> str:
        where = self.source_path or "<string>"
        if self.line is not None:
            where = f"{where}:{self.line}"
        return f"{where}: {self.message}"


@dataclass(eq=False)
class MissingRequiredField(DocumentError):
    """Required front-matter field is absent or blank."""

    field: str
    source_path: str | None = None

    def __str__(self) -> str:
        return f"{self.source_path or '<string>'}: missing required field '{self.field}'"


@dataclass(eq=False)
class DuplicateSlug(DocumentError):
    """Two documents of one collection resolve to the same slug."""

    slug: str
    source_path: str | None = None
    existing_path: str | None = None

    def __str__(self) -> str:
        return (
            f"{self.source_path or '<string>'}: slug '{self.slug}' "
            f"already used by {self.existing_path or '<string>'}"
        )

"""Application settings with environment-driven configuration.

Why: Einzige Stelle mit Env; alle anderen Schichten bekommen die Werte
     per Dependency Injection.
"""

import os
from dataclasses import dataclass, field


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class AppSettings:
    """Application settings loaded from environment variables.

    This is the ONLY place where environment variables are read.

    Feature Flags:
    - strict: files without front matter fail with MissingRequiredField
    - telemetry_enabled: export load metrics through OpenTelemetry
    """

    # ===== Loader Configuration =====
    content_dir: str = field(default_factory=lambda: os.getenv("DRAFTSHELF_CONTENT_DIR", "_drafts"))
    pattern: str = field(default_factory=lambda: os.getenv("DRAFTSHELF_PATTERN", "**/*.md"))
    strict: bool = field(default_factory=lambda: _flag("DRAFTSHELF_STRICT", "false"))
    default_layout: str = field(
        default_factory=lambda: os.getenv("DRAFTSHELF_DEFAULT_LAYOUT", "post")
    )
    # Empty string = no fallback; front matter must name its layout
    workers: int = field(default_factory=lambda: int(os.getenv("DRAFTSHELF_WORKERS", "1")))
    encoding: str = field(default_factory=lambda: os.getenv("DRAFTSHELF_ENCODING", "utf-8"))

    # ===== Logging =====
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO").upper())

    # ===== Telemetry Configuration =====
    telemetry_enabled: bool = field(default_factory=lambda: _flag("TELEMETRY_ENABLED", "false"))
    otlp_endpoint: str = field(default_factory=lambda: os.getenv("OTLP_ENDPOINT", ""))
    # Empty string = no OTLP export

    telemetry_environment: str = field(
        default_factory=lambda: os.getenv("TELEMETRY_ENVIRONMENT", "production")
    )

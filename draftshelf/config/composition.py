from __future__ import annotations

from draftshelf.application.ports.document_source_port import DocumentSourcePort
from draftshelf.application.ports.telemetry_port import TelemetryPort
from draftshelf.application.use_cases.load_collection import LoadCollection
from draftshelf.application.use_cases.load_document import LoadDocument
from draftshelf.config.settings import AppSettings
from draftshelf.infrastructure.filesystem.file_system_source import FileSystemSource
from draftshelf.infrastructure.telemetry.otel_adapter import (
    NoopTelemetry,
    OpenTelemetryAdapter,
    OtelConfig,
)


def build_source(settings: AppSettings) -> DocumentSourcePort:
    return FileSystemSource(encoding=settings.encoding)


def build_telemetry(settings: AppSettings) -> TelemetryPort:
    """Build telemetry adapter based on settings.telemetry_enabled.

    Returns:
        OpenTelemetryAdapter, or NoopTelemetry if disabled.
    """
    if not settings.telemetry_enabled:
        return NoopTelemetry()

    cfg = OtelConfig(
        service_name="draftshelf",
        otlp_endpoint=settings.otlp_endpoint or None,
        environment=settings.telemetry_environment,
    )
    return OpenTelemetryAdapter(cfg)


def build_load_document_use_case(settings: AppSettings | None = None) -> LoadDocument:
    settings = settings or AppSettings()
    return LoadDocument(
        source=build_source(settings),
        strict=settings.strict,
        default_layout=settings.default_layout,
    )


def build_load_collection_use_case(settings: AppSettings | None = None) -> LoadCollection:
    settings = settings or AppSettings()
    return LoadCollection(
        source=build_source(settings),
        telemetry=build_telemetry(settings),
        strict=settings.strict,
        default_layout=settings.default_layout,
    )

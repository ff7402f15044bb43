"""OpenTelemetry adapter for load metrics.

Why: Batch runs over large draft folders should report how many files
     loaded, how many failed and how long it took.
"""

from dataclasses import dataclass
from importlib import import_module
from typing import Any

from draftshelf.application.ports import TelemetryPort
from draftshelf.config.logging import get_logger

logger = get_logger(__name__)


@dataclass
class OtelConfig:
    """Configuration for OpenTelemetry."""

    service_name: str = "draftshelf"
    otlp_endpoint: str | None = None  # e.g., "http://localhost:4317"
    environment: str = "production"
    enable_console: bool = False  # Debug: print metrics to console


class OpenTelemetryAdapter(TelemetryPort):
    """OpenTelemetry adapter for counters and histograms.

    Metrics:
    - Counters: incr() for events (documents loaded/failed)
    - Histograms: observe() for distributions (batch load time)

    Note: Metrics become no-ops if opentelemetry-sdk is not installed.
    """

    def __init__(self, cfg: OtelConfig) -> None:
        self._cfg = cfg
        self._meter: Any | None = None
        self._counters: dict[str, Any] = {}
        self._histograms: dict[str, Any] = {}
        self._init_otel()

    def _init_otel(self) -> None:
        """Set up meter provider with OTLP and/or console readers (lazy imports)."""
        try:
            otel_sdk = import_module("opentelemetry.sdk.metrics")
            otel_export = import_module("opentelemetry.sdk.metrics.export")
            otel_metrics = import_module("opentelemetry.metrics")
            otel_resources = import_module("opentelemetry.sdk.resources")
        except ImportError:
            logger.debug("opentelemetry-sdk not installed; telemetry disabled")
            return

        resource = otel_resources.Resource.create(
            {
                "service.name": self._cfg.service_name,
                "deployment.environment": self._cfg.environment,
            }
        )

        readers = []
        if self._cfg.otlp_endpoint:
            otel_otlp = import_module("opentelemetry.exporter.otlp.proto.grpc.metric_exporter")
            exporter = otel_otlp.OTLPMetricExporter(endpoint=self._cfg.otlp_endpoint)
            readers.append(otel_export.PeriodicExportingMetricReader(exporter))
        if self._cfg.enable_console:
            readers.append(
                otel_export.PeriodicExportingMetricReader(otel_export.ConsoleMetricExporter())
            )

        provider = otel_sdk.MeterProvider(resource=resource, metric_readers=readers)
        otel_metrics.set_meter_provider(provider)
        self._meter = otel_metrics.get_meter(__name__)

    def incr(self, name: str, tags: dict[str, Any] | None = None) -> None:
        """Increment a counter, e.g. incr("documents.failed", {"error_type": "DuplicateSlug"})."""
        if self._meter is None:
            return

        if name not in self._counters:
            self._counters[name] = self._meter.create_counter(
                name=name, description=f"Counter for {name}"
            )
        self._counters[name].add(1, attributes=tags or {})

    def observe(self, name: str, value: float, tags: dict[str, Any] | None = None) -> None:
        """Record a histogram value, e.g. observe("documents.load_seconds", 0.42)."""
        if self._meter is None:
            return

        if name not in self._histograms:
            self._histograms[name] = self._meter.create_histogram(
                name=name, description=f"Histogram for {name}"
            )
        self._histograms[name].record(value, attributes=tags or {})


class NoopTelemetry(TelemetryPort):
    """Telemetry that records nothing (used when telemetry is disabled)."""

    def incr(self, name: str, tags: dict[str, Any] | None = None) -> None:
        pass

    def observe(self, name: str, value: float, tags: dict[str, Any] | None = None) -> None:
        pass

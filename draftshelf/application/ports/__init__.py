"""Application ports package.

Re-exports the ports from their individual files.
"""

from draftshelf.application.ports.document_source_port import DocumentSourcePort
from draftshelf.application.ports.telemetry_port import TelemetryPort

__all__ = [
    "DocumentSourcePort",
    "TelemetryPort",
]

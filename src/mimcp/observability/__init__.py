"""OpenTelemetry-based observability for mimcp."""

from mimcp.observability.exporters import configure_exporters, shutdown
from mimcp.observability.metrics import record_tool_call
from mimcp.observability.tracing import get_tracer, span

__all__ = [
    "configure_exporters",
    "get_tracer",
    "record_tool_call",
    "shutdown",
    "span",
]

"""OTel provider setup (stderr console or OTLP exporters)."""

from __future__ import annotations

import sys
from typing import Any

from opentelemetry import metrics, trace
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import (
    ConsoleMetricExporter,
    PeriodicExportingMetricReader,
)
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter

from mimcp.types.config import ServerConfig

_tracer_provider: Any = None
_meter_provider: Any = None

EXPORTERS = ("none", "console", "otlp")


def configure_exporters(config: ServerConfig) -> bool:
    """Install tracer and meter providers for ``config.otel_exporter``.

    Returns True if a provider was installed. The console exporter writes to
    stderr: stdout belongs to the protocol.
    """
    global _tracer_provider, _meter_provider

    if config.otel_exporter == "none":
        return False
    if config.otel_exporter not in EXPORTERS:
        raise ValueError(
            f"Unknown exporter '{config.otel_exporter}'. Choose one of: {', '.join(EXPORTERS)}"
        )

    resource = Resource.create({"service.name": config.server_name})
    tp = TracerProvider(resource=resource)

    if config.otel_exporter == "console":
        tp.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter(out=sys.stderr)))
        reader = PeriodicExportingMetricReader(ConsoleMetricExporter(out=sys.stderr))
    else:
        try:
            from opentelemetry.exporter.otlp.proto.grpc.metric_exporter import (
                OTLPMetricExporter,
            )
            from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import (
                OTLPSpanExporter,
            )
        except ImportError as exc:
            raise ImportError(
                "The OTLP exporter needs 'opentelemetry-exporter-otlp'. "
                "Install it with: pip install 'mimcp[otlp]'"
            ) from exc
        tp.add_span_processor(
            BatchSpanProcessor(OTLPSpanExporter(endpoint=config.otlp_endpoint))
        )
        reader = PeriodicExportingMetricReader(
            OTLPMetricExporter(endpoint=config.otlp_endpoint)
        )

    trace.set_tracer_provider(tp)
    _tracer_provider = tp

    mp = MeterProvider(resource=resource, metric_readers=[reader])
    metrics.set_meter_provider(mp)
    _meter_provider = mp

    return True


def shutdown() -> None:
    """Flush and shut down configured providers."""
    global _tracer_provider, _meter_provider

    if _tracer_provider is not None:
        _tracer_provider.shutdown()
        _tracer_provider = None
    if _meter_provider is not None:
        _meter_provider.shutdown()
        _meter_provider = None

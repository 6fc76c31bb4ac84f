"""Tracer and span context manager.

Spans go nowhere until ``configure_exporters`` installs an SDK provider; the
OpenTelemetry API's default provider is a no-op.
"""

from __future__ import annotations

from collections.abc import Generator
from contextlib import contextmanager
from typing import Any

from opentelemetry import trace

TRACER_NAME = "mimcp"


def get_tracer(name: str = TRACER_NAME) -> trace.Tracer:
    return trace.get_tracer(name)


@contextmanager
def span(
    name: str,
    attributes: dict[str, Any] | None = None,
) -> Generator[trace.Span, None, None]:
    """Open a span as the current span; exceptions are recorded on it."""
    tracer = get_tracer()
    with tracer.start_as_current_span(name, attributes=attributes) as s:
        yield s

"""Metrics recording: tool call counter and latency histogram."""

from __future__ import annotations

from typing import Any

from opentelemetry import metrics

_meter: Any = None
_tool_call_counter: Any = None
_tool_latency_histogram: Any = None


def _ensure_instruments() -> None:
    """Create meter and instruments on first use."""
    global _meter, _tool_call_counter, _tool_latency_histogram

    if _meter is not None:
        return

    _meter = metrics.get_meter("mimcp")
    _tool_call_counter = _meter.create_counter(
        "mimcp.tool_calls",
        description="Total tool calls handled",
    )
    _tool_latency_histogram = _meter.create_histogram(
        "mimcp.tool_latency",
        description="Tool call latency",
        unit="ms",
    )


def record_tool_call(
    tool_name: str,
    *,
    error_kind: str | None = None,
    latency_ms: float | None = None,
) -> None:
    """Record one handled ``tools/call`` request."""
    _ensure_instruments()
    attrs = {"tool": tool_name, "outcome": error_kind or "success"}
    _tool_call_counter.add(1, attrs)
    if latency_ms is not None:
        _tool_latency_histogram.record(latency_ms, attrs)

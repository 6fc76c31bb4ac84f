"""Transports carrying MCP frames."""

from mimcp.transport.base import Transport
from mimcp.transport.stdio import StdioTransport

__all__ = ["StdioTransport", "Transport"]

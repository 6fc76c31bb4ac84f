"""MCP wire protocol: JSON-RPC framing and result payloads."""

from mimcp.protocol.jsonrpc import Message, encode, make_error, make_response, parse_message
from mimcp.protocol.mcp import (
    LATEST_PROTOCOL_VERSION,
    call_tool_result,
    initialize_result,
    negotiate_version,
    tools_list_result,
)

__all__ = [
    "LATEST_PROTOCOL_VERSION",
    "Message",
    "call_tool_result",
    "encode",
    "initialize_result",
    "make_error",
    "make_response",
    "negotiate_version",
    "parse_message",
    "tools_list_result",
]

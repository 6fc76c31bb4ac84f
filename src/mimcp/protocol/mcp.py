"""MCP result payloads, built with the official ``mcp.types`` models."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from mcp import types

from mimcp.types.tools import ToolDef, ToolResultData

LATEST_PROTOCOL_VERSION: str = types.LATEST_PROTOCOL_VERSION

SUPPORTED_PROTOCOL_VERSIONS: frozenset[str] = frozenset({
    "2024-11-05",
    "2025-03-26",
    "2025-06-18",
    LATEST_PROTOCOL_VERSION,
})


def _dump(model: types.Result) -> dict[str, Any]:
    return model.model_dump(by_alias=True, exclude_none=True, mode="json")


def negotiate_version(requested: Any) -> str:
    """Echo the client's version when supported, else offer the latest."""
    if isinstance(requested, str) and requested in SUPPORTED_PROTOCOL_VERSIONS:
        return requested
    return LATEST_PROTOCOL_VERSION


def initialize_result(
    *, server_name: str, server_version: str, protocol_version: str,
) -> dict[str, Any]:
    return _dump(types.InitializeResult(
        protocolVersion=protocol_version,
        capabilities=types.ServerCapabilities(
            tools=types.ToolsCapability(listChanged=False),
        ),
        serverInfo=types.Implementation(name=server_name, version=server_version),
    ))


def tool_schema(definition: ToolDef) -> types.Tool:
    return types.Tool(
        name=definition.name,
        description=definition.description,
        inputSchema=definition.input_schema(),
    )


def tools_list_result(definitions: Iterable[ToolDef]) -> dict[str, Any]:
    return _dump(types.ListToolsResult(tools=[tool_schema(d) for d in definitions]))


def call_tool_result(result: ToolResultData) -> dict[str, Any]:
    return _dump(types.CallToolResult(
        content=[types.TextContent(type="text", text=result.content)],
        isError=result.is_error,
    ))

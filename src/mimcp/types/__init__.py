"""Type definitions for mimcp."""

from mimcp.types.config import ServerConfig
from mimcp.types.errors import (
    ArgumentTypeMismatchError,
    DuplicateToolError,
    ErrorKind,
    MimcpError,
    MissingRequiredArgumentError,
    ProtocolParseError,
    RegistryFrozenError,
    RequestError,
    ToolExecutionError,
    TransportClosedError,
    UnknownToolError,
)
from mimcp.types.tools import (
    NO_DEFAULT,
    BoundArguments,
    InvocationRequest,
    JsonFetcher,
    ParamType,
    Tool,
    ToolContext,
    ToolDef,
    ToolParam,
    ToolResultData,
)

__all__ = [
    "ArgumentTypeMismatchError",
    "BoundArguments",
    "DuplicateToolError",
    "ErrorKind",
    "InvocationRequest",
    "JsonFetcher",
    "MimcpError",
    "MissingRequiredArgumentError",
    "NO_DEFAULT",
    "ParamType",
    "ProtocolParseError",
    "RegistryFrozenError",
    "RequestError",
    "ServerConfig",
    "Tool",
    "ToolContext",
    "ToolDef",
    "ToolExecutionError",
    "ToolParam",
    "ToolResultData",
    "TransportClosedError",
    "UnknownToolError",
]

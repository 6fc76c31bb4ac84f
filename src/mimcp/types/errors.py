"""Error taxonomy for the tool server."""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorKind(Enum):
    """Failure kinds reported to the client."""

    PROTOCOL_PARSE_ERROR = "ProtocolParseError"
    UNKNOWN_TOOL = "UnknownTool"
    MISSING_REQUIRED_ARGUMENT = "MissingRequiredArgument"
    ARGUMENT_TYPE_MISMATCH = "ArgumentTypeMismatch"
    TOOL_EXECUTION_ERROR = "ToolExecutionError"


class MimcpError(Exception):
    """Base class for all mimcp errors."""


class RequestError(MimcpError):
    """A failure tied to a single request; reported, never fatal."""

    kind: ErrorKind = ErrorKind.TOOL_EXECUTION_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_data(self) -> dict[str, Any]:
        """Structured payload placed in the JSON-RPC ``error.data`` field."""
        return {"kind": self.kind.value}


class ProtocolParseError(RequestError):
    """A frame that is not valid JSON or not a JSON-RPC 2.0 message."""

    kind = ErrorKind.PROTOCOL_PARSE_ERROR

    def __init__(
        self, message: str, *, invalid_json: bool = False, request_id: Any = None,
    ) -> None:
        super().__init__(message)
        self.invalid_json = invalid_json
        self.request_id = request_id


class UnknownToolError(RequestError):
    kind = ErrorKind.UNKNOWN_TOOL

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown tool: '{name}'")
        self.name = name

    def to_data(self) -> dict[str, Any]:
        return {"kind": self.kind.value, "tool": self.name}


class MissingRequiredArgumentError(RequestError):
    kind = ErrorKind.MISSING_REQUIRED_ARGUMENT

    def __init__(self, parameter: str) -> None:
        super().__init__(f"Missing required argument: '{parameter}'")
        self.parameter = parameter

    def to_data(self) -> dict[str, Any]:
        return {"kind": self.kind.value, "parameter": self.parameter}


class ArgumentTypeMismatchError(RequestError):
    kind = ErrorKind.ARGUMENT_TYPE_MISMATCH

    def __init__(self, parameter: str, expected: str, value: Any = None) -> None:
        super().__init__(
            f"Argument '{parameter}' must be of type {expected}, got {value!r}"
        )
        self.parameter = parameter
        self.expected = expected

    def to_data(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "parameter": self.parameter,
            "expected": self.expected,
        }


class ToolExecutionError(RequestError):
    """Raised by a tool body; the dispatcher turns it into an error result."""

    kind = ErrorKind.TOOL_EXECUTION_ERROR


class DuplicateToolError(MimcpError):
    """Two tools registered under the same name."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Tool '{name}' is already registered")
        self.name = name


class RegistryFrozenError(MimcpError):
    """Registration attempted after the registry was frozen."""


class TransportClosedError(MimcpError):
    """The transport can no longer carry messages."""

"""JSON-RPC 2.0 framing: one JSON object per line."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

from mcp.types import (
    INTERNAL_ERROR,
    INVALID_PARAMS,
    INVALID_REQUEST,
    METHOD_NOT_FOUND,
    PARSE_ERROR,
)

from mimcp.types.errors import ProtocolParseError

JSONRPC_VERSION = "2.0"

__all__ = [
    "INTERNAL_ERROR",
    "INVALID_PARAMS",
    "INVALID_REQUEST",
    "JSONRPC_VERSION",
    "METHOD_NOT_FOUND",
    "PARSE_ERROR",
    "Message",
    "encode",
    "make_error",
    "make_response",
    "parse_message",
]


@dataclass(frozen=True, slots=True)
class Message:
    """A validated inbound JSON-RPC message.

    ``id`` is absent for notifications; responses from the client (which this
    server never solicits) are flagged with ``is_response``.
    """

    method: str | None
    params: dict[str, Any] = field(default_factory=dict)
    id: Any = None
    has_id: bool = False
    is_response: bool = False

    @property
    def is_notification(self) -> bool:
        return not self.has_id and not self.is_response


def _valid_id(value: Any) -> bool:
    return value is None or (isinstance(value, (str, int)) and not isinstance(value, bool))


def parse_message(line: str | bytes) -> Message:
    """Decode and validate one frame.

    Raises ProtocolParseError (``invalid_json=True`` for undecodable input).
    When the frame is an object with a usable ``id``, that id is attached to
    the error so the reply can still be correlated.
    """
    try:
        data = json.loads(line)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise ProtocolParseError(f"Parse error: {exc}", invalid_json=True) from exc

    if not isinstance(data, dict):
        raise ProtocolParseError("Invalid Request: expected a JSON object")

    msg_id = data.get("id")
    has_id = "id" in data
    if data.get("jsonrpc") != JSONRPC_VERSION:
        raise _invalid("Invalid Request: missing or wrong 'jsonrpc' version", data)

    if "method" not in data:
        if has_id and ("result" in data or "error" in data):
            return Message(method=None, id=msg_id, has_id=True, is_response=True)
        raise _invalid("Invalid Request: missing 'method'", data)

    method = data["method"]
    if not isinstance(method, str) or not method:
        raise _invalid("Invalid Request: 'method' must be a non-empty string", data)
    if has_id and not _valid_id(msg_id):
        raise ProtocolParseError("Invalid Request: 'id' must be a string or integer")

    params = data.get("params")
    if params is None:
        params = {}
    elif not isinstance(params, dict):
        raise _invalid("Invalid Request: 'params' must be an object", data)

    return Message(method=method, params=params, id=msg_id, has_id=has_id)


def _invalid(message: str, data: dict[str, Any]) -> ProtocolParseError:
    request_id = data.get("id") if _valid_id(data.get("id")) else None
    return ProtocolParseError(message, request_id=request_id)


def make_response(request_id: Any, result: dict[str, Any]) -> dict[str, Any]:
    return {"jsonrpc": JSONRPC_VERSION, "id": request_id, "result": result}


def make_error(
    request_id: Any,
    code: int,
    message: str,
    data: Any = None,
) -> dict[str, Any]:
    error: dict[str, Any] = {"code": code, "message": message}
    if data is not None:
        error["data"] = data
    return {"jsonrpc": JSONRPC_VERSION, "id": request_id, "error": error}


def encode(message: dict[str, Any]) -> str:
    """Serialize a message as a single line (no embedded newlines)."""
    return json.dumps(message, ensure_ascii=False, separators=(",", ":"))

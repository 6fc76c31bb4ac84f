"""Tool definition types and protocols."""

from __future__ import annotations

import random
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Protocol, runtime_checkable

from mimcp.types.config import ServerConfig
from mimcp.types.errors import ErrorKind, RequestError


class ParamType(Enum):
    """Semantic parameter types, named as in JSON Schema."""

    INTEGER = "integer"
    NUMBER = "number"  # float
    STRING = "string"
    BOOLEAN = "boolean"


class _NoDefault:
    def __repr__(self) -> str:
        return "NO_DEFAULT"


NO_DEFAULT: Any = _NoDefault()


@dataclass(frozen=True, slots=True)
class ToolParam:
    """A parameter for a tool."""

    name: str
    type: ParamType
    description: str = ""
    required: bool = True
    default: Any = NO_DEFAULT

    def __post_init__(self) -> None:
        if not self.required and self.default is NO_DEFAULT:
            raise ValueError(f"Optional parameter '{self.name}' needs a default")

    @property
    def has_default(self) -> bool:
        return self.default is not NO_DEFAULT

    def json_schema(self) -> dict[str, Any]:
        schema: dict[str, Any] = {"type": self.type.value}
        if self.description:
            schema["description"] = self.description
        if self.has_default:
            schema["default"] = self.default
        return schema


@dataclass(frozen=True, slots=True)
class ToolDef:
    """Definition of a tool advertised to the client."""

    name: str
    description: str
    parameters: tuple[ToolParam, ...] = ()

    def __post_init__(self) -> None:
        seen: set[str] = set()
        for param in self.parameters:
            if param.name in seen:
                raise ValueError(
                    f"Duplicate parameter '{param.name}' in tool '{self.name}'"
                )
            seen.add(param.name)

    def input_schema(self) -> dict[str, Any]:
        """Render the parameters as a JSON Schema object."""
        return {
            "type": "object",
            "properties": {p.name: p.json_schema() for p in self.parameters},
            "required": [p.name for p in self.parameters if p.required],
        }


class BoundArguments(Mapping[str, Any]):
    """Read-only, fully typed arguments ready for a tool."""

    __slots__ = ("_values",)

    def __init__(self, values: Mapping[str, Any]) -> None:
        self._values = dict(values)

    def __getitem__(self, key: str) -> Any:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"BoundArguments({self._values!r})"


@dataclass(slots=True)
class ToolResultData:
    """Data returned from tool execution.

    ``is_error=False`` is the success variant and ``content`` is the payload.
    ``is_error=True`` is the failure variant and ``content`` is the message.
    """

    content: str
    is_error: bool = False
    error_kind: ErrorKind | None = None
    details: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def failure(
        cls, message: str, kind: ErrorKind = ErrorKind.TOOL_EXECUTION_ERROR,
    ) -> ToolResultData:
        return cls(content=message, is_error=True, error_kind=kind)

    @classmethod
    def from_error(cls, exc: RequestError) -> ToolResultData:
        return cls(
            content=exc.message, is_error=True, error_kind=exc.kind, details=exc.to_data(),
        )


@dataclass(frozen=True, slots=True)
class InvocationRequest:
    """One ``tools/call`` as received: raw arguments, opaque request id."""

    tool_name: str
    arguments: Mapping[str, Any] = field(default_factory=dict)
    request_id: Any = None


@runtime_checkable
class JsonFetcher(Protocol):
    """Outbound HTTP capability: GET a URL and decode the JSON body.

    Returns ``None`` when the resource does not exist (HTTP 404).
    """

    async def get_json(self, url: str) -> Any:
        ...


@dataclass(slots=True)
class ToolContext:
    """Context passed to tool execute methods."""

    config: ServerConfig = field(default_factory=ServerConfig)
    rng: random.Random = field(default_factory=random.SystemRandom)
    http: JsonFetcher | None = None
    request_id: Any = None


@runtime_checkable
class Tool(Protocol):
    """Protocol that all tools must implement."""

    @property
    def definition(self) -> ToolDef:
        """Return the tool definition advertised to the client."""
        ...

    async def execute(self, args: BoundArguments, ctx: ToolContext) -> ToolResultData:
        """Execute the tool with bound arguments and context."""
        ...

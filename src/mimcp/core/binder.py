"""Argument binding: raw JSON arguments to typed tool inputs."""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from typing import Any

from mimcp.types.errors import ArgumentTypeMismatchError, MissingRequiredArgumentError
from mimcp.types.tools import BoundArguments, ParamType, ToolParam


def _to_integer(value: Any) -> int:
    if isinstance(value, bool):
        raise TypeError("boolean is not an integer")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if value.is_integer():
            return int(value)
        raise ValueError("not integral")
    if isinstance(value, str):
        return int(value.strip())
    raise TypeError(type(value).__name__)


def _to_number(value: Any) -> float:
    if isinstance(value, bool):
        raise TypeError("boolean is not a number")
    if isinstance(value, (int, float)):
        result = float(value)
    elif isinstance(value, str):
        result = float(value.strip())
    else:
        raise TypeError(type(value).__name__)
    if not math.isfinite(result):
        raise ValueError("not finite")
    return result


def _to_string(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    raise TypeError(type(value).__name__)


def _to_boolean(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in ("true", "false"):
            return lowered == "true"
    raise TypeError(type(value).__name__)


_CONVERTERS = {
    ParamType.INTEGER: _to_integer,
    ParamType.NUMBER: _to_number,
    ParamType.STRING: _to_string,
    ParamType.BOOLEAN: _to_boolean,
}


def convert(param: ToolParam, value: Any) -> Any:
    """Convert one raw value to the parameter's declared type."""
    try:
        return _CONVERTERS[param.type](value)
    except (TypeError, ValueError, OverflowError) as exc:
        raise ArgumentTypeMismatchError(param.name, param.type.value, value) from exc


def bind_arguments(
    parameters: Sequence[ToolParam],
    raw: Mapping[str, Any] | None,
) -> BoundArguments:
    """Bind raw wire arguments against a tool's parameters.

    Parameters are processed in declaration order. A JSON ``null`` counts as
    absent. Names that match no parameter are ignored. Neither input is
    modified.

    Raises MissingRequiredArgumentError or ArgumentTypeMismatchError on the
    first parameter that cannot be bound.
    """
    raw = raw or {}
    bound: dict[str, Any] = {}
    for param in parameters:
        value = raw.get(param.name)
        if value is not None:
            bound[param.name] = convert(param, value)
        elif param.has_default:
            bound[param.name] = param.default
        else:
            raise MissingRequiredArgumentError(param.name)
    return BoundArguments(bound)

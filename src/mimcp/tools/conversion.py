"""Unit conversion tools."""

from __future__ import annotations

from mimcp.tools.base import BaseTool, format_number
from mimcp.types.tools import (
    BoundArguments,
    ParamType,
    ToolContext,
    ToolDef,
    ToolParam,
    ToolResultData,
)

_DEFINITION = ToolDef(
    name="ConvertirTemperatura",
    description="Convierte temperatura de Celsius a Fahrenheit.",
    parameters=(
        ToolParam(
            name="celsius",
            type=ParamType.NUMBER,
            description="Temperatura en grados Celsius",
        ),
    ),
)


class ConvertTemperatureTool(BaseTool):
    """F = C * 9/5 + 32."""

    @property
    def definition(self) -> ToolDef:
        return _DEFINITION

    async def execute(self, args: BoundArguments, ctx: ToolContext) -> ToolResultData:
        celsius: float = args["celsius"]
        fahrenheit = celsius * 9 / 5 + 32
        return self._ok(
            f"{format_number(celsius)} grados Celsius equivalen a "
            f"{format_number(fahrenheit)} grados Fahrenheit."
        )

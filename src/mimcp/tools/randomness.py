"""Random number tool."""

from __future__ import annotations

from mimcp.tools.base import BaseTool
from mimcp.types.tools import (
    BoundArguments,
    ParamType,
    ToolContext,
    ToolDef,
    ToolParam,
    ToolResultData,
)

_DEFINITION = ToolDef(
    name="GetRandomNumber",
    description="Genera un número aleatorio entre los valores mínimo y máximo especificados.",
    parameters=(
        ToolParam(
            name="min",
            type=ParamType.INTEGER,
            description="Valor mínimo (inclusivo)",
            required=False,
            default=0,
        ),
        ToolParam(
            name="max",
            type=ParamType.INTEGER,
            description="Valor máximo (exclusivo)",
            required=False,
            default=100,
        ),
    ),
)


class RandomNumberTool(BaseTool):
    """Draws an integer from the half-open range ``[min, max)``."""

    @property
    def definition(self) -> ToolDef:
        return _DEFINITION

    async def execute(self, args: BoundArguments, ctx: ToolContext) -> ToolResultData:
        low: int = args["min"]
        high: int = args["max"]
        if low >= high:
            return self._error(
                f"Error: el valor mínimo ({low}) debe ser menor que el máximo ({high})."
            )
        number = ctx.rng.randrange(low, high)
        return self._ok(f"Número aleatorio generado: {number}")

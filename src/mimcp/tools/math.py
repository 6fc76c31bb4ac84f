"""Arithmetic tool."""

from __future__ import annotations

import operator
from collections.abc import Callable

from mimcp.tools.base import BaseTool, format_number
from mimcp.types.tools import (
    BoundArguments,
    ParamType,
    ToolContext,
    ToolDef,
    ToolParam,
    ToolResultData,
)

_VALID_OPERATIONS = "suma, resta, multiplicacion, division"

_OPERATIONS: dict[str, Callable[[float, float], float]] = {
    "suma": operator.add,
    "resta": operator.sub,
    "multiplicacion": operator.mul,
    "division": operator.truediv,
}

_DEFINITION = ToolDef(
    name="Calcular",
    description="Realiza operaciones matemáticas básicas entre dos números.",
    parameters=(
        ToolParam(name="num1", type=ParamType.NUMBER, description="Primer número"),
        ToolParam(name="num2", type=ParamType.NUMBER, description="Segundo número"),
        ToolParam(
            name="operacion",
            type=ParamType.STRING,
            description=f"Operación a realizar: {_VALID_OPERATIONS}",
        ),
    ),
)


class CalculateTool(BaseTool):
    """Applies a named operation to two numbers."""

    @property
    def definition(self) -> ToolDef:
        return _DEFINITION

    async def execute(self, args: BoundArguments, ctx: ToolContext) -> ToolResultData:
        num1: float = args["num1"]
        num2: float = args["num2"]
        raw_op: str = args["operacion"]

        if not raw_op.strip():
            return self._error(
                f"Error: La operación no puede estar vacía. Use: {_VALID_OPERATIONS}."
            )

        op = raw_op.lower()
        func = _OPERATIONS.get(op)
        if func is None:
            return self._error(f"Error: Operación no válida. Use: {_VALID_OPERATIONS}.")
        if op == "division" and num2 == 0:
            return self._error("Error: No se puede dividir por cero.")

        result = func(num1, num2)
        return self._ok(
            f"El resultado de {format_number(num1)} {op} "
            f"{format_number(num2)} es {format_number(result)}"
        )

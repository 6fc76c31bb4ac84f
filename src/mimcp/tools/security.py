"""Password generation tool."""

from __future__ import annotations

import string

from mimcp.tools.base import BaseTool
from mimcp.types.tools import (
    BoundArguments,
    ParamType,
    ToolContext,
    ToolDef,
    ToolParam,
    ToolResultData,
)

PASSWORD_ALPHABET = string.ascii_uppercase + string.ascii_lowercase + string.digits + "!@#$%^&*"

_DEFINITION = ToolDef(
    name="GenerarContrasena",
    description="Genera una contraseña aleatoria de longitud especificada.",
    parameters=(
        ToolParam(
            name="longitud",
            type=ParamType.INTEGER,
            description="Longitud de la contraseña",
            required=False,
            default=8,
        ),
    ),
)


class PasswordTool(BaseTool):
    """Builds a password by drawing characters from PASSWORD_ALPHABET."""

    @property
    def definition(self) -> ToolDef:
        return _DEFINITION

    async def execute(self, args: BoundArguments, ctx: ToolContext) -> ToolResultData:
        length: int = args["longitud"]
        if length < 0:
            return self._error("Error: la longitud no puede ser negativa.")
        return self._ok("".join(ctx.rng.choice(PASSWORD_ALPHABET) for _ in range(length)))

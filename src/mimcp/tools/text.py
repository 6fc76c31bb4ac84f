"""Text analysis tools."""

from __future__ import annotations

import re

from mimcp.tools.base import BaseTool
from mimcp.types.tools import (
    BoundArguments,
    ParamType,
    ToolContext,
    ToolDef,
    ToolParam,
    ToolResultData,
)

# Only these four characters separate words; other Unicode spaces do not.
_SEPARATORS = re.compile(r"[ \t\n\r]+")

_DEFINITION = ToolDef(
    name="ContarPalabras",
    description="Cuenta el número de palabras en un texto proporcionado.",
    parameters=(
        ToolParam(
            name="texto",
            type=ParamType.STRING,
            description="Texto del que contar las palabras",
        ),
    ),
)


def count_words(text: str) -> int:
    return sum(1 for word in _SEPARATORS.split(text) if word)


class WordCountTool(BaseTool):
    """Counts whitespace-separated words."""

    @property
    def definition(self) -> ToolDef:
        return _DEFINITION

    async def execute(self, args: BoundArguments, ctx: ToolContext) -> ToolResultData:
        count = count_words(args["texto"])
        suffix = "" if count == 1 else "s"
        return self._ok(f"El texto contiene {count} palabra{suffix}.")

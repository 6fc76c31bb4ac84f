"""Base tool class with shared logic."""

from __future__ import annotations

from abc import ABC, abstractmethod

from mimcp.types.tools import BoundArguments, ToolContext, ToolDef, ToolResultData


class BaseTool(ABC):
    """Base class for all tools."""

    @property
    @abstractmethod
    def definition(self) -> ToolDef:
        ...

    @abstractmethod
    async def execute(self, args: BoundArguments, ctx: ToolContext) -> ToolResultData:
        ...

    def _error(self, msg: str) -> ToolResultData:
        return ToolResultData.failure(msg)

    def _ok(self, content: str) -> ToolResultData:
        return ToolResultData(content=content)


def format_number(value: float) -> str:
    """Render a number the way the tool messages show it: ``2`` rather than ``2.0``."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)

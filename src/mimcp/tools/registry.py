"""ToolRegistry — the fixed set of tools a server exposes."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from mimcp.types.errors import DuplicateToolError, RegistryFrozenError, UnknownToolError
from mimcp.types.tools import Tool, ToolDef

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ToolRegistration:
    """One descriptor paired with the implementation behind it."""

    definition: ToolDef
    tool: Tool

    @property
    def name(self) -> str:
        return self.definition.name


class ToolRegistry:
    """Registers tools at startup and resolves them by name.

    Usage::

        registry = build_default_registry()
        registration = registry.resolve("Calcular")
    """

    def __init__(self, tools: Iterable[Tool] = ()) -> None:
        self._registry: dict[str, ToolRegistration] = {}
        self._frozen = False
        for tool in tools:
            self.register(tool)

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register(self, tool: Tool) -> ToolRegistration:
        """Add a tool under its definition name.

        Raises DuplicateToolError if the name is taken and RegistryFrozenError
        once the registry has been frozen.
        """
        if self._frozen:
            raise RegistryFrozenError(
                f"Cannot register '{tool.definition.name}': registry is frozen"
            )
        definition = tool.definition
        if definition.name in self._registry:
            raise DuplicateToolError(definition.name)
        registration = ToolRegistration(definition=definition, tool=tool)
        self._registry[definition.name] = registration
        logger.debug("Registered tool %s", definition.name)
        return registration

    def freeze(self) -> ToolRegistry:
        """Reject any further registration. Returns self for chaining."""
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def resolve(self, name: str) -> ToolRegistration:
        """Return the registration for an exact, case-sensitive name."""
        registration = self._registry.get(name)
        if registration is None:
            raise UnknownToolError(name)
        return registration

    def list_definitions(self) -> list[ToolDef]:
        """Return all definitions in registration order."""
        return [r.definition for r in self._registry.values()]

    def names(self) -> list[str]:
        return list(self._registry)

    # ------------------------------------------------------------------
    # Dunder helpers
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._registry)

    def __contains__(self, name: object) -> bool:
        return name in self._registry

    def __repr__(self) -> str:
        return f"ToolRegistry(tools={list(self._registry)})"


def build_default_registry() -> ToolRegistry:
    """Create the registry holding every built-in tool, frozen."""
    from mimcp.tools.conversion import ConvertTemperatureTool
    from mimcp.tools.countries import (
        CapitalsByRegionTool,
        CountriesByRegionTool,
        CountryInfoTool,
        GetCapitalTool,
    )
    from mimcp.tools.math import CalculateTool
    from mimcp.tools.randomness import RandomNumberTool
    from mimcp.tools.security import PasswordTool
    from mimcp.tools.text import WordCountTool
    from mimcp.tools.weather import CityWeatherTool

    return ToolRegistry((
        RandomNumberTool(),
        CityWeatherTool(),
        CalculateTool(),
        ConvertTemperatureTool(),
        PasswordTool(),
        WordCountTool(),
        GetCapitalTool(),
        CountriesByRegionTool(),
        CapitalsByRegionTool(),
        CountryInfoTool(),
    )).freeze()

"""Simulated weather tool."""

from __future__ import annotations

from mimcp.tools.base import BaseTool
from mimcp.types.config import DEFAULT_WEATHER_CHOICES
from mimcp.types.tools import (
    BoundArguments,
    ParamType,
    ToolContext,
    ToolDef,
    ToolParam,
    ToolResultData,
)

_DEFINITION = ToolDef(
    name="GetCityWeather",
    description="Describe el clima aleatorio en la ciudad proporcionada.",
    parameters=(
        ToolParam(
            name="city",
            type=ParamType.STRING,
            description="Nombre de la ciudad para la que devolver el clima",
        ),
    ),
)


class CityWeatherTool(BaseTool):
    """Picks one of the configured weather labels at random."""

    @property
    def definition(self) -> ToolDef:
        return _DEFINITION

    async def execute(self, args: BoundArguments, ctx: ToolContext) -> ToolResultData:
        city: str = args["city"]
        choices = ctx.config.weather_choices or DEFAULT_WEATHER_CHOICES
        weather = choices[ctx.rng.randrange(len(choices))]
        return self._ok(f"El clima en {city} es {weather}.")

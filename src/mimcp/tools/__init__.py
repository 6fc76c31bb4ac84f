"""Built-in tools and the registry that exposes them."""

from mimcp.tools.base import BaseTool
from mimcp.tools.conversion import ConvertTemperatureTool
from mimcp.tools.countries import (
    CapitalsByRegionTool,
    CountriesByRegionTool,
    CountryInfoTool,
    GetCapitalTool,
)
from mimcp.tools.http import JsonHttpClient
from mimcp.tools.math import CalculateTool
from mimcp.tools.randomness import RandomNumberTool
from mimcp.tools.registry import ToolRegistration, ToolRegistry, build_default_registry
from mimcp.tools.security import PasswordTool
from mimcp.tools.text import WordCountTool
from mimcp.tools.weather import CityWeatherTool

__all__ = [
    "BaseTool",
    "CalculateTool",
    "CapitalsByRegionTool",
    "CityWeatherTool",
    "ConvertTemperatureTool",
    "CountriesByRegionTool",
    "CountryInfoTool",
    "GetCapitalTool",
    "JsonHttpClient",
    "PasswordTool",
    "RandomNumberTool",
    "ToolRegistration",
    "ToolRegistry",
    "WordCountTool",
    "build_default_registry",
]

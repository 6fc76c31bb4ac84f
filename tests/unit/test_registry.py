"""Tests for the tool registry."""

from __future__ import annotations

import pytest

from mimcp.tools.base import BaseTool
from mimcp.tools.math import CalculateTool
from mimcp.tools.registry import ToolRegistry, build_default_registry
from mimcp.tools.text import WordCountTool
from mimcp.types.errors import DuplicateToolError, RegistryFrozenError, UnknownToolError
from mimcp.types.tools import (
    BoundArguments,
    ParamType,
    Tool,
    ToolContext,
    ToolDef,
    ToolParam,
    ToolResultData,
)

EXPECTED_ORDER = [
    "GetRandomNumber",
    "GetCityWeather",
    "Calcular",
    "ConvertirTemperatura",
    "GenerarContrasena",
    "ContarPalabras",
    "GetCapital",
    "GetCountriesByRegion",
    "GetCapitalsByRegion",
    "GetCountryInfo",
]


class EchoTool(BaseTool):
    def __init__(self, name: str = "Echo") -> None:
        self._def = ToolDef(
            name=name,
            description="Echo the text back",
            parameters=(ToolParam(name="text", type=ParamType.STRING),),
        )

    @property
    def definition(self) -> ToolDef:
        return self._def

    async def execute(self, args: BoundArguments, ctx: ToolContext) -> ToolResultData:
        return self._ok(args["text"])


class TestToolRegistry:
    def test_empty(self):
        reg = ToolRegistry()
        assert len(reg) == 0
        assert reg.list_definitions() == []

    def test_register_and_resolve(self):
        reg = ToolRegistry()
        reg.register(EchoTool())
        registration = reg.resolve("Echo")
        assert registration.name == "Echo"
        assert registration.definition.name == "Echo"
        assert isinstance(registration.tool, EchoTool)
        assert "Echo" in reg

    def test_duplicate_rejected(self):
        reg = ToolRegistry([EchoTool()])
        with pytest.raises(DuplicateToolError, match="Echo"):
            reg.register(EchoTool())
        assert len(reg) == 1

    def test_resolve_unknown(self):
        reg = ToolRegistry([EchoTool()])
        with pytest.raises(UnknownToolError) as info:
            reg.resolve("Missing")
        assert info.value.name == "Missing"

    def test_resolve_is_case_sensitive(self):
        reg = ToolRegistry([EchoTool()])
        with pytest.raises(UnknownToolError):
            reg.resolve("echo")

    def test_listing_keeps_registration_order(self):
        reg = ToolRegistry([EchoTool("B"), EchoTool("A"), EchoTool("C")])
        assert [d.name for d in reg.list_definitions()] == ["B", "A", "C"]
        assert reg.names() == ["B", "A", "C"]

    def test_freeze(self):
        reg = ToolRegistry([EchoTool()]).freeze()
        assert reg.frozen
        with pytest.raises(RegistryFrozenError):
            reg.register(WordCountTool())
        assert len(reg) == 1

    def test_repr(self):
        reg = ToolRegistry([CalculateTool()])
        assert "Calcular" in repr(reg)


class TestDefaultRegistry:
    def test_contents_and_order(self, registry: ToolRegistry):
        assert [d.name for d in registry.list_definitions()] == EXPECTED_ORDER

    def test_frozen(self, registry: ToolRegistry):
        assert registry.frozen

    def test_every_listed_name_resolves(self, registry: ToolRegistry):
        for definition in registry.list_definitions():
            assert registry.resolve(definition.name).definition.name == definition.name

    def test_tools_satisfy_protocol(self, registry: ToolRegistry):
        for name in registry.names():
            assert isinstance(registry.resolve(name).tool, Tool)

    def test_descriptions_present(self, registry: ToolRegistry):
        for definition in registry.list_definitions():
            assert definition.description
            for param in definition.parameters:
                assert param.description

    def test_builds_independent_instances(self):
        assert build_default_registry() is not build_default_registry()

"""Tests for mimcp.types module."""

import pytest

from mimcp.types.config import DEFAULT_WEATHER_CHOICES, ServerConfig
from mimcp.types.errors import (
    ArgumentTypeMismatchError,
    ErrorKind,
    MissingRequiredArgumentError,
    UnknownToolError,
)
from mimcp.types.tools import (
    NO_DEFAULT,
    BoundArguments,
    ParamType,
    ToolDef,
    ToolParam,
    ToolResultData,
)


class TestToolParam:
    def test_required_param(self):
        p = ToolParam(name="city", type=ParamType.STRING, description="City")
        assert p.required is True
        assert p.default is NO_DEFAULT
        assert p.has_default is False

    def test_optional_param_needs_default(self):
        with pytest.raises(ValueError, match="needs a default"):
            ToolParam(name="limit", type=ParamType.INTEGER, required=False)

    def test_optional_param_with_none_default(self):
        p = ToolParam(name="limit", type=ParamType.INTEGER, required=False, default=None)
        assert p.has_default is True

    def test_json_schema(self):
        p = ToolParam(
            name="min", type=ParamType.INTEGER, description="Minimum",
            required=False, default=0,
        )
        assert p.json_schema() == {"type": "integer", "description": "Minimum", "default": 0}

    def test_json_schema_omits_empty_description(self):
        p = ToolParam(name="x", type=ParamType.NUMBER)
        assert p.json_schema() == {"type": "number"}


class TestToolDef:
    def test_duplicate_parameter_names_rejected(self):
        with pytest.raises(ValueError, match="Duplicate parameter 'a'"):
            ToolDef(
                name="Bad",
                description="",
                parameters=(
                    ToolParam(name="a", type=ParamType.STRING),
                    ToolParam(name="a", type=ParamType.INTEGER),
                ),
            )

    def test_input_schema(self):
        td = ToolDef(
            name="GetRandomNumber",
            description="Random",
            parameters=(
                ToolParam(name="min", type=ParamType.INTEGER, required=False, default=0),
                ToolParam(name="label", type=ParamType.STRING),
            ),
        )
        schema = td.input_schema()
        assert schema["type"] == "object"
        assert list(schema["properties"]) == ["min", "label"]
        assert schema["required"] == ["label"]

    def test_frozen(self):
        td = ToolDef(name="A", description="a")
        with pytest.raises(AttributeError):
            td.name = "B"  # type: ignore[misc]


class TestBoundArguments:
    def test_mapping_behaviour(self):
        bound = BoundArguments({"a": 1, "b": "x"})
        assert bound["a"] == 1
        assert list(bound) == ["a", "b"]
        assert len(bound) == 2
        assert bound == {"a": 1, "b": "x"}

    def test_does_not_alias_input(self):
        source = {"a": 1}
        bound = BoundArguments(source)
        source["a"] = 2
        assert bound["a"] == 1

    def test_read_only(self):
        bound = BoundArguments({"a": 1})
        with pytest.raises(TypeError):
            bound["a"] = 2  # type: ignore[index]


class TestToolResultData:
    def test_success(self):
        r = ToolResultData(content="ok")
        assert r.is_error is False
        assert r.error_kind is None

    def test_failure(self):
        r = ToolResultData.failure("boom")
        assert r.is_error is True
        assert r.error_kind is ErrorKind.TOOL_EXECUTION_ERROR

    def test_from_error(self):
        r = ToolResultData.from_error(ArgumentTypeMismatchError("num1", "number", "abc"))
        assert r.is_error is True
        assert r.error_kind is ErrorKind.ARGUMENT_TYPE_MISMATCH
        assert r.details == {
            "kind": "ArgumentTypeMismatch", "parameter": "num1", "expected": "number",
        }
        assert "num1" in r.content


class TestErrors:
    def test_unknown_tool_data(self):
        exc = UnknownToolError("Nope")
        assert exc.to_data() == {"kind": "UnknownTool", "tool": "Nope"}
        assert "Nope" in exc.message

    def test_missing_argument_data(self):
        exc = MissingRequiredArgumentError("city")
        assert exc.to_data() == {"kind": "MissingRequiredArgument", "parameter": "city"}


class TestServerConfig:
    def test_defaults(self):
        cfg = ServerConfig()
        assert cfg.weather_choices == DEFAULT_WEATHER_CHOICES
        assert cfg.countries_api == "https://restcountries.com/v3.1"
        assert cfg.otel_exporter == "none"

"""Tests for the mimcp command line."""

from __future__ import annotations

import json

from click.testing import CliRunner

from mimcp.cli.main import cli
from mimcp.types.config import SERVER_VERSION


class TestToolsCommand:
    def test_json_listing(self):
        result = CliRunner().invoke(cli, ["tools", "--json"])
        assert result.exit_code == 0
        payload = json.loads(result.output)
        names = [t["name"] for t in payload["tools"]]
        assert names[:3] == ["GetRandomNumber", "GetCityWeather", "Calcular"]
        assert "ContarPalabras" in names

    def test_table_listing(self):
        result = CliRunner().invoke(cli, ["tools"])
        assert result.exit_code == 0
        assert "GetCapital" in result.output


class TestRootCommand:
    def test_version(self):
        result = CliRunner().invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert SERVER_VERSION in result.output

    def test_help(self):
        result = CliRunner().invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "serve" in result.output

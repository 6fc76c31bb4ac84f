"""Tests for configuration loading."""

from __future__ import annotations

import logging

import pytest

from mimcp.core.config import load_env_config, load_server_config, parse_weather_choices
from mimcp.core.logs import LOGGER_NAME, configure_logging
from mimcp.types.config import DEFAULT_COUNTRIES_API, DEFAULT_WEATHER_CHOICES


class TestWeatherChoices:
    @pytest.mark.parametrize("raw", [None, "", "   ", " , ,"])
    def test_blank_falls_back(self, raw):
        assert parse_weather_choices(raw) == DEFAULT_WEATHER_CHOICES

    def test_parses_list(self):
        assert parse_weather_choices("soleado, nublado ,ventoso") == ("soleado", "nublado", "ventoso")


class TestEnvConfig:
    def test_empty_environment(self):
        assert load_env_config({}) == {}

    def test_all_variables(self):
        values = load_env_config({
            "WEATHER_CHOICES": "soleado",
            "MIMCP_COUNTRIES_API": "http://localhost:8080/v3.1/",
            "MIMCP_HTTP_TIMEOUT": "2.5",
            "MIMCP_LOG_LEVEL": "debug",
            "MIMCP_OTEL_EXPORTER": "Console",
            "OTEL_EXPORTER_OTLP_ENDPOINT": "http://collector:4317",
        })
        assert values == {
            "weather_choices": ("soleado",),
            "countries_api": "http://localhost:8080/v3.1",
            "http_timeout": 2.5,
            "log_level": "DEBUG",
            "otel_exporter": "console",
            "otlp_endpoint": "http://collector:4317",
        }

    def test_invalid_timeout_ignored(self):
        values = load_env_config({"MIMCP_HTTP_TIMEOUT": "soon"})
        assert "http_timeout" not in values

    def test_blank_weather_choices(self):
        assert load_env_config({"WEATHER_CHOICES": ""}) == {
            "weather_choices": DEFAULT_WEATHER_CHOICES,
        }


class TestServerConfig:
    def test_defaults(self):
        config = load_server_config({})
        assert config.countries_api == DEFAULT_COUNTRIES_API
        assert config.weather_choices == DEFAULT_WEATHER_CHOICES
        assert config.http_timeout == 30.0

    def test_overrides_beat_environment(self):
        config = load_server_config(
            {"MIMCP_LOG_LEVEL": "WARNING"}, log_level="ERROR", otel_exporter=None,
        )
        assert config.log_level == "ERROR"
        assert config.otel_exporter == "none"

    def test_reads_process_environment(self, monkeypatch):
        monkeypatch.setenv("MIMCP_LOG_LEVEL", "debug")
        monkeypatch.setenv("WEATHER_CHOICES", "despejado,brumoso")
        config = load_server_config(dotenv=False)
        assert config.log_level == "DEBUG"
        assert config.weather_choices == ("despejado", "brumoso")


class TestLogging:
    def test_single_handler(self):
        configure_logging("DEBUG", rich=False)
        logger = configure_logging("warning", rich=False)
        assert logger.name == LOGGER_NAME
        assert len(logger.handlers) == 1
        assert logger.level == logging.WARNING
        assert logger.propagate is False

    def test_rich_handler(self):
        from rich.logging import RichHandler

        logger = configure_logging("INFO")
        assert isinstance(logger.handlers[0], RichHandler)

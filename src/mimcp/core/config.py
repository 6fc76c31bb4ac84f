"""Configuration loading (.env file and environment variables)."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from typing import Any

from dotenv import load_dotenv

from mimcp.types.config import (
    DEFAULT_COUNTRIES_API,
    DEFAULT_WEATHER_CHOICES,
    ServerConfig,
)

logger = logging.getLogger(__name__)


def parse_weather_choices(raw: str | None) -> tuple[str, ...]:
    """Split a comma-separated label list; blank input means the defaults."""
    if raw is None or not raw.strip():
        return DEFAULT_WEATHER_CHOICES
    labels = tuple(label.strip() for label in raw.split(","))
    labels = tuple(label for label in labels if label)
    return labels or DEFAULT_WEATHER_CHOICES


def load_env_config(environ: Mapping[str, str] | None = None) -> dict[str, Any]:
    """Load configuration overrides from environment variables."""
    env = os.environ if environ is None else environ
    config: dict[str, Any] = {}

    if "WEATHER_CHOICES" in env:
        config["weather_choices"] = parse_weather_choices(env["WEATHER_CHOICES"])
    if api := env.get("MIMCP_COUNTRIES_API"):
        config["countries_api"] = api.rstrip("/") or DEFAULT_COUNTRIES_API
    if timeout := env.get("MIMCP_HTTP_TIMEOUT"):
        try:
            config["http_timeout"] = float(timeout)
        except ValueError:
            logger.warning("Ignoring invalid MIMCP_HTTP_TIMEOUT=%r", timeout)
    if level := env.get("MIMCP_LOG_LEVEL"):
        config["log_level"] = level.upper()
    if exporter := env.get("MIMCP_OTEL_EXPORTER"):
        config["otel_exporter"] = exporter.lower()
    if endpoint := env.get("OTEL_EXPORTER_OTLP_ENDPOINT"):
        config["otlp_endpoint"] = endpoint

    return config


def load_server_config(
    environ: Mapping[str, str] | None = None,
    *,
    dotenv: bool = True,
    **overrides: Any,
) -> ServerConfig:
    """Build the ServerConfig: defaults < environment (.env included) < overrides.

    ``.env`` never overrides variables already set in the process
    environment. It is skipped when an explicit ``environ`` is given.
    """
    if dotenv and environ is None:
        load_dotenv()
    values = load_env_config(environ)
    values.update({k: v for k, v in overrides.items() if v is not None})
    return ServerConfig(**values)

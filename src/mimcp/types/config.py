"""Configuration types for mimcp."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_WEATHER_CHOICES: tuple[str, ...] = ("templado", "lluvioso", "tormentoso")
DEFAULT_COUNTRIES_API = "https://restcountries.com/v3.1"
SERVER_VERSION = "0.1.0"


@dataclass(frozen=True, slots=True)
class ServerConfig:
    """Settings read once at startup."""

    server_name: str = "mimcp"
    server_version: str = SERVER_VERSION
    weather_choices: tuple[str, ...] = DEFAULT_WEATHER_CHOICES
    countries_api: str = DEFAULT_COUNTRIES_API
    http_timeout: float = 30.0
    log_level: str = "INFO"
    otel_exporter: str = "none"  # none | console | otlp
    otlp_endpoint: str = "http://localhost:4317"

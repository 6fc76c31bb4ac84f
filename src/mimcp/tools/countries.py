"""Country lookup tools backed by the REST Countries API.

Every expected failure (no match, missing field, network error, odd payload)
comes back as an error result; nothing here raises into the dispatcher.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import quote

import httpx

from mimcp.tools.base import BaseTool, format_number
from mimcp.types.tools import (
    BoundArguments,
    ParamType,
    ToolContext,
    ToolDef,
    ToolParam,
    ToolResultData,
)

_REGION_HINT = "Región (e.g., Europe, Asia, Africa, Americas, Oceania)"


class _UnexpectedPayload(ValueError):
    pass


def _number(value: Any) -> int | float:
    """Numeric field value, or 0 when it is missing or not a finite number."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    return value if math.isfinite(value) else 0


@dataclass(frozen=True, slots=True)
class CountryRecord:
    """The parts of a REST Countries record the tools use."""

    common_name: str | None
    capitals: tuple[str, ...] | None  # None when the field is absent
    population: int = 0
    area: float = 0.0
    currencies: dict[str, str] = field(default_factory=dict)
    languages: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_json(cls, data: Any) -> CountryRecord:
        if not isinstance(data, dict):
            raise _UnexpectedPayload(f"country record is {type(data).__name__}, not an object")
        name = data.get("name")
        common = name.get("common") if isinstance(name, dict) else None
        raw_capitals = data.get("capital")
        capitals = (
            tuple(str(c) for c in raw_capitals) if isinstance(raw_capitals, list) else None
        )
        raw_currencies = data.get("currencies")
        currencies = {
            str(code): str(info.get("name") or code) if isinstance(info, dict) else str(code)
            for code, info in (raw_currencies.items() if isinstance(raw_currencies, dict) else ())
        }
        raw_languages = data.get("languages")
        languages = (
            {str(k): str(v) for k, v in raw_languages.items()}
            if isinstance(raw_languages, dict) else {}
        )
        return cls(
            common_name=common if isinstance(common, str) and common else None,
            capitals=capitals,
            population=int(_number(data.get("population"))),
            area=float(_number(data.get("area"))),
            currencies=currencies,
            languages=languages,
        )

    @property
    def capital(self) -> str | None:
        return self.capitals[0] if self.capitals else None


def _segment(value: str) -> str:
    return quote(value.strip(), safe="")


async def fetch_countries(ctx: ToolContext, path: str) -> list[CountryRecord]:
    """GET ``{countries_api}/{path}``; a 404 or empty body yields ``[]``."""
    if ctx.http is None:
        raise RuntimeError("cliente HTTP no disponible")
    url = f"{ctx.config.countries_api.rstrip('/')}/{path}"
    payload = await ctx.http.get_json(url)
    if payload is None:
        return []
    if not isinstance(payload, list):
        raise _UnexpectedPayload(f"expected a list of countries, got {type(payload).__name__}")
    return [CountryRecord.from_json(item) for item in payload]


def _api_error(exc: Exception) -> str:
    return f"Error al consultar la API: {exc}"


# Network, HTTP status, JSON decoding and payload shape errors.
_LOOKUP_ERRORS = (httpx.HTTPError, ValueError, RuntimeError)


class _CountryTool(BaseTool):
    _definition: ToolDef

    @property
    def definition(self) -> ToolDef:
        return self._definition


class GetCapitalTool(_CountryTool):
    _definition = ToolDef(
        name="GetCapital",
        description="Obtiene la capital de un país especificado.",
        parameters=(
            ToolParam(
                name="countryName",
                type=ParamType.STRING,
                description="Nombre del país en inglés",
            ),
        ),
    )

    async def execute(self, args: BoundArguments, ctx: ToolContext) -> ToolResultData:
        country_name: str = args["countryName"]
        try:
            records = await fetch_countries(ctx, f"name/{_segment(country_name)}")
        except _LOOKUP_ERRORS as exc:
            return self._error(_api_error(exc))

        if not records:
            return self._error(f"No se encontró información para el país '{country_name}'.")
        country = records[0]
        if country.common_name is None:
            return self._error(f"No se pudo obtener el nombre del país '{country_name}'.")
        capital = country.capital or "Capital no disponible"
        return self._ok(f"La capital de {country.common_name} es {capital}.")


class CountriesByRegionTool(_CountryTool):
    _definition = ToolDef(
        name="GetCountriesByRegion",
        description="Lista los países de una región específica.",
        parameters=(
            ToolParam(name="region", type=ParamType.STRING, description=_REGION_HINT),
        ),
    )

    async def execute(self, args: BoundArguments, ctx: ToolContext) -> ToolResultData:
        region: str = args["region"]
        try:
            records = await fetch_countries(ctx, f"region/{_segment(region)}")
        except _LOOKUP_ERRORS as exc:
            return self._error(_api_error(exc))

        if not records:
            return self._error(f"No se encontraron países en la región '{region}'.")
        names = [r.common_name for r in records if r.common_name is not None]
        return self._ok(f"Países en {region}: {', '.join(names)}")


class CapitalsByRegionTool(_CountryTool):
    """Lists ``country: capital`` for a region.

    The region listing normally carries capitals. A record that omits the
    field entirely is looked up by name, so a call costs at most N+1 requests.
    """

    _definition = ToolDef(
        name="GetCapitalsByRegion",
        description="Obtiene las capitales de los países en una región específica.",
        parameters=(
            ToolParam(name="region", type=ParamType.STRING, description=_REGION_HINT),
        ),
    )

    async def execute(self, args: BoundArguments, ctx: ToolContext) -> ToolResultData:
        region: str = args["region"]
        try:
            records = await fetch_countries(ctx, f"region/{_segment(region)}")
            if not records:
                return self._error(f"No se encontraron países en la región '{region}'.")

            lines: list[str] = []
            for country in records:
                if country.common_name is None:
                    continue
                capital = country.capital
                if country.capitals is None:
                    capital = await self._lookup_capital(ctx, country.common_name)
                if capital:
                    lines.append(f"{country.common_name}: {capital}")
        except _LOOKUP_ERRORS as exc:
            return self._error(_api_error(exc))

        if not lines:
            return self._error(f"No se pudieron obtener capitales para la región '{region}'.")
        return self._ok(f"Capitales en {region}:\n" + "\n".join(lines))

    async def _lookup_capital(self, ctx: ToolContext, common_name: str) -> str | None:
        matches = await fetch_countries(ctx, f"name/{_segment(common_name)}?fullText=true")
        return matches[0].capital if matches else None


class CountryInfoTool(_CountryTool):
    _definition = ToolDef(
        name="GetCountryInfo",
        description="Obtiene población, área, monedas e idiomas de un país.",
        parameters=(
            ToolParam(
                name="countryName",
                type=ParamType.STRING,
                description="Nombre del país en inglés",
            ),
        ),
    )

    async def execute(self, args: BoundArguments, ctx: ToolContext) -> ToolResultData:
        country_name: str = args["countryName"]
        try:
            records = await fetch_countries(ctx, f"name/{_segment(country_name)}")
        except _LOOKUP_ERRORS as exc:
            return self._error(_api_error(exc))

        if not records:
            return self._error(f"No se encontró información para el país '{country_name}'.")
        country = records[0]
        if country.common_name is None:
            return self._error(f"No se pudo obtener el nombre del país '{country_name}'.")

        currencies = ", ".join(country.currencies.values()) or "No disponible"
        languages = ", ".join(country.languages.values()) or "No disponible"
        return self._ok(
            f"Información de {country.common_name}:\n"
            f"- Capital: {country.capital or 'Capital no disponible'}\n"
            f"- Población: {country.population}\n"
            f"- Área: {format_number(country.area)} km²\n"
            f"- Monedas: {currencies}\n"
            f"- Idiomas: {languages}"
        )

"""Test fixtures: in-memory transport, fake HTTP and a seeded tool context."""

from __future__ import annotations

import asyncio
import json
import random
from collections.abc import Callable
from typing import Any

import httpx
import pytest

from mimcp.core.dispatcher import Dispatcher
from mimcp.core.server import ToolServer
from mimcp.tools.http import JsonHttpClient
from mimcp.tools.registry import ToolRegistry, build_default_registry
from mimcp.types.config import ServerConfig
from mimcp.types.errors import TransportClosedError
from mimcp.types.tools import ToolContext


class MemoryTransport:
    """A scripted transport: feed lines in, read what the server wrote.

    Usage:
        transport = MemoryTransport()
        transport.feed({"jsonrpc": "2.0", "id": 1, "method": "ping"})
        transport.feed_eof(after=1)
        await server.run()
        assert transport.messages[0]["result"] == {}
    """

    def __init__(self, *, fail_writes: bool = False) -> None:
        self._incoming: asyncio.Queue[str | None] = asyncio.Queue()
        self.sent: list[str] = []
        self.started = False
        self.closed = False
        self.fail_writes = fail_writes
        self.on_write: Callable[[dict[str, Any]], None] | None = None
        self._eof_after: int | None = None

    def feed(self, message: dict[str, Any] | str) -> None:
        line = message if isinstance(message, str) else json.dumps(message)
        self._incoming.put_nowait(line)

    def feed_eof(self, *, after: int = 0) -> None:
        """Close the input once ``after`` responses have been written.

        The server cancels whatever is still running or queued at EOF, so
        scripted sessions hold the EOF back until their answers are out.
        """
        if len(self.sent) >= after:
            self._incoming.put_nowait(None)
        else:
            self._eof_after = after

    async def start(self) -> None:
        self.started = True

    async def read_line(self) -> str | None:
        return await self._incoming.get()

    async def write_line(self, line: str) -> None:
        if self.fail_writes:
            raise TransportClosedError("peer went away")
        assert "\n" not in line
        self.sent.append(line)
        if self.on_write is not None:
            self.on_write(json.loads(line))
        if self._eof_after is not None and len(self.sent) >= self._eof_after:
            self._eof_after = None
            self._incoming.put_nowait(None)

    async def close(self) -> None:
        self.closed = True

    @property
    def messages(self) -> list[dict[str, Any]]:
        return [json.loads(line) for line in self.sent]

    def by_id(self) -> dict[Any, dict[str, Any]]:
        return {m.get("id"): m for m in self.messages}


class CountriesApi:
    """Fake REST Countries API for httpx.MockTransport.

    ``countries`` maps a lower-case country name to its record; ``regions``
    maps a lower-case region to a list of records. Unknown paths answer 404.
    """

    def __init__(
        self,
        countries: dict[str, dict[str, Any]] | None = None,
        regions: dict[str, list[dict[str, Any]]] | None = None,
    ) -> None:
        self.countries = countries or {}
        self.regions = regions or {}
        self.requests: list[httpx.Request] = []
        self.fail_with: Exception | None = None
        self.status_override: int | None = None

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.fail_with is not None:
            raise self.fail_with
        if self.status_override is not None:
            return httpx.Response(self.status_override, json={"message": "boom"})

        parts = request.url.path.strip("/").split("/")
        # /v3.1/name/<country> or /v3.1/region/<region>
        kind, key = parts[-2], parts[-1].lower()
        if kind == "name" and key in self.countries:
            return httpx.Response(200, json=[self.countries[key]])
        if kind == "region" and key in self.regions:
            return httpx.Response(200, json=self.regions[key])
        return httpx.Response(404, json={"status": 404, "message": "Not Found"})


def country(name: str, capital: str | None = None, **extra: Any) -> dict[str, Any]:
    record: dict[str, Any] = {"name": {"common": name}}
    if capital is not None:
        record["capital"] = [capital]
    record.update(extra)
    return record


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def config() -> ServerConfig:
    return ServerConfig()


@pytest.fixture
def countries_api() -> CountriesApi:
    return CountriesApi(
        countries={
            "peru": country(
                "Peru", "Lima",
                population=32971846, area=1285216.0,
                currencies={"PEN": {"name": "Peruvian sol", "symbol": "S/ "}},
                languages={"aym": "Aymara", "que": "Quechua", "spa": "Spanish"},
            ),
            "france": country("France", "Paris"),
            "antarctica": {"name": {"common": "Antarctica"}, "population": 1000},
            "nameless": {"capital": ["Nowhere"]},
        },
        regions={
            "europe": [country("France", "Paris"), country("Spain", "Madrid")],
            "antarctic": [{"name": {"common": "Antarctica"}, "capital": []}],
            "americas": [country("Peru", "Lima"), {"name": {"common": "France"}}],
        },
    )


@pytest.fixture
def http(countries_api: CountriesApi) -> JsonHttpClient:
    return JsonHttpClient(
        client=httpx.AsyncClient(transport=httpx.MockTransport(countries_api)),
    )


@pytest.fixture
def ctx(config: ServerConfig, rng: random.Random, http: JsonHttpClient) -> ToolContext:
    return ToolContext(config=config, rng=rng, http=http)


@pytest.fixture
def registry() -> ToolRegistry:
    return build_default_registry()


@pytest.fixture
def dispatcher(registry: ToolRegistry, ctx: ToolContext) -> Dispatcher:
    return Dispatcher(registry, ctx)


@pytest.fixture
def transport() -> MemoryTransport:
    return MemoryTransport()


@pytest.fixture
def server(dispatcher: Dispatcher, transport: MemoryTransport) -> ToolServer:
    return ToolServer(dispatcher, transport)


def initialize_request(request_id: Any = 0) -> dict[str, Any]:
    return {
        "jsonrpc": "2.0",
        "id": request_id,
        "method": "initialize",
        "params": {
            "protocolVersion": "2025-06-18",
            "capabilities": {},
            "clientInfo": {"name": "pytest", "version": "1.0"},
        },
    }


def call_request(request_id: Any, name: str, arguments: Any = None) -> dict[str, Any]:
    params: dict[str, Any] = {"name": name}
    if arguments is not None:
        params["arguments"] = arguments
    return {"jsonrpc": "2.0", "id": request_id, "method": "tools/call", "params": params}

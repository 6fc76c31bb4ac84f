"""Engine: wires registry, HTTP client, dispatcher and transport, then serves."""

from __future__ import annotations

import contextlib
import logging
import random

from mimcp.core.dispatcher import Dispatcher
from mimcp.core.server import ToolServer
from mimcp.observability.exporters import configure_exporters
from mimcp.observability.exporters import shutdown as shutdown_exporters
from mimcp.tools.http import JsonHttpClient
from mimcp.tools.registry import ToolRegistry, build_default_registry
from mimcp.transport.base import Transport
from mimcp.transport.stdio import StdioTransport
from mimcp.types.config import ServerConfig
from mimcp.types.tools import JsonFetcher, ToolContext

logger = logging.getLogger(__name__)

# One uniform source shared by every tool call; SystemRandom is thread-safe.
_SHARED_RNG = random.SystemRandom()


async def serve(
    config: ServerConfig | None = None,
    *,
    transport: Transport | None = None,
    registry: ToolRegistry | None = None,
    rng: random.Random | None = None,
    http: JsonFetcher | None = None,
    handle_signals: bool = True,
) -> None:
    """Run one MCP session until the client disconnects or a signal arrives.

    Collaborators default to the production ones (stdio, the built-in tools,
    a shared SystemRandom and an httpx client) and can be swapped for fakes.
    """
    config = config or ServerConfig()
    registry = registry if registry is not None else build_default_registry()
    exporters_on = configure_exporters(config)

    async with contextlib.AsyncExitStack() as stack:
        if http is None:
            http = await stack.enter_async_context(
                JsonHttpClient(timeout=config.http_timeout)
            )
        context = ToolContext(config=config, rng=rng or _SHARED_RNG, http=http)
        server = ToolServer(
            Dispatcher(registry, context),
            transport or StdioTransport(),
            handle_signals=handle_signals,
        )
        logger.info(
            "Starting %s v%s with %d tools",
            config.server_name, config.server_version, len(registry),
        )
        try:
            await server.run()
        finally:
            if exporters_on:
                shutdown_exporters()

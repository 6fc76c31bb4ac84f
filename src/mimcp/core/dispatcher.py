"""Dispatcher — resolves, binds, invokes and frames one request at a time.

States::

    INITIALIZING -> AWAITING_REQUEST -> BINDING -> INVOKING -> RESPONDING
                         ^                                         |
                         +-----------------------------------------+

Every JSON-RPC request yields exactly one response dict; notifications and
stray client responses yield None. A tool that raises never takes the
dispatcher down: the exception becomes an ``isError`` result.
"""

from __future__ import annotations

import dataclasses
import logging
import time
from enum import Enum
from typing import Any

from mimcp.core.binder import bind_arguments
from mimcp.observability.metrics import record_tool_call
from mimcp.observability.tracing import span
from mimcp.protocol.jsonrpc import (
    INVALID_PARAMS,
    INVALID_REQUEST,
    METHOD_NOT_FOUND,
    Message,
    make_error,
    make_response,
)
from mimcp.protocol.mcp import (
    call_tool_result,
    initialize_result,
    negotiate_version,
    tools_list_result,
)
from mimcp.tools.registry import ToolRegistry
from mimcp.types.errors import ErrorKind, RequestError
from mimcp.types.tools import InvocationRequest, ToolContext, ToolResultData

logger = logging.getLogger(__name__)

# Failures the protocol reports as JSON-RPC errors rather than tool results.
_PROTOCOL_LEVEL_KINDS = frozenset({
    ErrorKind.UNKNOWN_TOOL,
    ErrorKind.MISSING_REQUIRED_ARGUMENT,
    ErrorKind.ARGUMENT_TYPE_MISMATCH,
})


class DispatcherState(Enum):
    INITIALIZING = "initializing"
    AWAITING_REQUEST = "awaiting_request"
    BINDING = "binding"
    INVOKING = "invoking"
    RESPONDING = "responding"
    CLOSED = "closed"


class Dispatcher:
    """Routes MCP methods to the registry.

    Usage::

        dispatcher = Dispatcher(build_default_registry(), ToolContext())
        response = await dispatcher.handle(parse_message(line))
    """

    def __init__(self, registry: ToolRegistry, context: ToolContext) -> None:
        self._registry = registry
        self._context = context
        self._state = DispatcherState.INITIALIZING
        self._client_name: str | None = None
        self._protocol_version: str | None = None

    @property
    def state(self) -> DispatcherState:
        return self._state

    @property
    def initialized(self) -> bool:
        return self._state not in (DispatcherState.INITIALIZING, DispatcherState.CLOSED)

    @property
    def protocol_version(self) -> str | None:
        return self._protocol_version

    def close(self) -> None:
        self._state = DispatcherState.CLOSED

    # ------------------------------------------------------------------
    # Message routing
    # ------------------------------------------------------------------

    async def handle(self, msg: Message) -> dict[str, Any] | None:
        """Handle one validated message; return the response to write, if any."""
        if msg.is_response:
            logger.debug("Ignoring unsolicited response id=%r", msg.id)
            return None
        if msg.is_notification:
            self._handle_notification(msg)
            return None

        method = msg.method
        if method == "initialize":
            return make_response(msg.id, self._initialize(msg.params))
        if method == "ping":
            return make_response(msg.id, {})

        if not self.initialized:
            logger.warning("Rejecting %s before initialize", method)
            return make_error(
                msg.id, INVALID_REQUEST,
                "Server not initialized: send 'initialize' first",
            )

        if method == "tools/list":
            definitions = self._registry.list_definitions()
            logger.debug("Advertising %d tools", len(definitions))
            return make_response(msg.id, tools_list_result(definitions))
        if method == "tools/call":
            return await self._handle_tools_call(msg)

        return make_error(msg.id, METHOD_NOT_FOUND, f"Method not found: {method}")

    def _handle_notification(self, msg: Message) -> None:
        if msg.method in ("notifications/initialized", "initialized"):
            logger.info("Client %s ready", self._client_name or "?")
        else:
            logger.debug("Ignoring notification %s", msg.method)

    def _initialize(self, params: dict[str, Any]) -> dict[str, Any]:
        client_info = params.get("clientInfo")
        if isinstance(client_info, dict):
            self._client_name = client_info.get("name")
        requested = params.get("protocolVersion")
        self._protocol_version = negotiate_version(requested)
        if self.initialized:
            logger.warning("Client re-sent initialize")
        logger.info(
            "Client initialize: %s requested=%s negotiated=%s",
            self._client_name or "?", requested, self._protocol_version,
        )
        self._state = DispatcherState.AWAITING_REQUEST
        config = self._context.config
        return initialize_result(
            server_name=config.server_name,
            server_version=config.server_version,
            protocol_version=self._protocol_version,
        )

    async def _handle_tools_call(self, msg: Message) -> dict[str, Any]:
        name = msg.params.get("name")
        if not isinstance(name, str) or not name:
            return make_error(msg.id, INVALID_PARAMS, "Missing tool name")
        arguments = msg.params.get("arguments")
        if arguments is None:
            arguments = {}
        elif not isinstance(arguments, dict):
            return make_error(msg.id, INVALID_PARAMS, "'arguments' must be an object")

        try:
            result = await self.invoke(
                InvocationRequest(tool_name=name, arguments=arguments, request_id=msg.id)
            )
            if result.error_kind in _PROTOCOL_LEVEL_KINDS:
                return make_error(msg.id, INVALID_PARAMS, result.content, result.details)
            return make_response(msg.id, call_tool_result(result))
        finally:
            if self._state is not DispatcherState.CLOSED:
                self._state = DispatcherState.AWAITING_REQUEST

    # ------------------------------------------------------------------
    # Invocation
    # ------------------------------------------------------------------

    async def invoke(self, request: InvocationRequest) -> ToolResultData:
        """Resolve, bind and run one tool; never raises for tool failures."""
        started = time.monotonic()
        with span(
            "mimcp.tool_call",
            {"mimcp.tool": request.tool_name, "mimcp.request_id": str(request.request_id)},
        ) as s:
            result = await self._invoke(request)
            if self._state is not DispatcherState.CLOSED:
                self._state = DispatcherState.RESPONDING
            kind = result.error_kind.value if result.error_kind else None
            if kind:
                s.set_attribute("mimcp.error_kind", kind)

        elapsed_ms = (time.monotonic() - started) * 1000
        record_tool_call(request.tool_name, error_kind=kind, latency_ms=elapsed_ms)
        if result.is_error:
            logger.warning(
                "Tool %s failed (%s) in %.1fms: %s",
                request.tool_name, kind, elapsed_ms, result.content,
            )
        else:
            logger.info("Tool %s ok in %.1fms", request.tool_name, elapsed_ms)
        return result

    async def _invoke(self, request: InvocationRequest) -> ToolResultData:
        self._state = DispatcherState.BINDING
        try:
            registration = self._registry.resolve(request.tool_name)
            args = bind_arguments(registration.definition.parameters, request.arguments)
        except RequestError as exc:
            return ToolResultData.from_error(exc)

        self._state = DispatcherState.INVOKING
        ctx = dataclasses.replace(self._context, request_id=request.request_id)
        try:
            result = await registration.tool.execute(args, ctx)
        except RequestError as exc:
            return ToolResultData.from_error(exc)
        except Exception as exc:  # noqa: BLE001
            logger.exception("Tool %s raised", request.tool_name)
            return ToolResultData.failure(
                f"Tool '{request.tool_name}' raised an unexpected error: "
                f"{type(exc).__name__}: {exc}"
            )

        if result.is_error and result.error_kind is None:
            result.error_kind = ErrorKind.TOOL_EXECUTION_ERROR
        return result

"""ToolServer — the session loop tying Transport and Dispatcher together.

Flow:
  1. A reader task pulls lines from the transport, parses them and queues
     them; ``notifications/cancelled`` is acted on immediately.
  2. The main loop takes one message at a time, lets the Dispatcher handle it
     and writes the single response before taking the next.
  3. Stdin EOF, a failed read, a shutdown signal or ``close()`` cancels the
     tool in flight, drops whatever is still queued and stops at once.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import signal
from typing import Any

from mimcp.core.dispatcher import Dispatcher
from mimcp.protocol.jsonrpc import (
    INTERNAL_ERROR,
    INVALID_REQUEST,
    PARSE_ERROR,
    Message,
    encode,
    make_error,
    parse_message,
)
from mimcp.transport.base import Transport
from mimcp.types.errors import ProtocolParseError, TransportClosedError

logger = logging.getLogger(__name__)

class ToolServer:
    """Serves one MCP session over a transport.

    Usage::

        server = ToolServer(dispatcher, StdioTransport())
        await server.run()
    """

    def __init__(
        self,
        dispatcher: Dispatcher,
        transport: Transport,
        *,
        handle_signals: bool = False,
    ) -> None:
        self._dispatcher = dispatcher
        self._transport = transport
        self._handle_signals = handle_signals
        self._queue: asyncio.Queue[Any] = asyncio.Queue()
        self._shutdown = asyncio.Event()
        self._inflight_id: Any = None
        self._inflight: asyncio.Task[Any] | None = None
        self._pending_ids: set[Any] = set()
        self._cancelled_ids: set[Any] = set()
        self._handled = 0

    @property
    def dispatcher(self) -> Dispatcher:
        return self._dispatcher

    @property
    def handled(self) -> int:
        """Number of messages taken off the queue so far."""
        return self._handled

    def close(self) -> None:
        """Request shutdown; the in-flight tool call is cancelled."""
        if not self._shutdown.is_set():
            logger.info("Shutdown requested")
        self._shutdown.set()

    # ------------------------------------------------------------------
    # Main loop
    # ------------------------------------------------------------------

    async def run(self) -> None:
        """Serve until EOF, ``close()`` or a signal.

        Raises TransportClosedError only when the ``initialize`` response
        cannot be written.
        """
        await self._transport.start()
        if self._handle_signals:
            self._install_signal_handlers()

        reader = asyncio.create_task(self._read_loop(), name="mimcp-reader")
        logger.info("Server ready")
        try:
            while not self._shutdown.is_set():
                getter = asyncio.create_task(self._queue.get())
                if not await self._until_shutdown(getter):
                    break
                item = getter.result()
                self._handled += 1
                if not await self._process(item):
                    break
        finally:
            reader.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await reader
            if self._inflight is not None and not self._inflight.done():
                self._inflight.cancel()
            self._dispatcher.close()
            await self._transport.close()
            logger.info("Server stopped after %d messages", self._handled)

    async def _read_loop(self) -> None:
        """Feed the queue until the transport closes, then shut the session down."""
        try:
            await self._read_frames()
        except Exception:
            logger.exception("Reading from the transport failed")
        else:
            logger.info("EOF on input, shutting down")
        self.close()

    async def _read_frames(self) -> None:
        while True:
            try:
                line = await self._transport.read_line()
            except ProtocolParseError as exc:
                await self._queue.put(exc)
                continue
            except TransportClosedError:
                return
            if line is None:
                return
            if not line.strip():
                continue
            try:
                msg = parse_message(line)
            except ProtocolParseError as exc:
                await self._queue.put(exc)
                continue
            if msg.method == "notifications/cancelled" and msg.is_notification:
                self._cancel_request(msg.params.get("requestId"), msg.params.get("reason"))
                continue
            if msg.has_id:
                self._pending_ids.add(msg.id)
            await self._queue.put(msg)

    async def _process(self, item: Message | ProtocolParseError) -> bool:
        """Handle one queued item. Returns False when the session must end."""
        if isinstance(item, ProtocolParseError):
            code = PARSE_ERROR if item.invalid_json else INVALID_REQUEST
            logger.warning("Protocol error: %s", item.message)
            return await self._write(
                make_error(item.request_id, code, item.message, item.to_data()),
                fatal=False,
            )

        if item.has_id:
            self._pending_ids.discard(item.id)
        if item.has_id and item.id in self._cancelled_ids:
            self._cancelled_ids.discard(item.id)
            logger.info("Skipping request %r cancelled before it started", item.id)
            return True

        task = asyncio.create_task(self._dispatcher.handle(item))
        self._inflight_id, self._inflight = (item.id if item.has_id else None), task
        try:
            if not await self._until_shutdown(task):
                logger.info("Abandoned in-flight %s on shutdown", item.method)
                return False
        finally:
            self._inflight_id, self._inflight = None, None

        if task.cancelled():
            logger.info("Request %r cancelled by client; no response sent", item.id)
            self._cancelled_ids.discard(item.id)
            return True

        exc = task.exception()
        if exc is not None:
            logger.error("Unhandled error for %s", item.method, exc_info=exc)
            response: dict[str, Any] | None = (
                make_error(item.id, INTERNAL_ERROR, str(exc)) if item.has_id else None
            )
        else:
            response = task.result()

        if response is None:
            return True
        return await self._write(response, fatal=item.method == "initialize")

    async def _write(self, message: dict[str, Any], *, fatal: bool) -> bool:
        try:
            await self._transport.write_line(encode(message))
        except TransportClosedError:
            if fatal:
                logger.critical("Cannot answer initialize: transport closed")
                raise
            logger.info("Transport closed by peer")
            return False
        return True

    async def _until_shutdown(self, task: asyncio.Task[Any]) -> bool:
        """Wait for ``task``; cancel it and return False if shutdown wins."""
        stopper = asyncio.create_task(self._shutdown.wait())
        try:
            await asyncio.wait({task, stopper}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            stopper.cancel()
        if task.done():
            return True
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task
        return False

    # ------------------------------------------------------------------
    # Cancellation
    # ------------------------------------------------------------------

    def _cancel_request(self, request_id: Any, reason: Any) -> None:
        if not isinstance(request_id, (str, int)) or isinstance(request_id, bool):
            return
        logger.info("Client cancelled request %r (%s)", request_id, reason or "no reason")
        if self._inflight is not None and self._inflight_id == request_id:
            self._inflight.cancel()
        elif request_id in self._pending_ids:
            self._cancelled_ids.add(request_id)
        else:
            # Already answered or never seen.
            logger.debug("Ignoring cancel for request %r: nothing to cancel", request_id)

    def _install_signal_handlers(self) -> None:
        loop = asyncio.get_running_loop()
        for sig in (signal.SIGINT, signal.SIGTERM):
            try:
                loop.add_signal_handler(sig, self.close)
            except NotImplementedError:
                pass  # Windows

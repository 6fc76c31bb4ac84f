"""STDIO transport: frames on stdin/stdout, never anything else on stdout."""

from __future__ import annotations

import asyncio
import logging
import sys
from typing import IO, Any

from mimcp.types.errors import ProtocolParseError, TransportClosedError

logger = logging.getLogger(__name__)

MAX_FRAME_BYTES = 4 * 1024 * 1024


class StdioTransport:
    """Reads requests from stdin and writes responses to stdout.

    While started, ``sys.stdout`` is pointed at stderr so a stray ``print``
    cannot corrupt the protocol stream.
    """

    def __init__(
        self,
        stdin: IO[bytes] | None = None,
        stdout: IO[bytes] | None = None,
    ) -> None:
        self._stdin = stdin
        self._stdout = stdout
        self._reader: asyncio.StreamReader | None = None
        self._saved_stdout: Any = None
        self._closed = False

    async def start(self) -> None:
        stdin = self._stdin or sys.stdin.buffer
        if self._stdout is None:
            self._stdout = sys.stdout.buffer
            self._saved_stdout = sys.stdout
            sys.stdout = sys.stderr

        loop = asyncio.get_running_loop()
        reader = asyncio.StreamReader(limit=MAX_FRAME_BYTES)
        try:
            await loop.connect_read_pipe(
                lambda: asyncio.StreamReaderProtocol(reader), stdin,
            )
            self._reader = reader
        except ValueError:
            # Regular files (``mimcp serve < requests.jsonl``) are not pipes.
            logger.debug("stdin is not a pipe; reading it from a worker thread")
            self._reader = None
        self._stdin = stdin
        logger.info("STDIO transport started")

    async def read_line(self) -> str | None:
        if self._closed:
            return None
        if self._reader is None:
            raw = await asyncio.to_thread(self._stdin.readline)  # type: ignore[union-attr]
        else:
            try:
                raw = await self._reader.readline()
            except ValueError as exc:
                raise ProtocolParseError(
                    f"Parse error: frame exceeds {MAX_FRAME_BYTES} bytes",
                    invalid_json=True,
                ) from exc
        if not raw:
            return None
        return raw.decode("utf-8", errors="replace")

    async def write_line(self, line: str) -> None:
        if self._closed or self._stdout is None:
            raise TransportClosedError("stdout transport is closed")
        try:
            self._stdout.write(line.encode("utf-8") + b"\n")
            self._stdout.flush()
        except (BrokenPipeError, ConnectionResetError, ValueError) as exc:
            self._closed = True
            raise TransportClosedError(f"stdout closed: {exc}") from exc

    async def close(self) -> None:
        if self._closed and self._saved_stdout is None:
            return
        self._closed = True
        if self._saved_stdout is not None:
            sys.stdout = self._saved_stdout
            self._saved_stdout = None
        logger.info("STDIO transport closed")

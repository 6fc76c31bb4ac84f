"""Transport protocol: a line-oriented, bidirectional channel."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class Transport(Protocol):
    """Carries protocol frames, one per line, and nothing else.

    ``read_line`` returns ``None`` at end of input. ``write_line`` raises
    TransportClosedError once the peer has gone away.
    """

    async def start(self) -> None:
        ...

    async def read_line(self) -> str | None:
        ...

    async def write_line(self, line: str) -> None:
        ...

    async def close(self) -> None:
        ...

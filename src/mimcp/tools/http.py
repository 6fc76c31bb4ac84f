"""Outbound HTTP capability for lookup tools."""

from __future__ import annotations

from typing import Any

import httpx

USER_AGENT = "mimcp/0.1"


class JsonHttpClient:
    """GET a URL and decode its JSON body.

    A 404 answer returns ``None``; any other failure raises an httpx error.
    The client is shared by every tool call of a session and closed with it.

    Usage::

        async with JsonHttpClient(timeout=30.0) as http:
            data = await http.get_json("https://restcountries.com/v3.1/name/peru")
    """

    def __init__(
        self,
        *,
        timeout: float = 30.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._client = client or httpx.AsyncClient(
            follow_redirects=True,
            timeout=timeout,
            headers={"User-Agent": USER_AGENT, "Accept": "application/json"},
        )

    async def get_json(self, url: str) -> Any:
        resp = await self._client.get(url)
        if resp.status_code == httpx.codes.NOT_FOUND:
            return None
        resp.raise_for_status()
        return resp.json()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> JsonHttpClient:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.aclose()

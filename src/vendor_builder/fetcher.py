"""Async HTTP fetching of remote pattern sources."""

from __future__ import annotations

import httpx

from vendor_builder.errors import NetworkError
from vendor_builder.logging import get_logger

logger = get_logger("fetcher")


class RemoteFetcher:
    """Downloads remote files over one shared ``httpx.AsyncClient``.

    Unlike a best-effort client, every failure raises :class:`NetworkError`:
    a missing remote file must abort the build.
    """

    def __init__(
        self,
        timeout: float = 60.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._timeout = timeout
        self._client = client
        self._owns_client = client is None

    async def __aenter__(self) -> RemoteFetcher:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self._timeout),
                follow_redirects=True,
            )
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the underlying HTTP client if this fetcher created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def fetch_text(self, url: str) -> str:
        """GET *url* and return the response body as text."""
        if self._client is None:
            raise RuntimeError("RemoteFetcher used outside of 'async with'")

        logger.debug("Fetching %s", url)
        try:
            resp = await self._client.get(url)
        except httpx.HTTPError as exc:
            raise NetworkError(url, reason=str(exc) or type(exc).__name__) from exc

        if resp.status_code >= 400:
            raise NetworkError(url, status=resp.status_code)

        return resp.text

"""Network boundary: given a URL and headers, return status and body."""

from __future__ import annotations

from typing import Mapping, Optional, Protocol

import httpx

from .config import Settings
from .errors import TransportError
from .log import log_debug
from .models import FetchResponse

NO_CACHE_HEADERS = {"Cache-Control": "no-cache", "Pragma": "no-cache"}


class Fetcher(Protocol):
    async def fetch(self, url: str, headers: Mapping[str, str]) -> FetchResponse:
        ...


class HttpxFetcher:
    """Fetcher backed by a shared httpx.AsyncClient.

    Non-2xx responses are returned, not raised; callers decide whether a bad
    status is fatal. Anything that prevents a response (DNS, refused
    connection, timeout) becomes TransportError.
    """

    def __init__(self, settings: Optional[Settings] = None, client: Optional[httpx.AsyncClient] = None):
        settings = settings or Settings()
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=settings.timeout,
            headers={"User-Agent": settings.user_agent},
            follow_redirects=True,
        )

    async def fetch(self, url: str, headers: Mapping[str, str]) -> FetchResponse:
        log_debug(f"GET {url}")
        try:
            response = await self._client.get(url, headers=dict(headers))
        except httpx.TimeoutException as exc:
            raise TransportError(url, "timed out") from exc
        except httpx.HTTPError as exc:
            raise TransportError(url, str(exc) or type(exc).__name__) from exc
        except httpx.InvalidURL as exc:
            # Not an HTTPError; raised before any request is sent
            raise TransportError(url, f"invalid URL: {exc}") from exc
        log_debug(f"HTTP {response.status_code} ({len(response.content)} bytes) from {url}")
        return FetchResponse(status=response.status_code, body=response.text)

    async def aclose(self):
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "HttpxFetcher":
        return self

    async def __aexit__(self, *exc_info):
        await self.aclose()

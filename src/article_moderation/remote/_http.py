"""Shared httpx plumbing for the remote service clients."""

from __future__ import annotations

import contextlib
from typing import TYPE_CHECKING

import httpx

from article_moderation.errors import ExternalUnavailableError, RemoteServiceError

if TYPE_CHECKING:
    from collections.abc import Iterator


@contextlib.contextmanager
def translate_http_errors(service: str) -> Iterator[None]:
    """Map httpx failures onto moderation error kinds.

    Transport failures (including timeouts) are transient. An error status
    from the remote side is surfaced to the caller as-is.
    """
    try:
        yield
    except httpx.HTTPStatusError as exc:
        raise RemoteServiceError(
            f"{service} responded with HTTP {exc.response.status_code}",
            status_code=exc.response.status_code,
        ) from exc
    except httpx.TransportError as exc:
        raise ExternalUnavailableError(f"{service} is not available") from exc


class ServiceClient:
    """Owns an httpx.AsyncClient bound to one remote service."""

    service_name = "Remote service"

    def __init__(
        self,
        base_url: str,
        timeout: float,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(base_url=base_url, timeout=timeout)

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()

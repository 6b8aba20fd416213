"""Pre-flight checks for the remote services the moderation core depends on."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING
from urllib.parse import urlparse

import httpx

if TYPE_CHECKING:
    from article_moderation.config import Settings

logger = logging.getLogger(__name__)


async def _probe(client: httpx.AsyncClient, name: str, url: str, env_var: str) -> str | None:
    """Return a failure description, or None when the service looks usable."""
    if not url:
        return f"{env_var} is not set, add it to .env (see .env.example)"
    if url.startswith("https://"):
        return None
    parsed = urlparse(url)
    try:
        await client.get(f"{parsed.scheme}://{parsed.netloc}/")
    except httpx.TransportError:
        return f"{name} is not reachable at {parsed.netloc}"
    return None


async def check_dependencies(settings: Settings) -> bool:
    """Verify remote dependencies are configured and reachable. Return False if any are not."""
    failures: list[str] = []
    if not settings.storage.connection_string:
        failures.append("AZURE_STORAGE_CONNECTION_STRING is not set, add it to .env (see .env.example)")

    async with httpx.AsyncClient(timeout=3) as client:
        for name, url, env_var in (
            ("Creator directory", settings.directory.url, "CREATOR_DIRECTORY_URL"),
            ("Article service", settings.publisher.url, "PUBLISH_SINK_URL"),
        ):
            failure = await _probe(client, name, url, env_var)
            if failure:
                failures.append(failure)

    if failures:
        for failure in failures:
            logger.error(failure)
        return False
    return True

"""HTTP client for the publishing service."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from article_moderation.remote._http import ServiceClient, translate_http_errors

if TYPE_CHECKING:
    import httpx

    from article_moderation.config import PublishSinkConfig
    from article_moderation.models.article import PublishArticleRequest

logger = logging.getLogger(__name__)


class HttpPublishSink(ServiceClient):
    """Submit accepted articles to the article service."""

    service_name = "Article service"

    def __init__(
        self,
        config: PublishSinkConfig,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        super().__init__(config.url, config.timeout, client=client)

    async def submit(self, request: PublishArticleRequest) -> None:
        with translate_http_errors(self.service_name):
            response = await self._client.post("/internal/articles", json=request.to_payload())
            response.raise_for_status()
        logger.debug("Submitted article for creator %d", request.creator_id)

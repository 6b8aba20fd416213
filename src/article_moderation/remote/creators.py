"""HTTP client for the creator directory service."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import httpx

from article_moderation.errors import RemoteServiceError
from article_moderation.models.article import Creator
from article_moderation.remote._http import ServiceClient, translate_http_errors

if TYPE_CHECKING:
    from collections.abc import Sequence

    from article_moderation.config import CreatorDirectoryConfig

logger = logging.getLogger(__name__)


class HttpCreatorDirectory(ServiceClient):
    """Resolve creator names through the profile service."""

    service_name = "Creator directory"

    def __init__(
        self,
        config: CreatorDirectoryConfig,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        super().__init__(config.url, config.timeout, client=client)

    async def get_many(self, creator_ids: Sequence[int]) -> dict[int, Creator]:
        """Resolve a batch of creators.

        The service answers with a bare list of names in request order. The
        pairing with IDs happens here, once, after checking the lengths agree,
        so callers only ever see creators keyed by ID.
        """
        ids = list(dict.fromkeys(creator_ids))
        if not ids:
            return {}
        with translate_http_errors(self.service_name):
            response = await self._client.get(
                "/internal/profile/usernames",
                params={"ids": ids},
            )
            response.raise_for_status()
        names = self._decode_json(response)
        if not isinstance(names, list) or not all(isinstance(n, str) for n in names):
            raise RemoteServiceError(f"{self.service_name} returned a malformed name list")
        if len(names) != len(ids):
            raise RemoteServiceError(
                f"{self.service_name} returned {len(names)} names for {len(ids)} creator IDs"
            )
        logger.debug("Resolved %d creators", len(ids))
        return {
            creator_id: Creator(id=creator_id, name=name)
            for creator_id, name in zip(ids, names, strict=True)
        }

    async def get_one(self, creator_id: int) -> Creator:
        with translate_http_errors(self.service_name):
            response = await self._client.get(f"/internal/profile/{creator_id}/username")
            response.raise_for_status()
        name = self._decode_name(response)
        return Creator(id=creator_id, name=name)

    def _decode_json(self, response: httpx.Response) -> object:
        try:
            return response.json()
        except ValueError as exc:
            raise RemoteServiceError(f"{self.service_name} returned invalid JSON") from exc

    def _decode_name(self, response: httpx.Response) -> str:
        # The username endpoint may answer with plain text or a JSON string.
        if response.headers.get("content-type", "").startswith("application/json"):
            name = self._decode_json(response)
            if not isinstance(name, str):
                raise RemoteServiceError(f"{self.service_name} returned a malformed username")
            return name
        return response.text

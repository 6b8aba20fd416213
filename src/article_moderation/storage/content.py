"""Azure Blob Storage content store, one text blob per article."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from azure.core.exceptions import AzureError, ResourceNotFoundError
from azure.storage.blob import StorageErrorCode
from azure.storage.blob.aio import BlobServiceClient, ContainerClient

from article_moderation.errors import ExternalUnavailableError

if TYPE_CHECKING:
    from article_moderation.config import StorageConfig

logger = logging.getLogger(__name__)


def blob_name(article_id: int) -> str:
    return f"articles/{article_id}.txt"


def _is_missing_blob(exc: AzureError) -> bool:
    """Return True only when the blob itself is absent, not its container."""
    return (
        isinstance(exc, ResourceNotFoundError)
        and getattr(exc, "error_code", None) == StorageErrorCode.BLOB_NOT_FOUND
    )


class BlobContentStore:
    """Stores article bodies as UTF-8 blobs in a single container."""

    def __init__(
        self,
        config: StorageConfig,
        *,
        container: ContainerClient | None = None,
    ) -> None:
        self._config = config
        self._service: BlobServiceClient | None = None
        self._container = container

    async def initialize(self) -> None:
        """Create the service client and obtain the container reference."""
        if self._container is not None:
            return
        self._service = BlobServiceClient.from_connection_string(self._config.connection_string)
        self._container = self._service.get_container_client(self._config.container)
        logger.info("Content store using container %s", self._config.container)

    async def close(self) -> None:
        if self._container is not None:
            await self._container.close()
        if self._service is not None:
            await self._service.close()
        self._container = None
        self._service = None

    @property
    def container(self) -> ContainerClient:
        if self._container is None:
            raise RuntimeError("BlobContentStore not initialized, call initialize() first")
        return self._container

    async def get(self, article_id: int) -> str | None:
        """Return the article body, or None when no blob exists."""
        try:
            downloader = await self.container.download_blob(blob_name(article_id))
            data = await downloader.readall()
        except AzureError as exc:
            if _is_missing_blob(exc):
                return None
            raise ExternalUnavailableError(
                f"Failed to fetch content for article with ID {article_id} from blob storage",
                article_id=article_id,
            ) from exc
        return data.decode("utf-8") if isinstance(data, bytes) else data

    async def put(self, article_id: int, content: str) -> None:
        try:
            await self.container.upload_blob(
                blob_name(article_id),
                content.encode("utf-8"),
                overwrite=True,
            )
        except AzureError as exc:
            raise ExternalUnavailableError(
                f"Failed to save content for article with ID {article_id} in blob storage",
                article_id=article_id,
            ) from exc

    async def delete(self, article_id: int) -> None:
        try:
            await self.container.delete_blob(blob_name(article_id))
        except AzureError as exc:
            if _is_missing_blob(exc):
                logger.debug("Content for article %d already absent on delete", article_id)
                return
            raise ExternalUnavailableError(
                f"Failed to remove content for article with ID {article_id} from blob storage",
                article_id=article_id,
            ) from exc

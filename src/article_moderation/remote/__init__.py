"""Remote service contracts and their HTTP clients."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from article_moderation.remote.creators import HttpCreatorDirectory
from article_moderation.remote.publisher import HttpPublishSink

if TYPE_CHECKING:
    from collections.abc import Sequence

    from article_moderation.models.article import Creator, PublishArticleRequest


@runtime_checkable
class CreatorDirectory(Protocol):
    """Looks up creator display data by creator ID."""

    async def get_many(self, creator_ids: Sequence[int]) -> dict[int, Creator]:
        """Resolve a batch of creators, keyed by ID."""
        ...

    async def get_one(self, creator_id: int) -> Creator:
        """Resolve a single creator."""
        ...


@runtime_checkable
class PublishSink(Protocol):
    """Accepts finished articles for permanent publication."""

    async def submit(self, request: PublishArticleRequest) -> None:
        """Hand an accepted article to the publishing service."""
        ...


__all__ = [
    "CreatorDirectory",
    "HttpCreatorDirectory",
    "HttpPublishSink",
    "PublishSink",
]

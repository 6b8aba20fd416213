"""Store contracts and their implementations."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from article_moderation.models.summary import SummaryRecord
from article_moderation.storage.content import BlobContentStore
from article_moderation.storage.database import SummaryDatabase
from article_moderation.storage.summaries import SqliteSummaryStore


@runtime_checkable
class SummaryStore(Protocol):
    """Persists article summaries keyed by article ID."""

    async def list_by_creator(self, creator_id: int, page: int) -> list[SummaryRecord]:
        """Return one page of a creator's summaries, empty past the last page."""
        ...

    async def list_all(self, page: int) -> list[SummaryRecord]:
        """Return one page of all summaries, empty past the last page."""
        ...

    async def get(self, article_id: int) -> SummaryRecord | None:
        """Return the summary, or None when absent."""
        ...

    async def exists_for_creator(self, article_id: int, creator_id: int) -> bool:
        """Return True if the summary exists and belongs to the creator."""
        ...

    async def insert(self, record: SummaryRecord) -> int:
        """Persist a new summary and return its generated ID."""
        ...

    async def update(self, record: SummaryRecord) -> SummaryRecord:
        """Persist changes to an existing summary."""
        ...

    async def delete(self, article_id: int, expected_version: int | None = None) -> bool:
        """Delete the summary. Return False if there was nothing to delete.

        With ``expected_version``, a row at any other version is left in place
        and ConcurrentUpdateError is raised.
        """
        ...

    async def exists(self, article_id: int) -> bool:
        """Return True if a summary with this ID exists."""
        ...


@runtime_checkable
class ContentStore(Protocol):
    """Persists article bodies as opaque text keyed by article ID."""

    async def get(self, article_id: int) -> str | None:
        """Return the body, or None when absent."""
        ...

    async def put(self, article_id: int, content: str) -> None:
        """Create or replace the body."""
        ...

    async def delete(self, article_id: int) -> None:
        """Delete the body. Deleting a missing body is not an error."""
        ...


__all__ = [
    "BlobContentStore",
    "ContentStore",
    "SqliteSummaryStore",
    "SummaryDatabase",
    "SummaryStore",
]

"""SQLite-backed summary store."""

from __future__ import annotations

import contextlib
import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING

import aiosqlite

from article_moderation.errors import (
    ArticleNotFoundError,
    ConcurrentUpdateError,
    ExternalUnavailableError,
)
from article_moderation.models.summary import SummaryRecord, status_from_code, status_to_code

if TYPE_CHECKING:
    from collections.abc import Iterator

    from article_moderation.storage.database import SummaryDatabase

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 10

_COLUMNS = "id, title, creator_id, created_at, status, moderator_comment, version"


@contextlib.contextmanager
def _store_errors(action: str, article_id: int | None = None) -> Iterator[None]:
    """Translate SQLite failures into ExternalUnavailableError."""
    try:
        yield
    except aiosqlite.Error as exc:
        raise ExternalUnavailableError(
            f"Summary store failed to {action}: {exc}", article_id=article_id
        ) from exc


def _to_utc(value: datetime) -> datetime:
    return value if value.tzinfo else value.replace(tzinfo=UTC)


class SqliteSummaryStore:
    """Provide data access for the article_summaries table."""

    def __init__(self, database: SummaryDatabase, page_size: int = DEFAULT_PAGE_SIZE) -> None:
        self._database = database
        self._page_size = page_size

    @property
    def page_size(self) -> int:
        return self._page_size

    @staticmethod
    def _from_row(row: aiosqlite.Row) -> SummaryRecord:
        return SummaryRecord(
            id=row["id"],
            title=row["title"],
            creator_id=row["creator_id"],
            created_at=_to_utc(datetime.fromisoformat(row["created_at"])),
            status=status_from_code(row["status"]),
            moderator_comment=row["moderator_comment"],
            version=row["version"],
        )

    def _page_bounds(self, page: int) -> tuple[int, int]:
        return self._page_size, (page - 1) * self._page_size

    async def _fetch_all(self, sql: str, params: tuple[object, ...]) -> list[SummaryRecord]:
        async with self._database.connection.execute(sql, params) as cursor:
            rows = await cursor.fetchall()
        return [self._from_row(row) for row in rows]

    async def list_by_creator(self, creator_id: int, page: int) -> list[SummaryRecord]:
        """Fetch one page of summaries written by a creator."""
        limit, offset = self._page_bounds(page)
        with _store_errors("list summaries by creator"):
            return await self._fetch_all(
                f"SELECT {_COLUMNS} FROM article_summaries"  # noqa: S608
                " WHERE creator_id = ? ORDER BY id ASC LIMIT ? OFFSET ?",
                (creator_id, limit, offset),
            )

    async def list_all(self, page: int) -> list[SummaryRecord]:
        """Fetch one page of all summaries."""
        limit, offset = self._page_bounds(page)
        with _store_errors("list summaries"):
            return await self._fetch_all(
                f"SELECT {_COLUMNS} FROM article_summaries"  # noqa: S608
                " ORDER BY id ASC LIMIT ? OFFSET ?",
                (limit, offset),
            )

    async def get(self, article_id: int) -> SummaryRecord | None:
        with _store_errors("read summary", article_id):
            records = await self._fetch_all(
                f"SELECT {_COLUMNS} FROM article_summaries WHERE id = ?",  # noqa: S608
                (article_id,),
            )
        return records[0] if records else None

    async def exists_for_creator(self, article_id: int, creator_id: int) -> bool:
        with _store_errors("check ownership", article_id):
            async with self._database.connection.execute(
                "SELECT 1 FROM article_summaries WHERE id = ? AND creator_id = ?",
                (article_id, creator_id),
            ) as cursor:
                return await cursor.fetchone() is not None

    async def exists(self, article_id: int) -> bool:
        with _store_errors("check existence", article_id):
            async with self._database.connection.execute(
                "SELECT 1 FROM article_summaries WHERE id = ?",
                (article_id,),
            ) as cursor:
                return await cursor.fetchone() is not None

    async def insert(self, record: SummaryRecord) -> int:
        """Insert a new summary and return the generated ID."""
        connection = self._database.connection
        with _store_errors("insert summary"):
            async with connection.execute(
                "INSERT INTO article_summaries"
                " (title, creator_id, created_at, status, moderator_comment, version)"
                " VALUES (?, ?, ?, ?, ?, ?)",
                (
                    record.title,
                    record.creator_id,
                    _to_utc(record.created_at).isoformat(),
                    status_to_code(record.status),
                    record.moderator_comment,
                    record.version,
                ),
            ) as cursor:
                article_id = cursor.lastrowid
            await connection.commit()
        if article_id is None:
            raise ExternalUnavailableError("Summary store did not return a generated ID")
        record.id = article_id
        return article_id

    async def update(self, record: SummaryRecord) -> SummaryRecord:
        """Write mutable fields back, guarded by the record's version."""
        if record.id is None:
            raise ValueError("Cannot update a summary that was never inserted")
        connection = self._database.connection
        with _store_errors("update summary", record.id):
            async with connection.execute(
                "UPDATE article_summaries"
                " SET status = ?, moderator_comment = ?, version = version + 1"
                " WHERE id = ? AND version = ?",
                (
                    status_to_code(record.status),
                    record.moderator_comment,
                    record.id,
                    record.version,
                ),
            ) as cursor:
                updated = cursor.rowcount
            await connection.commit()
        if updated == 0:
            if not await self.exists(record.id):
                raise ArticleNotFoundError(record.id)
            raise ConcurrentUpdateError(
                f"Summary {record.id} was modified concurrently", article_id=record.id
            )
        record.version += 1
        return record

    async def delete(self, article_id: int, expected_version: int | None = None) -> bool:
        """Delete the summary, optionally only if it is still at ``expected_version``.

        A version mismatch on an existing row raises ConcurrentUpdateError and
        leaves the row in place.
        """
        sql = "DELETE FROM article_summaries WHERE id = ?"
        params: tuple[object, ...] = (article_id,)
        if expected_version is not None:
            sql += " AND version = ?"
            params = (article_id, expected_version)
        connection = self._database.connection
        with _store_errors("delete summary", article_id):
            async with connection.execute(sql, params) as cursor:
                deleted = cursor.rowcount > 0
            await connection.commit()
        if not deleted:
            if expected_version is not None and await self.exists(article_id):
                raise ConcurrentUpdateError(
                    f"Summary {article_id} was modified concurrently", article_id=article_id
                )
            logger.debug("Summary %d already absent on delete", article_id)
        return deleted

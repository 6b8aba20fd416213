"""SQLite connection for the summary store."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import aiosqlite

if TYPE_CHECKING:
    from article_moderation.config import DatabaseConfig

logger = logging.getLogger(__name__)

_SCHEMA = (
    """
    CREATE TABLE IF NOT EXISTS article_summaries (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        title TEXT NOT NULL,
        creator_id INTEGER NOT NULL,
        created_at TEXT NOT NULL,
        status INTEGER NOT NULL,
        moderator_comment TEXT NULL,
        version INTEGER NOT NULL DEFAULT 1
    )
    """,
    "CREATE INDEX IF NOT EXISTS article_summaries_creator_id_index"
    " ON article_summaries (creator_id)",
)


class SummaryDatabase:
    """Manages the aiosqlite connection and the summary table."""

    def __init__(self, config: DatabaseConfig) -> None:
        self._config = config
        self._connection: aiosqlite.Connection | None = None

    async def initialize(self) -> None:
        """Open the connection and create the table if it is missing."""
        self._connection = await aiosqlite.connect(self._config.path)
        self._connection.row_factory = aiosqlite.Row
        for statement in _SCHEMA:
            await self._connection.execute(statement)
        await self._connection.commit()
        logger.info("Summary database ready at %s", self._config.path)

    async def close(self) -> None:
        """Close the underlying connection."""
        if self._connection:
            await self._connection.close()
            self._connection = None

    @property
    def connection(self) -> aiosqlite.Connection:
        if self._connection is None:
            raise RuntimeError("SummaryDatabase not initialized, call initialize() first")
        return self._connection

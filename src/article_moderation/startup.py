"""Wiring of the moderation service and its collaborators."""

from __future__ import annotations

import contextlib
import logging
from typing import TYPE_CHECKING

import aiosqlite

from article_moderation.config import Settings, load_settings
from article_moderation.health import check_dependencies
from article_moderation.logging import configure_logging
from article_moderation.remote import HttpCreatorDirectory, HttpPublishSink
from article_moderation.services import ArticleModerationService
from article_moderation.storage import BlobContentStore, SqliteSummaryStore, SummaryDatabase

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

logger = logging.getLogger(__name__)


async def init_database(settings: Settings) -> SummaryDatabase:
    """Open the summary database, raising ConnectionError if it cannot be opened."""
    database = SummaryDatabase(settings.database)
    try:
        await database.initialize()
    except (aiosqlite.Error, OSError) as exc:
        raise ConnectionError(f"Cannot open summary database at {settings.database.path}") from exc
    return database


async def init_content_store(settings: Settings) -> BlobContentStore:
    store = BlobContentStore(settings.storage)
    await store.initialize()
    return store


def init_remote_clients(settings: Settings) -> tuple[HttpCreatorDirectory, HttpPublishSink]:
    return HttpCreatorDirectory(settings.directory), HttpPublishSink(settings.publisher)


@contextlib.asynccontextmanager
async def open_moderation_service(
    settings: Settings | None = None,
) -> AsyncIterator[ArticleModerationService]:
    """Build the moderation service for the lifetime of the context.

    Every collaborator opened here is closed on exit, in reverse order.
    """
    settings = settings or load_settings()
    configure_logging(settings.app.log_level)

    if settings.app.is_development and not await check_dependencies(settings):
        raise RuntimeError("Moderation dependencies are not available")

    async with contextlib.AsyncExitStack() as stack:
        database = await init_database(settings)
        stack.push_async_callback(database.close)

        contents = await init_content_store(settings)
        stack.push_async_callback(contents.close)

        creators, publisher = init_remote_clients(settings)
        stack.push_async_callback(creators.close)
        stack.push_async_callback(publisher.close)

        service = ArticleModerationService(
            SqliteSummaryStore(database, page_size=settings.app.page_size),
            contents,
            creators,
            publisher,
        )
        logger.info("Moderation service ready (env=%s)", settings.app.env)
        yield service
        logger.info("Moderation service shutting down")

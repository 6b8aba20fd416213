"""Tests for moderation service wiring."""

import dataclasses
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from article_moderation.config import (
    AppConfig,
    CreatorDirectoryConfig,
    DatabaseConfig,
    PublishSinkConfig,
    Settings,
    StorageConfig,
)
from article_moderation.services import ArticleModerationService
from article_moderation.startup import init_database, open_moderation_service


def _settings(tmp_path, *, env: str = "production") -> Settings:
    return Settings(
        database=DatabaseConfig(path=str(tmp_path / "moderation.db")),
        storage=StorageConfig(connection_string="UseDevelopmentStorage=true", container="content"),
        directory=CreatorDirectoryConfig(url="http://localhost:8081", timeout=1.0),
        publisher=PublishSinkConfig(url="http://localhost:8082", timeout=1.0),
        app=AppConfig(env=env, log_level="INFO", page_size=5),
    )


async def test_init_database_unopenable_path_raises_connection_error(tmp_path):
    settings = _settings(tmp_path)
    settings = dataclasses.replace(
        settings, database=DatabaseConfig(path=str(tmp_path / "missing" / "moderation.db"))
    )

    with pytest.raises(ConnectionError, match="Cannot open summary database"):
        await init_database(settings)


async def test_open_moderation_service_wires_and_closes(tmp_path):
    """The service is built from settings and every collaborator is closed on exit."""
    settings = _settings(tmp_path)
    content_store = MagicMock()
    content_store.close = AsyncMock()

    with (
        patch("article_moderation.startup.configure_logging") as configure,
        patch(
            "article_moderation.startup.init_content_store",
            new=AsyncMock(return_value=content_store),
        ),
        patch("article_moderation.startup.HttpCreatorDirectory.close", new=AsyncMock()) as close_dir,
        patch("article_moderation.startup.HttpPublishSink.close", new=AsyncMock()) as close_pub,
        patch("article_moderation.startup.check_dependencies", new=AsyncMock()) as check,
    ):
        async with open_moderation_service(settings) as service:
            assert isinstance(service, ArticleModerationService)
            assert await service.list_creator_summaries(1, 1) == []

    configure.assert_called_once_with("INFO")
    check.assert_not_called()
    content_store.close.assert_awaited_once()
    close_dir.assert_awaited_once()
    close_pub.assert_awaited_once()


async def test_open_moderation_service_stops_when_dependencies_missing(tmp_path):
    settings = _settings(tmp_path, env="development")

    with (
        patch("article_moderation.startup.configure_logging"),
        patch("article_moderation.startup.check_dependencies", new=AsyncMock(return_value=False)),
        patch("article_moderation.startup.init_database", new=AsyncMock()) as init_db,
        pytest.raises(RuntimeError),
    ):
        async with open_moderation_service(settings):
            pass

    init_db.assert_not_called()

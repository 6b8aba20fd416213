"""Application configuration loaded from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from dotenv import load_dotenv


def _env(key: str, default: str = "") -> str:
    return os.environ.get(key, default)


def _env_float(key: str, default: float) -> float:
    raw = _env(key)
    return float(raw) if raw else default


def _env_int(key: str, default: int) -> int:
    raw = _env(key)
    return int(raw) if raw else default


@dataclass(frozen=True)
class DatabaseConfig:
    """Relational summary store (SQLite file)."""

    path: str = field(default_factory=lambda: _env("MODERATION_DATABASE_PATH", "moderation.db"))


@dataclass(frozen=True)
class StorageConfig:
    """Blob storage holding article content."""

    connection_string: str = field(default_factory=lambda: _env("AZURE_STORAGE_CONNECTION_STRING"))
    container: str = field(default_factory=lambda: _env("AZURE_STORAGE_CONTAINER", "moderation-content"))


@dataclass(frozen=True)
class CreatorDirectoryConfig:
    """Remote service translating creator IDs into display names."""

    url: str = field(default_factory=lambda: _env("CREATOR_DIRECTORY_URL"))
    timeout: float = field(default_factory=lambda: _env_float("CREATOR_DIRECTORY_TIMEOUT", 5.0))


@dataclass(frozen=True)
class PublishSinkConfig:
    """Remote service accepting approved articles for publication."""

    url: str = field(default_factory=lambda: _env("PUBLISH_SINK_URL"))
    timeout: float = field(default_factory=lambda: _env_float("PUBLISH_SINK_TIMEOUT", 10.0))


@dataclass(frozen=True)
class AppConfig:
    env: str = field(default_factory=lambda: _env("APP_ENV", "development"))
    log_level: str = field(default_factory=lambda: _env("LOG_LEVEL", "INFO"))
    page_size: int = field(default_factory=lambda: _env_int("MODERATION_PAGE_SIZE", 10))

    @property
    def is_development(self) -> bool:
        return self.env == "development"


@dataclass(frozen=True)
class Settings:
    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    directory: CreatorDirectoryConfig = field(default_factory=CreatorDirectoryConfig)
    publisher: PublishSinkConfig = field(default_factory=PublishSinkConfig)
    app: AppConfig = field(default_factory=AppConfig)


def load_settings() -> Settings:
    """Load settings, reading a local .env file first when one exists."""
    load_dotenv()
    return Settings()

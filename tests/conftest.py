"""Shared fixtures: in-memory collaborators for the moderation service."""

from __future__ import annotations

import itertools
from collections.abc import Callable, Sequence
from datetime import UTC, datetime
from unittest.mock import AsyncMock

import pytest

from article_moderation.errors import ArticleNotFoundError, ConcurrentUpdateError
from article_moderation.models import Creator, PublishArticleRequest, SummaryRecord
from article_moderation.services import ArticleModerationService

VALID_TITLE = "Example story title here"
VALID_CONTENT = "Once upon a time " * 10
FIXED_NOW = datetime(2026, 1, 15, 12, 0, tzinfo=UTC)


class InMemorySummaryStore:
    """Summary store keeping rows in a dict, ordered by ID."""

    def __init__(self, page_size: int = 10) -> None:
        self.rows: dict[int, SummaryRecord] = {}
        self.page_size = page_size
        self._ids = itertools.count(1)

    def _page(self, records: list[SummaryRecord], page: int) -> list[SummaryRecord]:
        start = (page - 1) * self.page_size
        return [r.model_copy() for r in records[start : start + self.page_size]]

    async def list_by_creator(self, creator_id: int, page: int) -> list[SummaryRecord]:
        ordered = [self.rows[k] for k in sorted(self.rows)]
        return self._page([r for r in ordered if r.creator_id == creator_id], page)

    async def list_all(self, page: int) -> list[SummaryRecord]:
        return self._page([self.rows[k] for k in sorted(self.rows)], page)

    async def get(self, article_id: int) -> SummaryRecord | None:
        record = self.rows.get(article_id)
        return record.model_copy() if record else None

    async def exists_for_creator(self, article_id: int, creator_id: int) -> bool:
        record = self.rows.get(article_id)
        return record is not None and record.creator_id == creator_id

    async def insert(self, record: SummaryRecord) -> int:
        record.id = next(self._ids)
        self.rows[record.id] = record.model_copy()
        return record.id

    async def update(self, record: SummaryRecord) -> SummaryRecord:
        assert record.id is not None
        if record.id not in self.rows:
            raise ArticleNotFoundError(record.id)
        if self.rows[record.id].version != record.version:
            raise ConcurrentUpdateError(
                f"Summary {record.id} was modified concurrently", article_id=record.id
            )
        record.version += 1
        self.rows[record.id] = record.model_copy()
        return record

    async def delete(self, article_id: int, expected_version: int | None = None) -> bool:
        record = self.rows.get(article_id)
        if record is None:
            return False
        if expected_version is not None and record.version != expected_version:
            raise ConcurrentUpdateError(
                f"Summary {article_id} was modified concurrently", article_id=article_id
            )
        del self.rows[article_id]
        return True

    async def exists(self, article_id: int) -> bool:
        return article_id in self.rows


class InMemoryContentStore:
    def __init__(self) -> None:
        self.blobs: dict[int, str] = {}

    async def get(self, article_id: int) -> str | None:
        return self.blobs.get(article_id)

    async def put(self, article_id: int, content: str) -> None:
        self.blobs[article_id] = content

    async def delete(self, article_id: int) -> None:
        self.blobs.pop(article_id, None)


class FakeCreatorDirectory:
    def __init__(self, names: dict[int, str] | None = None) -> None:
        self.names = names or {}
        self.batch_calls: list[list[int]] = []

    def _creator(self, creator_id: int) -> Creator:
        return Creator(id=creator_id, name=self.names.get(creator_id, f"creator-{creator_id}"))

    async def get_many(self, creator_ids: Sequence[int]) -> dict[int, Creator]:
        self.batch_calls.append(list(creator_ids))
        return {cid: self._creator(cid) for cid in creator_ids}

    async def get_one(self, creator_id: int) -> Creator:
        return self._creator(creator_id)


class RecordingPublishSink:
    def __init__(self) -> None:
        self.submitted: list[PublishArticleRequest] = []

    async def submit(self, request: PublishArticleRequest) -> None:
        self.submitted.append(request)


@pytest.fixture
def summaries() -> InMemorySummaryStore:
    return InMemorySummaryStore()


@pytest.fixture
def contents() -> InMemoryContentStore:
    return InMemoryContentStore()


@pytest.fixture
def creators() -> FakeCreatorDirectory:
    return FakeCreatorDirectory({42: "alice", 7: "bob"})


@pytest.fixture
def publisher() -> RecordingPublishSink:
    return RecordingPublishSink()


@pytest.fixture
def service(
    summaries: InMemorySummaryStore,
    contents: InMemoryContentStore,
    creators: FakeCreatorDirectory,
    publisher: RecordingPublishSink,
) -> ArticleModerationService:
    """Moderation service wired to in-memory collaborators."""
    return ArticleModerationService(
        summaries, contents, creators, publisher, clock=lambda: FIXED_NOW
    )


@pytest.fixture
def mocks() -> tuple[AsyncMock, AsyncMock, AsyncMock, AsyncMock]:
    """Return (summaries, contents, creators, publisher) mock collaborators."""
    return AsyncMock(), AsyncMock(), AsyncMock(), AsyncMock()


@pytest.fixture
def mocked_service(
    mocks: tuple[AsyncMock, AsyncMock, AsyncMock, AsyncMock],
) -> ArticleModerationService:
    summaries_mock, contents_mock, creators_mock, publisher_mock = mocks
    return ArticleModerationService(
        summaries_mock, contents_mock, creators_mock, publisher_mock, clock=lambda: FIXED_NOW
    )


@pytest.fixture
def make_record() -> Callable[..., SummaryRecord]:
    """Return a factory for stored summary records."""

    def _make_record(
        article_id: int = 1,
        *,
        creator_id: int = 42,
        title: str = VALID_TITLE,
        status: str = "moderating",
        comment: str | None = None,
    ) -> SummaryRecord:
        return SummaryRecord(
            id=article_id,
            title=title,
            creator_id=creator_id,
            created_at=FIXED_NOW,
            status=status,
            moderator_comment=comment,
        )

    return _make_record

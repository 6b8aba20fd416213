"""Article moderation orchestrator.

Keeps an article's lifecycle consistent across the summary store, the
content store, the creator directory and the publishing service. None of
these share a transaction, so every mutating operation is ordered so that a
failure part-way leaves the article either untouched or safely retryable:

* create writes the summary before the content. A failed content write
  leaves a content-less summary, which reads as "not found".
* publish submits before deleting anything. A failed submission leaves the
  article in moderation; a failed cleanup after submission is only logged,
  so publication is at-least-once.
* remove deletes content before the summary. A summary without content is
  equivalent to an already removed article.

Preconditions are checked before the first mutating call.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from pydantic import ValidationError

from article_moderation.errors import (
    ArticleNotFoundError,
    ConcurrentUpdateError,
    ExternalUnavailableError,
    InvalidInputError,
    InvalidStateError,
    ModerationError,
    RemoteServiceError,
)
from article_moderation.models.article import (
    Article,
    CreateArticleRequest,
    NamedArticleSummary,
    PublishArticleRequest,
)
from article_moderation.models.summary import ArticleSummary, ModerationStatus, SummaryRecord

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

    from article_moderation.remote import CreatorDirectory, PublishSink
    from article_moderation.storage import ContentStore, SummaryStore

logger = logging.getLogger(__name__)


@contextlib.contextmanager
def _operation(name: str, article_id: int | None = None) -> Iterator[None]:
    """Tag moderation errors leaving an operation with where they happened."""
    try:
        yield
    except ModerationError as exc:
        exc.add_context(name, article_id)
        raise


def _require_positive(name: str, value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise InvalidInputError(f"{name} must be a positive integer, got {value!r}")


def _utcnow() -> datetime:
    return datetime.now(UTC)


class ArticleModerationService:
    """Compose the stores and remote services into the moderation lifecycle."""

    def __init__(
        self,
        summaries: SummaryStore,
        contents: ContentStore,
        creators: CreatorDirectory,
        publisher: PublishSink,
        *,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._summaries = summaries
        self._contents = contents
        self._creators = creators
        self._publisher = publisher
        self._clock = clock

    async def list_creator_summaries(self, creator_id: int, page: int) -> list[ArticleSummary]:
        """Return one page of a creator's summaries in moderation.

        Unknown creators and pages past the end yield an empty list.
        """
        with _operation("list_creator_summaries"):
            _require_positive("creator_id", creator_id)
            _require_positive("page", page)
            records = await self._summaries.list_by_creator(creator_id, page)
        return [ArticleSummary.from_record(record) for record in records]

    async def list_summaries(
        self,
        page: int,
        *,
        timeout: float | None = None,
    ) -> list[NamedArticleSummary]:
        """Return one page of all summaries with their creators (moderator view).

        Creators are resolved in a single batch lookup. ``timeout`` bounds
        that lookup; if it expires or the directory is unreachable the whole
        page fails, nothing partial is returned.
        """
        with _operation("list_summaries"):
            _require_positive("page", page)
            records = await self._summaries.list_all(page)
            if not records:
                return []

            creator_ids = list(dict.fromkeys(record.creator_id for record in records))
            try:
                async with asyncio.timeout(timeout):
                    creators = await self._creators.get_many(creator_ids)
            except TimeoutError as exc:
                raise ExternalUnavailableError(
                    f"Creator directory did not answer within {timeout}s"
                ) from exc

            missing = [cid for cid in creator_ids if cid not in creators]
            if missing:
                raise RemoteServiceError(f"Creator directory omitted creators {missing}")

        return [
            NamedArticleSummary(
                summary=ArticleSummary.from_record(record),
                creator=creators[record.creator_id],
            )
            for record in records
        ]

    async def get_article(self, article_id: int) -> Article:
        """Assemble the full article: summary, content and creator.

        A summary without content is reported as not found.
        """
        with _operation("get_article", article_id):
            _require_positive("article_id", article_id)
            record = await self._get_record(article_id)
            content = await self._contents.get(article_id)
            if content is None:
                raise ArticleNotFoundError(article_id)
            creator = await self._creators.get_one(record.creator_id)
        return Article.assemble(record, content, creator)

    async def owns_article(self, creator_id: int, article_id: int) -> bool:
        """Return True if the article exists and was written by the creator.

        Missing and foreign articles are indistinguishable.
        """
        with _operation("owns_article", article_id):
            _require_positive("creator_id", creator_id)
            _require_positive("article_id", article_id)
            return await self._summaries.exists_for_creator(article_id, creator_id)

    async def create_article(self, creator_id: int, title: str, content: str) -> int:
        """Submit a draft for moderation and return the new article ID."""
        with _operation("create_article"):
            _require_positive("creator_id", creator_id)
            try:
                request = CreateArticleRequest(title=title, content=content)
            except ValidationError as exc:
                raise InvalidInputError(_describe_validation_error(exc)) from exc

            record = SummaryRecord(
                title=request.title,
                creator_id=creator_id,
                created_at=self._clock(),
                status=ModerationStatus.MODERATING,
            )
            article_id = await self._summaries.insert(record)

        with _operation("create_article", article_id):
            try:
                await self._contents.put(article_id, request.content)
            except ExternalUnavailableError:
                logger.warning(
                    "Content write failed for article %d, summary left without content",
                    article_id,
                )
                raise

        logger.info("Article %d created by creator %d", article_id, creator_id)
        return article_id

    async def publish_article(self, article_id: int) -> None:
        """Hand a moderating article to the publishing service, then delete it.

        Only articles in MODERATING can be published; anything else is a
        caller error and nothing is touched.
        """
        with _operation("publish_article", article_id):
            _require_positive("article_id", article_id)
            record = await self._get_record(article_id)
            if record.status != ModerationStatus.MODERATING:
                raise InvalidStateError(
                    f"Article with ID {article_id} is not in {ModerationStatus.MODERATING} status"
                )
            content = await self._contents.get(article_id)
            if content is None:
                raise ArticleNotFoundError(article_id)

            await self._publisher.submit(
                PublishArticleRequest(
                    title=record.title,
                    content=content,
                    creator_id=record.creator_id,
                )
            )
            logger.info("Article %d published", article_id)

        await self._cleanup_published(article_id, record.version)

    async def request_edit(self, article_id: int, comment: str) -> ArticleSummary:
        """Send an article back to its creator with a moderator comment.

        Repeated requests overwrite the previous comment.
        """
        with _operation("request_edit", article_id):
            _require_positive("article_id", article_id)
            if not isinstance(comment, str) or not comment.strip():
                raise InvalidInputError("comment must not be blank")
            record = await self._get_record(article_id)
            record.status = ModerationStatus.EDIT_REQUESTED
            record.moderator_comment = comment
            record = await self._summaries.update(record)
        logger.info("Edit requested for article %d", article_id)
        return ArticleSummary.from_record(record)

    async def remove_article(self, article_id: int) -> None:
        """Reject an article: delete its content, then its summary."""
        with _operation("remove_article", article_id):
            _require_positive("article_id", article_id)
            if not await self._summaries.exists(article_id):
                raise ArticleNotFoundError(article_id)
            await self._contents.delete(article_id)
            await self._summaries.delete(article_id)
        logger.info("Article %d removed", article_id)

    async def _get_record(self, article_id: int) -> SummaryRecord:
        record = await self._summaries.get(article_id)
        if record is None:
            raise ArticleNotFoundError(article_id)
        return record

    async def _cleanup_published(self, article_id: int, version: int) -> None:
        """Delete a published article's content and summary, best effort.

        The summary is only deleted at the version that was published, so an
        edit request made meanwhile keeps its summary.
        """
        try:
            await self._contents.delete(article_id)
            await self._summaries.delete(article_id, expected_version=version)
        except ConcurrentUpdateError:
            logger.warning(
                "Article %d was published but its summary changed meanwhile and was kept",
                article_id,
            )
        except ExternalUnavailableError:
            logger.warning(
                "Article %d was published but cleanup failed; a retry may publish it again",
                article_id,
                exc_info=True,
            )


def _describe_validation_error(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        field = ".".join(str(loc) for loc in error["loc"])
        parts.append(f"{field}: {error['msg']}")
    return "; ".join(parts)

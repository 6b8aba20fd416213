"""Article read views and request payloads."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from article_moderation.models.summary import ArticleSummary, ModerationStatus, SummaryRecord

TITLE_MIN_LENGTH = 15
TITLE_MAX_LENGTH = 100
CONTENT_MIN_LENGTH = 100
CONTENT_MAX_LENGTH = 18_000


class Creator(BaseModel):
    """Author of an article, as resolved by the creator directory."""

    id: int
    name: str


class NamedArticleSummary(BaseModel):
    """A summary paired with the creator that wrote it."""

    summary: ArticleSummary
    creator: Creator | None = None


class Article(BaseModel):
    """Full article view: summary, content and creator assembled on read."""

    id: int
    title: str
    content: str
    created_at: datetime
    status: ModerationStatus
    moderator_comment: str | None = None
    creator: Creator

    @classmethod
    def assemble(cls, record: SummaryRecord, content: str, creator: Creator) -> Article:
        summary = ArticleSummary.from_record(record)
        return cls(
            id=summary.id,
            title=summary.title,
            content=content,
            created_at=summary.created_at,
            status=summary.status,
            moderator_comment=summary.moderator_comment,
            creator=creator,
        )


class CreateArticleRequest(BaseModel):
    """Draft submitted by a creator for moderation."""

    title: str = Field(min_length=TITLE_MIN_LENGTH, max_length=TITLE_MAX_LENGTH)
    content: str = Field(min_length=CONTENT_MIN_LENGTH, max_length=CONTENT_MAX_LENGTH)


class PublishArticleRequest(BaseModel):
    """Payload handed to the publishing service for an accepted article."""

    model_config = ConfigDict(populate_by_name=True)

    title: str
    content: str
    creator_id: int = Field(alias="creatorId")

    def to_payload(self) -> dict[str, object]:
        return self.model_dump(by_alias=True)

"""Data models for article moderation."""

from article_moderation.models.article import (
    Article,
    CreateArticleRequest,
    Creator,
    NamedArticleSummary,
    PublishArticleRequest,
)
from article_moderation.models.summary import (
    ArticleSummary,
    ModerationStatus,
    SummaryRecord,
    status_from_code,
    status_to_code,
)

__all__ = [
    "Article",
    "ArticleSummary",
    "CreateArticleRequest",
    "Creator",
    "ModerationStatus",
    "NamedArticleSummary",
    "PublishArticleRequest",
    "SummaryRecord",
    "status_from_code",
    "status_to_code",
]

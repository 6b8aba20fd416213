"""Business logic for article moderation."""

from article_moderation.services.moderation import ArticleModerationService

__all__ = ["ArticleModerationService"]

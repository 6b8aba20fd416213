"""Error kinds raised by the moderation core."""

from __future__ import annotations


class ModerationError(Exception):
    """Base class for every failure surfaced by the moderation core.

    ``operation`` and ``article_id`` are filled in by the orchestrator as the
    error leaves a public operation, so callers can log a failure without
    re-deriving where it happened.
    """

    def __init__(
        self,
        message: str,
        *,
        operation: str | None = None,
        article_id: int | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.operation = operation
        self.article_id = article_id

    def add_context(self, operation: str, article_id: int | None = None) -> None:
        """Attach operation context without overwriting what is already set."""
        if self.operation is None:
            self.operation = operation
        if self.article_id is None and article_id is not None:
            self.article_id = article_id

    def __str__(self) -> str:
        if self.operation is None:
            return self.message
        if self.article_id is None:
            return f"{self.operation}: {self.message}"
        return f"{self.operation} (article {self.article_id}): {self.message}"


class ArticleNotFoundError(ModerationError):
    """The article (summary or content) is absent."""

    def __init__(self, article_id: int, **kwargs: object) -> None:
        super().__init__(
            f"Article with ID {article_id} was not found!",
            article_id=article_id,
            **kwargs,  # type: ignore[arg-type]
        )


class InvalidStateError(ModerationError):
    """The requested transition is forbidden by the moderation state machine."""


class ExternalUnavailableError(ModerationError):
    """A collaborator could not be reached. Retrying the operation is safe."""


class InvalidInputError(ModerationError):
    """Input is outside accepted bounds; rejected before any state change."""


class RemoteServiceError(ModerationError):
    """A remote service answered, but with an error or a malformed body."""

    def __init__(self, message: str, *, status_code: int | None = None, **kwargs: object) -> None:
        super().__init__(message, **kwargs)  # type: ignore[arg-type]
        self.status_code = status_code


class ConcurrentUpdateError(ModerationError):
    """A summary changed between read and write."""

"""Article summary models: the moderation record kept in the summary store."""

from __future__ import annotations

from datetime import UTC, datetime
from enum import StrEnum

from pydantic import BaseModel, Field


class ModerationStatus(StrEnum):
    MODERATING = "moderating"
    EDIT_REQUESTED = "edit_requested"


# Storage codes are part of the persisted format; never renumber.
_STATUS_TO_CODE: dict[ModerationStatus, int] = {
    ModerationStatus.MODERATING: 0,
    ModerationStatus.EDIT_REQUESTED: 1,
}
_CODE_TO_STATUS: dict[int, ModerationStatus] = {
    code: status for status, code in _STATUS_TO_CODE.items()
}


def status_to_code(status: ModerationStatus) -> int:
    """Return the integer stored for a moderation status."""
    return _STATUS_TO_CODE[status]


def status_from_code(code: int) -> ModerationStatus:
    """Return the moderation status for a stored integer code."""
    try:
        return _CODE_TO_STATUS[code]
    except KeyError:
        raise ValueError(f"Unknown moderation status code: {code}") from None


class SummaryRecord(BaseModel):
    """A row of the summary store, including fields hidden from read views."""

    id: int | None = None
    title: str
    creator_id: int
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    status: ModerationStatus = ModerationStatus.MODERATING
    moderator_comment: str | None = None
    version: int = 1


class ArticleSummary(BaseModel):
    """Read view of a summary, without creator data."""

    id: int
    title: str
    created_at: datetime
    status: ModerationStatus
    moderator_comment: str | None = None

    @classmethod
    def from_record(cls, record: SummaryRecord) -> ArticleSummary:
        if record.id is None:
            raise ValueError("Cannot build a summary view from an unsaved record")
        return cls(
            id=record.id,
            title=record.title,
            created_at=record.created_at,
            status=record.status,
            moderator_comment=record.moderator_comment,
        )

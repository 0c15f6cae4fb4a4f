"""
Pydantic models for members and their point history.

A ``Member`` owns its ``history``: a list of ``PointLog`` snapshots,
newest first.  Each log copies the event name and point value at the
moment of the award instead of referencing the event, so deleting an
event never rewrites anybody's history.  ``Member.points`` is a
running total that must always equal the sum of the history.
"""

from datetime import datetime, timezone
from typing import List
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class PointLog(BaseModel):
    """Immutable snapshot of one point award."""

    id: UUID = Field(default_factory=uuid4)
    event_name: str = Field(..., examples=["Karaoke"])
    points: int = Field(..., examples=[1])
    date: datetime = Field(default_factory=utc_now)

    model_config = {"frozen": True}


class Member(BaseModel):
    """A tracked club member with a point total and award history."""

    id: UUID = Field(default_factory=uuid4)
    name: str = Field(..., min_length=1, examples=["Ayse"])
    points: int = 0
    history: List[PointLog] = Field(default_factory=list)

    @property
    def history_total(self) -> int:
        return sum(entry.points for entry in self.history)

    def is_consistent(self) -> bool:
        """Return ``True`` when ``points`` matches the sum of ``history``."""
        return self.points == self.history_total


class MemberCreate(BaseModel):
    """Schema for adding a member.  Blank names are rejected by the service."""

    name: str = Field(..., examples=["Ayse"])


class PointAward(BaseModel):
    """Schema for awarding a point.

    ``event_id`` is optional; when omitted the currently selected event
    is used.
    """

    event_id: UUID | None = None


class HistoryDeletion(BaseModel):
    """Schema for deleting several history entries in one batch.

    Indices refer to positions in the history as it was before the
    deletion.
    """

    indices: List[int] = Field(..., examples=[[0, 2]])

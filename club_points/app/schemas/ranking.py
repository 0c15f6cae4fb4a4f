"""
Pydantic models for the leaderboard.
"""

from uuid import UUID

from pydantic import BaseModel, Field

MEDALS = ("🥇", "🥈", "🥉")


def medal_for(rank: int) -> str:
    """Return the medal for ranks 1 to 3 and the rank number otherwise."""
    if 1 <= rank <= len(MEDALS):
        return MEDALS[rank - 1]
    return str(rank)


class RankingEntry(BaseModel):
    """One leaderboard row."""

    rank: int = Field(..., ge=1, examples=[1])
    medal: str = Field(..., examples=["🥇"])
    member_id: UUID
    name: str
    points: int

"""
Member endpoints for API v1.

These routes cover the roster: adding and deleting members, awarding
points, inspecting and pruning a member's history, and resetting every
total at once.
"""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status

from club_points.app.api.deps import ensure_applied, get_roster
from club_points.app.schemas.member import HistoryDeletion, Member, MemberCreate, PointAward, PointLog
from club_points.app.services.roster_service import RosterService

router = APIRouter()


@router.get("/", response_model=List[Member])
async def list_members(roster: RosterService = Depends(get_roster)) -> List[Member]:
    """List members in the order they were added.  Use ``/ranking`` for the leaderboard."""
    return roster.members


@router.post("/", response_model=Member, status_code=status.HTTP_201_CREATED)
async def add_member(body: MemberCreate, roster: RosterService = Depends(get_roster)) -> Member:
    """Add a member with zero points.  Blank names are rejected with 422."""
    return ensure_applied(roster.add_member(body.name)).record


@router.post("/reset", response_model=List[Member])
async def reset_all(roster: RosterService = Depends(get_roster)) -> List[Member]:
    """Zero every member's points and clear all histories.

    Members and events are kept.  Calling this twice has the same
    effect as calling it once.
    """
    ensure_applied(roster.reset_all())
    return roster.members


@router.get("/{member_id}", response_model=Member)
async def get_member(member_id: UUID, roster: RosterService = Depends(get_roster)) -> Member:
    member = roster.get_member(member_id)
    if member is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Member not found")
    return member


@router.delete("/{member_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_member(member_id: UUID, roster: RosterService = Depends(get_roster)) -> None:
    ensure_applied(roster.delete_member(member_id))
    return None


@router.post("/{member_id}/points", response_model=Member)
async def award_point(
    member_id: UUID,
    body: PointAward | None = None,
    roster: RosterService = Depends(get_roster),
) -> Member:
    """Award points to a member.

    Uses ``event_id`` from the body when given, otherwise the selected
    event.  Returns 422 when no event is selected and 404 for unknown
    members or events.
    """
    event = None
    if body is not None and body.event_id is not None:
        event = roster.get_event(body.event_id)
        if event is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Event not found")
    return ensure_applied(roster.award_point(member_id, event)).record


@router.get("/{member_id}/history", response_model=List[PointLog])
async def get_history(member_id: UUID, roster: RosterService = Depends(get_roster)) -> List[PointLog]:
    """Return the member's awards, newest first."""
    member = roster.get_member(member_id)
    if member is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Member not found")
    return member.history


@router.delete("/{member_id}/history/{index}", response_model=Member)
async def delete_history_entry(
    member_id: UUID,
    index: int,
    roster: RosterService = Depends(get_roster),
) -> Member:
    """Delete one history entry and take its points off the total."""
    return ensure_applied(roster.delete_history_entry(member_id, index)).record


@router.post("/{member_id}/history/delete", response_model=Member)
async def delete_history_entries(
    member_id: UUID,
    body: HistoryDeletion,
    roster: RosterService = Depends(get_roster),
) -> Member:
    """Delete several history entries at once.

    Indices refer to the history before the deletion.  If any index is
    out of range nothing is deleted and 422 is returned.
    """
    return ensure_applied(roster.delete_history_entries(member_id, body.indices)).record

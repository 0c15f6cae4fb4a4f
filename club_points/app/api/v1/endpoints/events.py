"""
Event endpoints for API v1.

Events are the point-earning categories offered when awarding points.
Besides listing, creating and deleting them, these routes manage the
selected event (used by awards that do not name one) and expose the
glyph palette of the add-event form.
"""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status

from club_points.app.api.deps import ensure_applied, get_roster
from club_points.app.schemas.event import EMOJI_PALETTE, Event, EventCreate, EventSelection
from club_points.app.services.roster_service import RosterService

router = APIRouter()


@router.get("/", response_model=List[Event])
async def list_events(roster: RosterService = Depends(get_roster)) -> List[Event]:
    return roster.events


@router.post("/", response_model=Event, status_code=status.HTTP_201_CREATED)
async def create_event(body: EventCreate, roster: RosterService = Depends(get_roster)) -> Event:
    """Create an event.

    ``points`` is sent as text and must parse as a whole number
    (negative values are allowed).  Invalid points or a blank name are
    rejected with 422.
    """
    return ensure_applied(roster.add_event(body.name, body.points, body.emoji)).record


@router.get("/emojis", response_model=List[str])
async def list_emojis() -> List[str]:
    return EMOJI_PALETTE


@router.get("/selected", response_model=Event)
async def get_selected_event(roster: RosterService = Depends(get_roster)) -> Event:
    event = roster.selected_event
    if event is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No event selected")
    return event


@router.put("/selected", response_model=Event)
async def select_event(body: EventSelection, roster: RosterService = Depends(get_roster)) -> Event:
    return ensure_applied(roster.select_event(body.event_id)).record


@router.get("/{event_id}", response_model=Event)
async def get_event(event_id: UUID, roster: RosterService = Depends(get_roster)) -> Event:
    event = roster.get_event(event_id)
    if event is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Event not found")
    return event


@router.delete("/{event_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_event(event_id: UUID, roster: RosterService = Depends(get_roster)) -> None:
    """Delete an event.

    Points already awarded for it stay in member histories with the
    name and value they had at the time.
    """
    ensure_applied(roster.delete_event(event_id))
    return None

"""
Shared dependencies for API routes.

``get_roster`` hands the application's single ``RosterService`` to a
route.  ``ensure_applied`` turns a ``CommandResult`` into the matching
HTTP error: unknown identifiers become 404, other rejections 422, and
an applied command whose save failed becomes 503 so the client learns
that the change exists only in memory.
"""

from fastapi import HTTPException, Request, status

from club_points.app.services.results import CommandResult, Rejection
from club_points.app.services.roster_service import RosterService

REJECTION_DETAILS = {
    Rejection.EMPTY_NAME: "Name must not be empty",
    Rejection.INVALID_POINTS: "Points must be a whole number",
    Rejection.NO_EVENT_SELECTED: "No event selected",
    Rejection.MEMBER_NOT_FOUND: "Member not found",
    Rejection.EVENT_NOT_FOUND: "Event not found",
    Rejection.INDEX_OUT_OF_RANGE: "History index out of range",
}

NOT_FOUND = {Rejection.MEMBER_NOT_FOUND, Rejection.EVENT_NOT_FOUND}


def get_roster(request: Request) -> RosterService:
    roster = getattr(request.app.state, "roster", None)
    if roster is None:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Roster not loaded")
    return roster


def ensure_applied(result: CommandResult) -> CommandResult:
    """Raise ``HTTPException`` unless the command applied and persisted."""
    if not result.applied:
        code = status.HTTP_404_NOT_FOUND if result.reason in NOT_FOUND else status.HTTP_422_UNPROCESSABLE_ENTITY
        raise HTTPException(status_code=code, detail=REJECTION_DETAILS[result.reason])
    if result.persisted is not None and not result.persisted.ok:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=f"Change applied but not saved: {result.persisted.reason}",
        )
    return result

"""
Leaderboard endpoints for API v1.

``GET /ranking/`` returns members by points with their rank and medal;
``GET /ranking/export`` writes the same order to a CSV file and sends
it back as a download.
"""

import shutil
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import FileResponse
from starlette.background import BackgroundTask

from club_points.app.api.deps import get_roster
from club_points.app.schemas.ranking import RankingEntry
from club_points.app.services.export_service import ExportService
from club_points.app.services.roster_service import RosterService

router = APIRouter()


@router.get("/", response_model=List[RankingEntry])
async def get_ranking(roster: RosterService = Depends(get_roster)) -> List[RankingEntry]:
    """Members by points, highest first.  Ties keep the order members were added in."""
    return roster.ranking()


@router.get("/export")
async def export_ranking(roster: RosterService = Depends(get_roster)) -> FileResponse:
    """Download the ranking as CSV.  Returns 500 if the file could not be written.

    The export directory is removed once the response has been sent.
    """
    result = ExportService.export_ranking(roster.ranked_members())
    if not result.ok:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Export failed: {result.reason}",
        )
    return FileResponse(
        result.path,
        media_type="text/csv",
        filename=result.path.name,
        background=BackgroundTask(shutil.rmtree, result.path.parent, ignore_errors=True),
    )

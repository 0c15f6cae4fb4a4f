"""
Top-level router for version 1 of the API.

This router aggregates the domain routers (members, events, ranking)
under a unified prefix.  When new domains are introduced, include
their routers here.
"""

from fastapi import APIRouter

from .endpoints import events, members, ranking

router = APIRouter()

router.include_router(members.router, prefix="/members", tags=["members"])
router.include_router(events.router, prefix="/events", tags=["events"])
router.include_router(ranking.router, prefix="/ranking", tags=["ranking"])

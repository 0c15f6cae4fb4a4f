"""
Main entrypoint for the club points API.

``create_app`` sets up logging, mounts the versioned routers and
attaches a lifespan handler that prepares the database and loads the
roster.  The module-level ``app`` makes the service runnable with::

    uvicorn club_points.app.main:app --reload

Tests and embedding code can pass a ready ``RosterService`` to
``create_app``; the lifespan handler then leaves it alone.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI

from .api.v1.router import router as v1_router
from .core.config import settings
from .core.db import init_db
from .core.logging_config import setup_logging
from .services.roster_service import RosterService
from .services.storage_service import StorageService


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    if app.state.roster is None:
        init_db()
        app.state.roster = RosterService.load(StorageService())
    logging.getLogger(__name__).info("%s %s ready", settings.project_name, settings.api_version)
    yield


def create_app(roster: Optional[RosterService] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    roster : Optional[RosterService]
        Roster to serve.  When omitted, the roster is loaded from the
        configured database at startup.
    """
    setup_logging(
        settings.log_level,
        settings.log_file,
        max_bytes=settings.log_max_bytes,
        backup_count=settings.log_backup_count,
    )

    app = FastAPI(
        title=settings.project_name,
        version=settings.api_version,
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.state.roster = roster
    app.include_router(v1_router, prefix="/api/v1")
    return app


app = create_app()

"""Entry point for the club points API.

Starts the FastAPI application with Uvicorn.  Host and port are read
from the ``API_HOST`` and ``API_PORT`` environment variables (defaults
``0.0.0.0`` and ``8000``); the database location from
``DATABASE_URL``.

Usage:
    python run.py
"""
import asyncio

from uvicorn import Config, Server

from club_points.app.core.config import settings
from club_points.app.main import app


async def main() -> None:
    config = Config(
        app=app,
        host=settings.api_host,
        port=settings.api_port,
        reload=False,
        log_level=settings.log_level.lower(),
    )
    server = Server(config)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass

"""
Pytest configuration and common fixtures for club points tests.

Every test gets its own SQLite file under ``tmp_path``; nothing touches
the configured database.
"""

from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient

from club_points.app.core.db import init_db
from club_points.app.main import create_app
from club_points.app.schemas.event import Event
from club_points.app.services.roster_service import RosterService
from club_points.app.services.storage_service import StorageService


@pytest.fixture
def db_path(tmp_path) -> str:
    path = str(tmp_path / "test_club.db")
    init_db(path)
    return path


@pytest.fixture
def storage(db_path) -> StorageService:
    return StorageService(db_path)


@pytest.fixture
def broken_storage(tmp_path) -> StorageService:
    """Storage whose database lives in a directory that does not exist."""
    return StorageService(str(tmp_path / "missing" / "club_points.db"))


@pytest.fixture
def roster(storage) -> RosterService:
    return RosterService.load(storage)


@pytest.fixture
def karaoke() -> Event:
    return Event(name="Karaoke", points=1, emoji="🎶")


@pytest.fixture
def concert() -> Event:
    return Event(name="Concert", points=5, emoji="🎸")


@pytest.fixture
def client(roster) -> Generator[TestClient, None, None]:
    app = create_app(roster)
    with TestClient(app) as test_client:
        yield test_client

"""
Storage adapter for the club collections.

Members and events are kept as two JSON documents in the ``kv_store``
table, each under a versioned key.  Every save rewrites the whole
collection; there is no delta persistence and no transaction spanning
both keys (the collections do not reference each other, so a crash
between the two writes cannot break an invariant).

Loading is forgiving: an absent key or a document that no longer
decodes yields an empty member list or the default events.  Saving
never raises; the outcome is returned as a ``PersistResult`` so the
caller can surface it.
"""

import logging
import sqlite3
from typing import List, Optional, TypeVar

from pydantic import TypeAdapter, ValidationError

from club_points.app.core.db import get_connection
from club_points.app.schemas.event import Event, default_events
from club_points.app.schemas.member import Member
from club_points.app.services.results import PersistResult

logger = logging.getLogger(__name__)

T = TypeVar("T")

_MEMBER_LIST = TypeAdapter(List[Member])
_EVENT_LIST = TypeAdapter(List[Event])


class StorageService:
    """Load and save the member and event collections.

    Changing the shape of ``Member`` or ``Event`` requires bumping the
    key version: there is no migration of stored documents.
    """

    MEMBER_KEY = "members_final_v15"
    EVENT_KEY = "events_final_v15"

    def __init__(self, db_path: Optional[str] = None) -> None:
        self.db_path = db_path

    def load_members(self) -> List[Member]:
        members = self._load(self.MEMBER_KEY, _MEMBER_LIST)
        if members is None:
            return []
        for member in members:
            if not member.is_consistent():
                logger.warning(
                    "Member %s has %s points but history sums to %s",
                    member.id,
                    member.points,
                    member.history_total,
                )
        return members

    def save_members(self, members: List[Member]) -> PersistResult:
        return self._save(self.MEMBER_KEY, _MEMBER_LIST, members)

    def load_events(self) -> List[Event]:
        events = self._load(self.EVENT_KEY, _EVENT_LIST)
        if events is None:
            return default_events()
        return events

    def save_events(self, events: List[Event]) -> PersistResult:
        return self._save(self.EVENT_KEY, _EVENT_LIST, events)

    def _load(self, key: str, adapter: TypeAdapter) -> Optional[list]:
        """Return the decoded collection stored under ``key`` or ``None``.

        ``None`` covers a missing key, an unreadable store and a
        document that fails validation.
        """
        conn = None
        try:
            conn = get_connection(self.db_path)
            row = conn.execute("SELECT value FROM kv_store WHERE key = ?", (key,)).fetchone()
        except sqlite3.Error as exc:
            logger.error("Could not read %s: %s", key, exc)
            return None
        finally:
            if conn is not None:
                conn.close()
        if row is None:
            logger.info("No stored data for %s", key)
            return None
        try:
            return adapter.validate_json(row["value"])
        except ValidationError as exc:
            logger.warning("Discarding undecodable data for %s: %s", key, exc.error_count())
            return None

    def _save(self, key: str, adapter: TypeAdapter, records: List[T]) -> PersistResult:
        try:
            payload = adapter.dump_json(records).decode("utf-8")
        except (ValueError, TypeError) as exc:
            logger.error("Could not serialize %s: %s", key, exc)
            return PersistResult.failure(f"serialization failed: {exc}")
        conn = None
        try:
            conn = get_connection(self.db_path)
            conn.execute(
                "INSERT INTO kv_store (key, value, updated_at) VALUES (?, ?, CURRENT_TIMESTAMP)"
                " ON CONFLICT(key) DO UPDATE SET value = excluded.value, updated_at = excluded.updated_at",
                (key, payload),
            )
            conn.commit()
        except sqlite3.Error as exc:
            logger.error("Could not write %s: %s", key, exc)
            return PersistResult.failure(f"write failed: {exc}")
        finally:
            if conn is not None:
                conn.close()
        logger.debug("Saved %d records under %s", len(records), key)
        return PersistResult.success()

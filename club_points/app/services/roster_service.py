"""
Business logic for the club roster.

``RosterService`` is the single owner of the in-memory member and
event collections.  Every command either is rejected up front by a
validation check (leaving state untouched) or fully applies and then
persists the affected collection through ``StorageService``.  The
outcome is reported as a ``CommandResult``; nothing here raises for
bad input.

Member ``points`` is a running total of ``history``.  The only
commands that touch either field (``award_point``,
``delete_history_entries`` and ``reset_all``) change both together.
"""

import logging
import re
from typing import Iterable, Iterator, List, Optional
from uuid import UUID

from club_points.app.schemas.event import DEFAULT_EMOJI, Event
from club_points.app.schemas.member import Member, PointLog, utc_now
from club_points.app.schemas.ranking import RankingEntry, medal_for
from club_points.app.services.results import CommandResult, Rejection
from club_points.app.services.storage_service import StorageService

logger = logging.getLogger(__name__)

# Plain ASCII integers only: no digit separators, no non-ASCII digits.
POINTS_PATTERN = re.compile(r"[+-]?[0-9]+")


class RankedView:
    """Members ordered by points, highest first.

    The view shares the service's member list, which commands only
    mutate in place.  The order is recomputed on every iteration, so
    the view always reflects the current roster and can be iterated
    any number of times.  ``sorted`` is stable, so members with equal
    points keep their insertion order.
    """

    def __init__(self, members: List[Member]) -> None:
        self._members = members

    def __iter__(self) -> Iterator[Member]:
        return iter(sorted(self._members, key=lambda m: m.points, reverse=True))

    def __len__(self) -> int:
        return len(self._members)


class RosterService:
    """Service for managing members, events and point awards."""

    def __init__(
        self,
        storage: StorageService,
        members: Optional[List[Member]] = None,
        events: Optional[List[Event]] = None,
    ) -> None:
        self.storage = storage
        self.members: List[Member] = list(members) if members else []
        self.events: List[Event] = list(events) if events else []
        self.selected_event_id: Optional[UUID] = self.events[0].id if self.events else None

    @classmethod
    def load(cls, storage: StorageService) -> "RosterService":
        """Build a service from the persisted collections.

        The first event becomes the current selection.
        """
        members = storage.load_members()
        events = storage.load_events()
        logger.info("Loaded %d members and %d events", len(members), len(events))
        return cls(storage, members=members, events=events)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def get_member(self, member_id: UUID) -> Optional[Member]:
        return next((m for m in self.members if m.id == member_id), None)

    def get_event(self, event_id: UUID) -> Optional[Event]:
        return next((e for e in self.events if e.id == event_id), None)

    @property
    def selected_event(self) -> Optional[Event]:
        if self.selected_event_id is None:
            return None
        return self.get_event(self.selected_event_id)

    def ranked_members(self) -> RankedView:
        return RankedView(self.members)

    def ranking(self) -> List[RankingEntry]:
        """Return the leaderboard rows for the current ranked view."""
        return [
            RankingEntry(
                rank=rank,
                medal=medal_for(rank),
                member_id=member.id,
                name=member.name,
                points=member.points,
            )
            for rank, member in enumerate(self.ranked_members(), start=1)
        ]

    # ------------------------------------------------------------------
    # Members
    # ------------------------------------------------------------------
    def add_member(self, name: str) -> CommandResult:
        name = name.strip()
        if not name:
            logger.debug("Rejected member with blank name")
            return CommandResult.rejected(Rejection.EMPTY_NAME)
        member = Member(name=name)
        self.members.append(member)
        logger.info("Added member %s (%s)", member.id, member.name)
        return self._save_members(member)

    def delete_member(self, member_id: UUID) -> CommandResult:
        member = self.get_member(member_id)
        if member is None:
            return CommandResult.rejected(Rejection.MEMBER_NOT_FOUND)
        self.members[:] = [m for m in self.members if m.id != member_id]
        logger.info("Deleted member %s (%s)", member.id, member.name)
        return self._save_members(member)

    def award_point(self, member_id: UUID, event: Optional[Event] = None) -> CommandResult:
        """Award ``event`` (or the selected event) to a member.

        The member's total grows by the event's points and a snapshot of
        the event is prepended to the history.
        """
        if event is None:
            event = self.selected_event
        if event is None:
            logger.debug("Rejected award for %s: no event selected", member_id)
            return CommandResult.rejected(Rejection.NO_EVENT_SELECTED)
        member = self.get_member(member_id)
        if member is None:
            return CommandResult.rejected(Rejection.MEMBER_NOT_FOUND)
        entry = PointLog(event_name=event.name, points=event.points, date=utc_now())
        member.points += event.points
        member.history.insert(0, entry)
        logger.info("Awarded %s points to %s for %s", event.points, member.id, event.name)
        return self._save_members(member)

    def delete_history_entry(self, member_id: UUID, index: int) -> CommandResult:
        return self.delete_history_entries(member_id, [index])

    def delete_history_entries(self, member_id: UUID, indices: Iterable[int]) -> CommandResult:
        """Delete several history entries of one member in a single batch.

        ``indices`` are positions in the history as it is now.  The
        targeted entries are collected first and then removed by
        identifier, so earlier removals cannot shift later positions.
        If any index is out of range nothing is deleted.
        """
        member = self.get_member(member_id)
        if member is None:
            return CommandResult.rejected(Rejection.MEMBER_NOT_FOUND)
        positions = set(indices)
        if any(not 0 <= i < len(member.history) for i in positions):
            logger.debug("Rejected history deletion for %s: %s", member_id, sorted(positions))
            return CommandResult.rejected(Rejection.INDEX_OUT_OF_RANGE)
        doomed = {member.history[i].id: member.history[i].points for i in positions}
        member.points -= sum(doomed.values())
        member.history = [entry for entry in member.history if entry.id not in doomed]
        logger.info("Deleted %d history entries of %s", len(doomed), member.id)
        return self._save_members(member)

    def reset_all(self) -> CommandResult:
        for member in self.members:
            member.points = 0
            member.history = []
        logger.info("Reset points of %d members", len(self.members))
        return self._save_members()

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------
    def add_event(self, name: str, points_text: str, emoji: str = DEFAULT_EMOJI) -> CommandResult:
        text = points_text.strip() if isinstance(points_text, str) else ""
        if not POINTS_PATTERN.fullmatch(text):
            logger.debug("Rejected event with points %r", points_text)
            return CommandResult.rejected(Rejection.INVALID_POINTS)
        points = int(text)
        name = name.strip()
        if not name:
            return CommandResult.rejected(Rejection.EMPTY_NAME)
        event = Event(name=name, points=points, emoji=emoji.strip() or DEFAULT_EMOJI)
        self.events.append(event)
        if self.selected_event_id is None:
            self.selected_event_id = event.id
        logger.info("Added event %s (%s, %s points)", event.id, event.name, event.points)
        return self._save_events(event)

    def delete_event(self, event_id: UUID) -> CommandResult:
        """Remove an event.  Member histories keep their snapshots of it."""
        event = self.get_event(event_id)
        if event is None:
            return CommandResult.rejected(Rejection.EVENT_NOT_FOUND)
        self.events[:] = [e for e in self.events if e.id != event_id]
        if self.selected_event_id == event_id:
            self.selected_event_id = self.events[0].id if self.events else None
        logger.info("Deleted event %s (%s)", event.id, event.name)
        return self._save_events(event)

    def select_event(self, event_id: UUID) -> CommandResult:
        event = self.get_event(event_id)
        if event is None:
            return CommandResult.rejected(Rejection.EVENT_NOT_FOUND)
        self.selected_event_id = event.id
        return CommandResult(applied=True, record=event)

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------
    def _save_members(self, record=None) -> CommandResult:
        return CommandResult(applied=True, persisted=self.storage.save_members(self.members), record=record)

    def _save_events(self, record=None) -> CommandResult:
        return CommandResult(applied=True, persisted=self.storage.save_events(self.events), record=record)

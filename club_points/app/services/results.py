"""
Result types returned by the service layer.

Commands never raise for expected outcomes.  A rejected command (bad
input, unknown identifier) reports a ``Rejection`` and leaves state
untouched; an accepted command reports whether the follow-up save
succeeded via ``PersistResult``.  The API layer maps these onto HTTP
status codes.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Optional


class Rejection(str, Enum):
    EMPTY_NAME = "empty_name"
    INVALID_POINTS = "invalid_points"
    NO_EVENT_SELECTED = "no_event_selected"
    MEMBER_NOT_FOUND = "member_not_found"
    EVENT_NOT_FOUND = "event_not_found"
    INDEX_OUT_OF_RANGE = "index_out_of_range"


@dataclass(frozen=True)
class PersistResult:
    """Outcome of writing a collection to the store."""

    ok: bool
    reason: Optional[str] = None

    @classmethod
    def success(cls) -> "PersistResult":
        return cls(ok=True)

    @classmethod
    def failure(cls, reason: str) -> "PersistResult":
        return cls(ok=False, reason=reason)


@dataclass
class CommandResult:
    """Outcome of a roster command.

    ``applied`` is ``False`` only for rejected commands, in which case
    ``reason`` names the rejection and ``persisted`` is ``None``.
    Commands that change nothing persistent (event selection) are
    applied with ``persisted`` left as ``None``.
    """

    applied: bool
    reason: Optional[Rejection] = None
    persisted: Optional[PersistResult] = None
    record: Any = None

    @classmethod
    def rejected(cls, reason: Rejection) -> "CommandResult":
        return cls(applied=False, reason=reason)

    @property
    def ok(self) -> bool:
        return self.applied and (self.persisted is None or self.persisted.ok)


@dataclass(frozen=True)
class ExportResult:
    """Outcome of writing the ranking export file."""

    ok: bool
    path: Optional[Path] = None
    reason: Optional[str] = None

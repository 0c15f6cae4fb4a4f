"""
Pydantic models for point-earning events.

An ``Event`` is a named category with a point value and a display
glyph.  Events are immutable once created; the only change allowed is
deletion.  ``EventCreate`` carries the points as text, exactly as typed
into the add-event form, and the service decides whether it parses.
"""

from typing import List
from uuid import UUID, uuid4

from pydantic import BaseModel, Field

DEFAULT_EMOJI = "⭐"

# Glyphs offered by the add-event picker.
EMOJI_PALETTE: List[str] = ["⭐", "🎵", "🎤", "🎓", "🤝", "🍕", "🎸", "📚", "🏆", "🔥"]


class Event(BaseModel):
    id: UUID = Field(default_factory=uuid4)
    name: str = Field(..., min_length=1, examples=["Karaoke"])
    points: int = Field(..., examples=[1])
    emoji: str = Field(DEFAULT_EMOJI, examples=["🎶"])

    model_config = {"frozen": True}


class EventCreate(BaseModel):
    """Schema for creating an event from the add-event form."""

    name: str = Field(..., examples=["Concert"])
    points: str = Field(..., examples=["5"])
    emoji: str = Field(DEFAULT_EMOJI, examples=["🎸"])


class EventSelection(BaseModel):
    """Schema for choosing the event used by subsequent point awards."""

    event_id: UUID


def default_events() -> List[Event]:
    """Return the events seeded on first run.  Identifiers are fresh on every call."""
    return [
        Event(name="University", points=4, emoji="🎓"),
        Event(name="Gathering", points=3, emoji="🤝"),
        Event(name="Symposium", points=2, emoji="🎤"),
        Event(name="Karaoke", points=1, emoji="🎶"),
    ]

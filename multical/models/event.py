# File: multical/models/event.py

import uuid
from dataclasses import dataclass, field, replace
from datetime import date, datetime, timedelta
from typing import Optional, Tuple

from .common import format_datetime, is_blank

EventKey = Tuple[str, datetime, datetime]


@dataclass(frozen=True)
class Event:
    """
    One concrete calendar occurrence.

    Start and end are naive local datetimes; the owning calendar's timezone
    gives them meaning. Events are immutable: edits produce a new Event with
    the same ``id`` and ``series_id``.
    """
    subject: str
    start: datetime
    end: datetime
    description: Optional[str] = None
    location: Optional[str] = None
    is_private: bool = False
    id: uuid.UUID = field(default_factory=uuid.uuid4)
    series_id: Optional[uuid.UUID] = None

    def __post_init__(self):
        """Validate event data and normalise optional text fields."""
        if is_blank(self.subject):
            raise ValueError("Event subject cannot be empty")
        if self.start.tzinfo is not None or self.end.tzinfo is not None:
            raise ValueError(f"Event times must be local (naive) datetimes: {self.subject}")
        if self.end <= self.start:
            raise ValueError(f"Event end time must be after start time: {self.subject}")

        # Unset description/location is None, never ""
        if self.description == "":
            object.__setattr__(self, 'description', None)
        if self.location == "":
            object.__setattr__(self, 'location', None)

    @property
    def key(self) -> EventKey:
        """Uniqueness key within a calendar."""
        return (self.subject, self.start, self.end)

    @property
    def date(self) -> date:
        return self.start.date()

    @property
    def duration(self) -> timedelta:
        return self.end - self.start

    @property
    def is_recurring(self) -> bool:
        return self.series_id is not None

    def duration_minutes(self) -> int:
        """Calculate event duration in minutes."""
        return int(self.duration.total_seconds() / 60)

    def is_busy_at(self, instant: datetime) -> bool:
        """True if instant falls in [start, end)."""
        return self.start <= instant < self.end

    def overlaps_with(self, other: 'Event') -> bool:
        """Check if this event overlaps with another."""
        return self.start < other.end and self.end > other.start

    def with_changes(self, **changes) -> 'Event':
        """Return a copy with some fields replaced (identity kept unless given)."""
        return replace(self, **changes)

    def to_dict(self) -> dict:
        """Convert to dictionary for export collaborators."""
        return {
            'id': str(self.id),
            'subject': self.subject,
            'start': format_datetime(self.start),
            'end': format_datetime(self.end),
            'description': self.description,
            'location': self.location,
            'is_private': self.is_private,
            'series_id': str(self.series_id) if self.series_id else None,
        }

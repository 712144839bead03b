# File: multical/models/series.py

import uuid
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Callable, FrozenSet, List, Optional

from .enums import Weekday
from .event import Event


@dataclass(frozen=True)
class EventSeries:
    """
    A recurrence definition: template event, weekdays and one termination rule.

    Exactly one of ``end_date`` (inclusive) or ``occurrences`` is set. The
    template fixes subject, description, location, privacy, time-of-day and
    duration for every occurrence, and its date is the first candidate date.
    """
    template: Event
    weekdays: FrozenSet[Weekday]
    end_date: Optional[date] = None
    occurrences: Optional[int] = None
    series_id: uuid.UUID = field(default_factory=uuid.uuid4)

    def __post_init__(self):
        """Validate the recurrence and coerce weekday values."""
        weekdays = frozenset(Weekday.coerce(day) for day in (self.weekdays or ()))
        if not weekdays:
            raise ValueError("A series needs at least one weekday")
        object.__setattr__(self, 'weekdays', weekdays)

        if (self.end_date is None) == (self.occurrences is None):
            raise ValueError("Set exactly one of end_date or occurrences")

        if self.occurrences is not None and self.occurrences <= 0:
            raise ValueError(f"Occurrence count must be positive: {self.occurrences}")

        if self.template.start.date() != self.template.end.date():
            raise ValueError(
                f"Series occurrences cannot span midnight: {self.template.subject}"
            )

        if self.end_date is not None and self.end_date < self.template.start.date():
            raise ValueError(
                f"Series end date {self.end_date} is before its first date "
                f"{self.template.start.date()}"
            )

    @property
    def uses_end_date(self) -> bool:
        """True if the series stops at end_date, False if it stops after N occurrences."""
        return self.end_date is not None

    @property
    def start_date(self) -> date:
        return self.template.start.date()

    def occurrence_dates(self) -> List[date]:
        """
        Enumerate the dates this series falls on.

        Starts at the template date and steps one day at a time, keeping dates
        whose weekday is selected, until the count is reached or the date
        passes end_date (a date equal to end_date is kept).
        """
        dates = []
        current = self.start_date
        while True:
            if self.uses_end_date and current > self.end_date:
                break
            if not self.uses_end_date and len(dates) >= self.occurrences:
                break
            if Weekday.from_date(current) in self.weekdays:
                dates.append(current)
            current += timedelta(days=1)
        return dates

    def build_occurrences(
        self,
        id_factory: Callable[[], uuid.UUID] = uuid.uuid4
    ) -> List[Event]:
        """
        Synthesize one Event per occurrence date.

        Args:
            id_factory: Source of fresh per-occurrence identities

        Returns:
            Events sharing this series' series_id, ordered by date
        """
        start_time = self.template.start.time()
        duration = self.template.duration
        occurrences = []
        for day in self.occurrence_dates():
            start = datetime.combine(day, start_time)
            occurrences.append(self.template.with_changes(
                start=start,
                end=start + duration,
                id=id_factory(),
                series_id=self.series_id,
            ))
        return occurrences

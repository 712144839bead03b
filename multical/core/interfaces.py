# File: multical/core/interfaces.py
"""
Operation contracts for the calendar core.

CalendarModel and Calendar implement these; tests and callers may substitute
their own doubles.
"""

import uuid
from abc import ABC, abstractmethod
from datetime import date, datetime
from typing import List, Optional

from multical.models import EditSpec, Event, EventSeries


class CalendarModelInterface(ABC):
    """Event store for a single calendar."""

    @abstractmethod
    def create_event(self, event: Event) -> bool:
        pass

    @abstractmethod
    def create_event_series(self, series: EventSeries) -> bool:
        pass

    @abstractmethod
    def edit_event(self, event_id: uuid.UUID, spec: EditSpec) -> bool:
        pass

    @abstractmethod
    def edit_entire_series(self, series_id: uuid.UUID, spec: EditSpec) -> bool:
        pass

    @abstractmethod
    def edit_series_from(self, series_id: uuid.UUID, from_date: date, spec: EditSpec) -> bool:
        pass

    @abstractmethod
    def get_events_on_date(self, day: date) -> List[Event]:
        pass

    @abstractmethod
    def get_events_in_range(self, start: datetime, end: datetime) -> List[Event]:
        pass

    @abstractmethod
    def get_all_events(self) -> List[Event]:
        pass

    @abstractmethod
    def is_busy(self, instant: datetime) -> bool:
        pass

    @abstractmethod
    def find_event_by_id(self, event_id: uuid.UUID) -> Optional[Event]:
        pass

    @abstractmethod
    def find_event_by_properties(
        self, subject: str, start: datetime, end: datetime
    ) -> Optional[Event]:
        pass


class CalendarInterface(ABC):
    """A named, timezone-bound calendar owning one model."""

    @property
    @abstractmethod
    def name(self) -> str:
        pass

    @abstractmethod
    def set_name(self, name: str) -> None:
        pass

    @property
    @abstractmethod
    def timezone(self) -> str:
        pass

    @abstractmethod
    def set_timezone(self, timezone_name: str) -> List[uuid.UUID]:
        pass

    @property
    @abstractmethod
    def model(self) -> CalendarModelInterface:
        pass

# File: multical/core/calendar_model.py
"""
In-memory event store for one calendar.

Holds every Event of the calendar, expands EventSeries into Events, applies
EditSpecs at event / series-from-date / entire-series scope and answers
date, range and busy queries.

Invariant: no two stored events share a (subject, start, end) key. Every
mutation checks it before committing; composite operations (series creation
and series edits) build all candidate events first and commit them in one
step, so a rejected call leaves the store untouched.

Not thread-safe: callers must serialise access to a model.
"""

import uuid
from datetime import date, datetime, timedelta
from typing import Callable, Dict, Iterable, List, Optional

from multical.core.interfaces import CalendarModelInterface
from multical.models import EditSpec, Event, EventKey, EventSeries
from multical.utils.logger import setup_logger

logger = setup_logger(__name__)


class CalendarModel(CalendarModelInterface):
    """Event store enforcing the (subject, start, end) uniqueness invariant."""

    def __init__(self, id_factory: Callable[[], uuid.UUID] = uuid.uuid4):
        """
        Initialize an empty model.

        Args:
            id_factory: Source of identities for series occurrences
        """
        self._id_factory = id_factory
        self._events: Dict[uuid.UUID, Event] = {}
        self._keys: Dict[EventKey, uuid.UUID] = {}

    def __len__(self) -> int:
        return len(self._events)

    def __contains__(self, event_id) -> bool:
        return event_id in self._events

    # ==================== Creation ====================

    def create_event(self, event: Event) -> bool:
        """
        Add a single event.

        Returns:
            False (and no change) if an event with the same subject, start and
            end already exists, or the id is already in use
        """
        if event.key in self._keys or event.id in self._events:
            logger.debug(f"Rejected duplicate event: {event.subject} at {event.start}")
            return False

        self._insert(event)
        logger.debug(f"Created event '{event.subject}' {event.start} - {event.end}")
        return True

    def create_event_series(self, series: EventSeries) -> bool:
        """
        Expand a series and add all of its occurrences.

        All-or-nothing: if any occurrence collides with an existing event or
        with another occurrence, nothing is added.
        """
        occurrences = series.build_occurrences(self._id_factory)
        if not occurrences:
            logger.warning(f"Series '{series.template.subject}' produced no occurrences")
            return False

        seen_keys = set()
        for occurrence in occurrences:
            if occurrence.key in self._keys or occurrence.key in seen_keys:
                logger.debug(
                    f"Rejected series '{series.template.subject}': "
                    f"duplicate occurrence at {occurrence.start}"
                )
                return False
            seen_keys.add(occurrence.key)

        for occurrence in occurrences:
            self._insert(occurrence)

        logger.info(
            f"Created series '{series.template.subject}' with "
            f"{len(occurrences)} occurrences ({series.series_id})"
        )
        return True

    # ==================== Editing ====================

    def edit_event(self, event_id: uuid.UUID, spec: EditSpec) -> bool:
        """
        Apply an EditSpec to one event.

        Returns:
            False if the event does not exist or the edited event would
            duplicate a different event

        Raises:
            ValueError: If the edited event would be invalid (end <= start)
        """
        current = self._events.get(event_id)
        if current is None:
            logger.debug(f"Edit failed, no event with id {event_id}")
            return False

        candidate = spec.apply_to(current)
        if not self._is_unique([candidate]):
            logger.debug(f"Edit of '{current.subject}' rejected: would duplicate an event")
            return False

        self._commit([candidate])
        return True

    def edit_entire_series(self, series_id: uuid.UUID, spec: EditSpec) -> bool:
        """Apply an EditSpec to every occurrence of a series."""
        members = self.get_series(series_id)
        if not members:
            logger.debug(f"Edit failed, no series with id {series_id}")
            return False
        return self._edit_members(members, spec)

    def edit_series_from(self, series_id: uuid.UUID, from_date: date, spec: EditSpec) -> bool:
        """
        Apply an EditSpec to the occurrences of a series dated on or after from_date.

        Earlier occurrences are untouched. Edited occurrences keep the series id.
        """
        members = [e for e in self.get_series(series_id) if e.start.date() >= from_date]
        if not members:
            logger.debug(f"Edit failed, series {series_id} has no occurrence from {from_date}")
            return False
        return self._edit_members(members, spec)

    def _edit_members(self, members: List[Event], spec: EditSpec) -> bool:
        candidates = self._apply_to_series(members, spec)
        if not self._is_unique(candidates):
            logger.debug(
                f"Series edit of '{members[0].subject}' rejected: would duplicate an event"
            )
            return False

        self._commit(candidates)
        logger.info(f"Edited {len(candidates)} occurrences of '{members[0].subject}'")
        return True

    @staticmethod
    def _apply_to_series(members: List[Event], spec: EditSpec) -> List[Event]:
        """
        Overlay a spec on series members.

        New start/end values are turned into time-of-day deltas against the
        first member and added to every member, so each keeps its own date.
        """
        reference = members[0]
        start_delta = timedelta(0)
        end_delta = timedelta(0)
        if spec.start is not None:
            start_delta = datetime.combine(reference.start.date(), spec.start.time()) - reference.start
        if spec.end is not None:
            end_delta = datetime.combine(reference.end.date(), spec.end.time()) - reference.end

        changes = spec.non_time_changes()
        candidates = []
        for event in members:
            new_start = event.start + start_delta
            new_end = event.end + end_delta
            if new_start.date() != event.start.date() or new_end.date() != event.end.date():
                raise ValueError(
                    f"Series edit would move '{event.subject}' on {event.start.date()} to another day"
                )
            candidates.append(event.with_changes(start=new_start, end=new_end, **changes))
        return candidates

    # ==================== Queries ====================

    def get_events_on_date(self, day: date) -> List[Event]:
        """All events starting on the given date, ordered by start."""
        return self._sorted(e for e in self._events.values() if e.start.date() == day)

    def get_events_in_range(self, start: datetime, end: datetime) -> List[Event]:
        """All events whose start falls within [start, end], ordered by start."""
        if end < start:
            raise ValueError(f"Range end {end} is before range start {start}")
        return self._sorted(e for e in self._events.values() if start <= e.start <= end)

    def get_all_events(self) -> List[Event]:
        """Every event, ordered by start (ties in insertion order)."""
        return self._sorted(self._events.values())

    def get_series(self, series_id: uuid.UUID) -> List[Event]:
        """Occurrences sharing a series id, ordered by start."""
        if series_id is None:
            return []
        return self._sorted(e for e in self._events.values() if e.series_id == series_id)

    def is_busy(self, instant: datetime) -> bool:
        """True if any event's [start, end) interval contains instant."""
        return any(e.is_busy_at(instant) for e in self._events.values())

    def find_event_by_id(self, event_id: uuid.UUID) -> Optional[Event]:
        return self._events.get(event_id)

    def find_event_by_properties(
        self, subject: str, start: datetime, end: datetime
    ) -> Optional[Event]:
        event_id = self._keys.get((subject, start, end))
        return self._events.get(event_id) if event_id is not None else None

    def find_event(self, subject: str, start: datetime) -> Optional[Event]:
        """First event (by start, then insertion) with this subject and start time."""
        for event in self.get_events_on_date(start.date()):
            if event.subject == subject and event.start == start:
                return event
        return None

    # ==================== Internals ====================

    @staticmethod
    def _sorted(events: Iterable[Event]) -> List[Event]:
        # sorted() is stable, so equal starts keep insertion order
        return sorted(events, key=lambda e: e.start)

    def _insert(self, event: Event) -> None:
        self._events[event.id] = event
        self._keys[event.key] = event.id

    def _is_unique(self, candidates: List[Event]) -> bool:
        """
        Check that replacing stored events with candidates keeps keys unique.

        A candidate may take a key currently held by another candidate, since
        that event is being replaced too.
        """
        moving_ids = {c.id for c in candidates}
        new_keys = set()
        for candidate in candidates:
            if candidate.key in new_keys:
                return False
            new_keys.add(candidate.key)

            holder = self._keys.get(candidate.key)
            if holder is not None and holder not in moving_ids:
                return False
        return True

    def _commit(self, candidates: List[Event]) -> None:
        """Replace stored events in place (dict order, i.e. insertion order, is kept)."""
        for candidate in candidates:
            old = self._events[candidate.id]
            if self._keys.get(old.key) == old.id:
                del self._keys[old.key]
        for candidate in candidates:
            self._events[candidate.id] = candidate
            self._keys[candidate.key] = candidate.id

# File: multical/core/calendar_manager.py
"""
Registry of named calendars for multical.

Names are unique ignoring case but keep the case they were created with.
The manager tracks one optional "current" calendar, the target of
unqualified operations, and copies events between calendars.

Not thread-safe: a GUI thread and a batch thread sharing a manager must
serialise their calls.
"""

import uuid
from datetime import date, datetime, timedelta
from typing import Dict, List, Optional

from multical.core.calendar import Calendar
from multical.core.config_manager import Config
from multical.models import Event
from multical.models.common import is_blank
from multical.utils.logger import LoggerMixin
from multical.utils.timezone import convert_local_datetime, is_valid_timezone


class CalendarManager(LoggerMixin):
    """Holds every calendar and the current-calendar reference."""

    def __init__(self):
        self._calendars: Dict[str, Calendar] = {}
        self._current: Optional[Calendar] = None

    @staticmethod
    def _lookup_key(name: str) -> str:
        return name.casefold()

    # ==================== Registry ====================

    def create_calendar(self, name: str, timezone: str = Config.DEFAULT_TIMEZONE) -> bool:
        """
        Create a calendar with an empty model.

        Returns:
            False if the name is blank or already used (ignoring case), or the
            timezone is not a known IANA zone
        """
        if is_blank(name):
            self.logger.warning("Cannot create a calendar without a name")
            return False
        if not is_valid_timezone(timezone):
            self.logger.warning(f"Cannot create calendar '{name}': unknown timezone {timezone!r}")
            return False
        if self._lookup_key(name) in self._calendars:
            self.logger.warning(f"Calendar '{name}' already exists")
            return False

        self._calendars[self._lookup_key(name)] = Calendar(name, timezone)
        self.logger.info(f"Created calendar '{name}' ({timezone})")
        return True

    def get_calendar(self, name: str) -> Optional[Calendar]:
        """Look up a calendar by name, ignoring case."""
        if name is None:
            return None
        return self._calendars.get(self._lookup_key(name))

    def get_all_calendars(self) -> List[Calendar]:
        """Every calendar, in creation order."""
        return list(self._calendars.values())

    def get_current_calendar(self) -> Optional[Calendar]:
        return self._current

    def set_current_calendar(self, name: str) -> bool:
        """Make the named calendar current. False if it does not exist."""
        calendar = self.get_calendar(name)
        if calendar is None:
            self.logger.warning(f"Calendar '{name}' not found")
            return False
        self._current = calendar
        return True

    def edit_calendar_name(self, old_name: str, new_name: str) -> bool:
        """
        Rename a calendar.

        The same Calendar object (and so the same model and event ids) is kept
        under the new name; if it was current it stays current.

        Returns:
            False if old_name is unknown, new_name is blank, or new_name is
            used by a different calendar
        """
        calendar = self.get_calendar(old_name)
        if calendar is None:
            self.logger.warning(f"Calendar '{old_name}' not found")
            return False
        if is_blank(new_name):
            self.logger.warning("Calendar name cannot be empty")
            return False

        holder = self.get_calendar(new_name)
        if holder is not None and holder is not calendar:
            self.logger.warning(f"Calendar '{new_name}' already exists")
            return False

        old_key = self._lookup_key(calendar.name)
        new_key = self._lookup_key(new_name)
        calendar.set_name(new_name)

        # Rebuild so the renamed calendar keeps its position
        self._calendars = {
            (new_key if key == old_key else key): value
            for key, value in self._calendars.items()
        }
        self.logger.info(f"Renamed calendar '{old_name}' to '{new_name}'")
        return True

    def edit_calendar_timezone(self, name: str, timezone: str) -> bool:
        """
        Change a calendar's timezone, converting its events.

        Returns:
            False if the calendar or timezone is unknown
        """
        calendar = self.get_calendar(name)
        if calendar is None:
            self.logger.warning(f"Calendar '{name}' not found")
            return False
        if not is_valid_timezone(timezone):
            self.logger.warning(f"Unknown timezone {timezone!r}")
            return False

        failed = calendar.set_timezone(timezone)
        if failed:
            self.logger.warning(
                f"{len(failed)} event(s) in '{calendar.name}' kept their old times"
            )
        return True

    # ==================== Copying ====================

    def copy_event(
        self,
        subject: str,
        start: datetime,
        target_name: str,
        target_start: datetime
    ) -> bool:
        """
        Copy one event of the current calendar to another calendar.

        The copy starts at target_start (local time of the target calendar),
        keeps the original duration and is not part of any series.

        Returns:
            False if there is no current calendar, the target or source event
            does not exist, or the copy would duplicate an event
        """
        source = self._current
        target = self.get_calendar(target_name)
        if source is None or target is None:
            self.logger.warning("Copy needs a current calendar and an existing target calendar")
            return False

        original = next(
            (e for e in source.model.get_events_on_date(start.date())
             if e.subject == subject and e.start == start),
            None
        )
        if original is None:
            self.logger.warning(f"Event '{subject}' at {start} not found in '{source.name}'")
            return False

        copy = original.with_changes(
            start=target_start,
            end=target_start + original.duration,
            id=uuid.uuid4(),
            series_id=None,
        )
        return target.model.create_event(copy)

    def copy_events_on_date(self, source_date: date, target_name: str, target_date: date) -> int:
        """
        Copy every event starting on source_date to target_date in another calendar.

        Times are converted from the source to the target timezone before the
        date shift.

        Returns:
            Number of events copied
        """
        source = self._current
        target = self.get_calendar(target_name)
        if source is None or target is None:
            self.logger.warning("Copy needs a current calendar and an existing target calendar")
            return 0

        events = source.model.get_events_on_date(source_date)
        return self._copy_events(events, source, target, target_date - source_date)

    def copy_events_between(
        self,
        start_date: date,
        end_date: date,
        target_name: str,
        target_start_date: date
    ) -> int:
        """
        Copy every event starting within [start_date, end_date] to another calendar.

        The interval is moved so that start_date lands on target_start_date;
        times are converted to the target timezone.

        Returns:
            Number of events copied

        Raises:
            ValueError: If end_date is before start_date
        """
        if end_date < start_date:
            raise ValueError(f"End date {end_date} must be after start date {start_date}")

        source = self._current
        target = self.get_calendar(target_name)
        if source is None or target is None:
            self.logger.warning("Copy needs a current calendar and an existing target calendar")
            return 0

        events = source.model.get_events_in_range(
            datetime.combine(start_date, datetime.min.time()),
            datetime.combine(end_date, datetime.max.time()),
        )
        return self._copy_events(events, source, target, target_start_date - start_date)

    def _copy_events(
        self,
        events: List[Event],
        source: Calendar,
        target: Calendar,
        offset: timedelta
    ) -> int:
        """Create shifted, zone-converted copies; series members share a new series id."""
        if not events:
            self.logger.info(f"No events to copy from '{source.name}'")
            return 0

        new_series_ids: Dict[uuid.UUID, uuid.UUID] = {}
        copied = 0
        for event in events:
            series_id = None
            if event.series_id is not None:
                series_id = new_series_ids.setdefault(event.series_id, uuid.uuid4())

            copy = event.with_changes(
                start=convert_local_datetime(event.start, source.timezone, target.timezone) + offset,
                end=convert_local_datetime(event.end, source.timezone, target.timezone) + offset,
                id=uuid.uuid4(),
                series_id=series_id,
            )
            if target.model.create_event(copy):
                copied += 1
            else:
                self.logger.warning(
                    f"Skipped '{event.subject}' at {copy.start}: already in '{target.name}'"
                )

        self.logger.info(f"Copied {copied} event(s) from '{source.name}' to '{target.name}'")
        return copied

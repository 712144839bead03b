# File: multical/core/calendar.py

import uuid
from datetime import datetime
from typing import List, Optional

from multical.core.calendar_model import CalendarModel
from multical.core.interfaces import CalendarInterface, CalendarModelInterface
from multical.models import EditSpec
from multical.models.common import is_blank
from multical.utils.logger import setup_logger
from multical.utils.timezone import convert_local_datetime, get_timezone, localize

logger = setup_logger(__name__)


class Calendar(CalendarInterface):
    """
    A named calendar bound to an IANA timezone.

    Owns exactly one CalendarModel for its whole lifetime; renaming or
    changing the timezone never replaces it.
    """

    def __init__(
        self,
        name: str,
        timezone: str,
        model: Optional[CalendarModelInterface] = None
    ):
        """
        Initialize a calendar.

        Args:
            name: Display name (non-empty)
            timezone: IANA zone name, e.g. "America/New_York"
            model: Event store to own (a fresh CalendarModel if omitted)

        Raises:
            ValueError: If the name is blank or the timezone unknown
        """
        if is_blank(name):
            raise ValueError("Calendar name cannot be empty")
        get_timezone(timezone)

        self._name = name
        self._timezone = timezone
        self._model = model if model is not None else CalendarModel()

    @property
    def name(self) -> str:
        return self._name

    def set_name(self, name: str) -> None:
        """Rename the calendar. The model and its events are untouched."""
        if is_blank(name):
            raise ValueError("Calendar name cannot be empty")
        self._name = name

    @property
    def timezone(self) -> str:
        return self._timezone

    @property
    def model(self) -> CalendarModelInterface:
        return self._model

    def set_timezone(self, timezone_name: str) -> List[uuid.UUID]:
        """
        Move the calendar to another timezone, keeping every event at the same instant.

        Each event's local start/end is read in the current zone, converted to
        the new zone and written back through the model's edit_event, so the
        uniqueness check applies. Edits rejected because another event still
        holds the target key are retried once the other events have moved.
        An event whose converted times are invalid (end not after start, as
        across a DST fall-back) keeps its old times and is reported.

        Args:
            timezone_name: IANA zone name

        Returns:
            Ids of events whose conversion was rejected (empty on full success)

        Raises:
            ValueError: If the timezone is unknown
        """
        get_timezone(timezone_name)
        if timezone_name == self._timezone:
            return []

        old_zone = self._timezone
        pending = list(self._model.get_all_events())
        invalid: List[uuid.UUID] = []
        logger.info(
            f"Converting {len(pending)} events of '{self._name}' "
            f"from {old_zone} to {timezone_name}"
        )

        while pending:
            rejected = []
            for event in pending:
                spec = EditSpec(
                    start=convert_local_datetime(event.start, old_zone, timezone_name),
                    end=convert_local_datetime(event.end, old_zone, timezone_name),
                )
                try:
                    accepted = self._model.edit_event(event.id, spec)
                except ValueError as e:
                    # e.g. a DST fall-back leaves the converted end before the start
                    logger.warning(
                        f"Could not convert '{event.subject}' at {event.start} "
                        f"to {timezone_name}: {e}"
                    )
                    invalid.append(event.id)
                    continue
                if not accepted:
                    rejected.append(event)
            if len(rejected) == len(pending):
                break
            pending = rejected

        self._timezone = timezone_name

        for event in pending:
            logger.warning(
                f"Could not convert '{event.subject}' at {event.start} to {timezone_name}: "
                f"it would duplicate an existing event"
            )
        return invalid + [event.id for event in pending]

    def localize(self, dt: datetime) -> datetime:
        """Attach this calendar's timezone to a naive local datetime."""
        return localize(dt, self._timezone)

    def to_dict(self) -> dict:
        """Convert to dictionary for export collaborators."""
        return {
            'name': self._name,
            'timezone': self._timezone,
        }

    def __repr__(self) -> str:
        return f"Calendar(name={self._name!r}, timezone={self._timezone!r})"

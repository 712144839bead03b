"""
multical: personal calendars with recurring event series.

Calendars live in a CalendarManager; each Calendar owns a CalendarModel that
stores its events and applies single-event and series edits.
"""

from multical.core.calendar import Calendar
from multical.core.calendar_manager import CalendarManager
from multical.core.calendar_model import CalendarModel
from multical.models import EditSpec, Event, EventSeries, Weekday

__version__ = "0.1.0"

__all__ = [
    "Calendar",
    "CalendarManager",
    "CalendarModel",
    "EditSpec",
    "Event",
    "EventSeries",
    "Weekday",
]

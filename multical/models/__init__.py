from .enums import Weekday, weekdays_from_codes
from .common import parse_date, parse_time, parse_datetime, format_datetime
from .event import Event, EventKey
from .edit_spec import EditSpec, edit_spec_from_property
from .series import EventSeries

__all__ = [
    "Weekday",
    "weekdays_from_codes",
    "parse_date",
    "parse_time",
    "parse_datetime",
    "format_datetime",
    "Event",
    "EventKey",
    "EditSpec",
    "edit_spec_from_property",
    "EventSeries",
]

# File: multical/utils/timezone.py
"""
Timezone utilities for multical.

Event times are stored as naive local datetimes; a calendar's IANA zone gives
them meaning. These helpers move a local time between zones while keeping the
instant it denotes.
"""

from datetime import datetime

import pytz


def is_valid_timezone(timezone_name: str) -> bool:
    """Check whether a name is a known IANA timezone."""
    return bool(timezone_name) and timezone_name in pytz.all_timezones_set


def get_timezone(timezone_name: str):
    """
    Get a pytz timezone object by IANA name.

    Raises:
        ValueError: If the name is empty or not a known zone.
    """
    if not timezone_name:
        raise ValueError("Timezone name cannot be empty")
    try:
        return pytz.timezone(timezone_name)
    except pytz.UnknownTimeZoneError:
        raise ValueError(f"Unknown timezone: {timezone_name}")


def localize(dt: datetime, timezone_name: str) -> datetime:
    """
    Attach a timezone to a naive local datetime.

    Args:
        dt: A naive datetime representing local time in ``timezone_name``.
        timezone_name: IANA zone name.

    Returns:
        A timezone-aware datetime.
    """
    zone = get_timezone(timezone_name)
    if dt.tzinfo is not None:
        return dt.astimezone(zone)
    return zone.localize(dt)


def convert_local_datetime(dt: datetime, from_zone: str, to_zone: str) -> datetime:
    """
    Re-express a naive local datetime from one zone in another.

    The result is the naive local time in ``to_zone`` for the same instant
    that ``dt`` denotes in ``from_zone``.
    """
    if from_zone == to_zone:
        return dt
    target = get_timezone(to_zone)
    zoned = localize(dt, from_zone)
    return target.normalize(zoned.astimezone(target)).replace(tzinfo=None)

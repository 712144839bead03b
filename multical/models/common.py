# File: multical/models/common.py

from datetime import date, datetime, time
from typing import Optional

from multical.core.config_manager import Config


def parse_date(date_str: str) -> date:
    """Parse a YYYY-MM-DD string. Raises ValueError if malformed."""
    return datetime.strptime(date_str.strip(), Config.DATE_FORMAT).date()


def parse_time(time_str: str) -> time:
    """Parse an HH:MM string. Raises ValueError if malformed."""
    return datetime.strptime(time_str.strip(), Config.TIME_FORMAT).time()


def parse_datetime(datetime_str: str) -> datetime:
    """Parse a YYYY-MM-DDTHH:MM string. Raises ValueError if malformed."""
    return datetime.strptime(datetime_str.strip(), Config.DATETIME_FORMAT)


def format_datetime(dt: Optional[datetime]) -> Optional[str]:
    """Format a datetime the way parse_datetime reads it."""
    if dt is None:
        return None
    return dt.strftime(Config.DATETIME_FORMAT)


def is_blank(value: Optional[str]) -> bool:
    """True for None or a whitespace-only string."""
    return value is None or not value.strip()

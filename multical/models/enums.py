# File: multical/models/enums.py

from datetime import date
from enum import Enum
from typing import Iterable, Set, Union

from multical.core.config_manager import Config


class Weekday(Enum):
    """Days of the week, numbered like date.weekday()."""
    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5
    SUNDAY = 6

    @property
    def code(self) -> str:
        """Single-letter code (M, T, W, R, F, S, U)."""
        return Config.WEEKDAY_CODES[self.value]

    @classmethod
    def from_date(cls, day: date) -> 'Weekday':
        return cls(day.weekday())

    @classmethod
    def from_code(cls, code: str) -> 'Weekday':
        """Parse a single-letter weekday code (case-insensitive)."""
        letter = code.strip().upper()
        if letter not in Config.WEEKDAY_CODES:
            raise ValueError(f"Unknown weekday code: {code!r}")
        return cls(Config.WEEKDAY_CODES.index(letter))

    @classmethod
    def coerce(cls, value: Union['Weekday', int, str]) -> 'Weekday':
        """Accept a Weekday, a weekday number, a code letter or a day name."""
        if isinstance(value, cls):
            return value
        if isinstance(value, int):
            return cls(value)
        if isinstance(value, str):
            if len(value.strip()) == 1:
                return cls.from_code(value)
            try:
                return cls[value.strip().upper()]
            except KeyError:
                raise ValueError(f"Unknown weekday: {value!r}")
        raise ValueError(f"Cannot interpret {value!r} as a weekday")


def weekdays_from_codes(codes: Union[str, Iterable[str]]) -> Set[Weekday]:
    """
    Build a weekday set from codes such as "MWF".

    Example:
        >>> sorted(d.code for d in weekdays_from_codes("MW"))
        ['M', 'W']
    """
    result = {Weekday.from_code(c) for c in codes if c.strip()}
    if not result:
        raise ValueError("At least one weekday is required")
    return result

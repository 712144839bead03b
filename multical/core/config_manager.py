# File: multical/core/config_manager.py
"""
Centralized configuration management for multical.
Loads settings from environment variables (and a .env file if present).
"""

import os
import logging
from pathlib import Path
from typing import Dict, List

import pytz
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ['1', 'true', 'yes', 'on']


class Config:
    """Application configuration singleton."""

    # Base directories
    BASE_DIR = Path(__file__).parent.parent.parent  # Go up 3 levels from multical/core/
    LOGS_DIR = Path(os.getenv("MULTICAL_LOGS_DIR", str(BASE_DIR / "logs")))

    # Application Settings
    DEFAULT_TIMEZONE = os.getenv("MULTICAL_TIMEZONE", "America/New_York")
    LOG_LEVEL = os.getenv("MULTICAL_LOG_LEVEL", "INFO").upper()
    LOG_TO_FILE = _env_flag("MULTICAL_LOG_TO_FILE", "false")  # opt-in

    # Date/time formats used by the command and export layers
    DATE_FORMAT = "%Y-%m-%d"
    TIME_FORMAT = "%H:%M"
    DATETIME_FORMAT = "%Y-%m-%dT%H:%M"

    # Single-letter weekday codes, indexed like date.weekday()
    WEEKDAY_CODES: List[str] = ['M', 'T', 'W', 'R', 'F', 'S', 'U']

    # Property names accepted by edit commands
    EDITABLE_PROPERTIES: Dict[str, str] = {
        'subject': 'subject',
        'start': 'start',
        'end': 'end',
        'description': 'description',
        'location': 'location',
        'status': 'is_private',
    }

    @classmethod
    def log_level(cls) -> int:
        """Resolve LOG_LEVEL to a logging constant (INFO if unknown)."""
        level = logging.getLevelName(cls.LOG_LEVEL)
        return level if isinstance(level, int) else logging.INFO

    @classmethod
    def validate(cls) -> bool:
        """Validate that the configuration is usable."""
        errors = []

        if cls.DEFAULT_TIMEZONE not in pytz.all_timezones_set:
            errors.append(f"MULTICAL_TIMEZONE is not a known IANA zone: {cls.DEFAULT_TIMEZONE}")

        if not isinstance(logging.getLevelName(cls.LOG_LEVEL), int):
            errors.append(f"MULTICAL_LOG_LEVEL is not a logging level: {cls.LOG_LEVEL}")

        if errors:
            for error in errors:
                print(f"Configuration Error: {error}")
            return False

        return True

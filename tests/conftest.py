# File: tests/conftest.py
"""
Pytest configuration and shared fixtures.
Provides reusable calendars, events and series for all tests.
"""

import os
import sys
import uuid
from datetime import date, datetime
from pathlib import Path

import pytest

# Keep test runs from writing log files
os.environ.setdefault("MULTICAL_LOG_TO_FILE", "false")

# Add project root to path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from multical.core.calendar_manager import CalendarManager
from multical.core.calendar_model import CalendarModel
from multical.models import Event, EventSeries, Weekday


# ==================== Model Fixtures ====================

@pytest.fixture
def model():
    """Empty calendar model."""
    return CalendarModel()


@pytest.fixture
def manager():
    """Calendar manager with no calendars."""
    return CalendarManager()


@pytest.fixture
def work_manager(manager):
    """Manager with a current "Work" calendar in New York and a "Home" calendar in Paris."""
    manager.create_calendar("Work", "America/New_York")
    manager.create_calendar("Home", "Europe/Paris")
    manager.set_current_calendar("Work")
    return manager


# ==================== Event Fixtures ====================

@pytest.fixture
def meeting():
    """A one-hour meeting on 2025-06-01."""
    return Event(
        subject="Meeting",
        start=datetime(2025, 6, 1, 10, 0),
        end=datetime(2025, 6, 1, 11, 0),
        description="Team sync",
        location="Room 101",
    )


@pytest.fixture
def standup_template():
    """Template for a Monday/Wednesday standup starting Monday 2025-06-02."""
    return Event(
        subject="Standup",
        start=datetime(2025, 6, 2, 9, 0),
        end=datetime(2025, 6, 2, 9, 30),
        location="Zoom",
    )


@pytest.fixture
def standup_series(standup_template):
    """Four Monday/Wednesday standups: 06-02, 06-04, 06-09, 06-11."""
    return EventSeries(
        template=standup_template,
        weekdays={Weekday.MONDAY, Weekday.WEDNESDAY},
        occurrences=4,
    )


@pytest.fixture
def model_with_series(model, standup_series):
    """Model holding the four standup occurrences."""
    assert model.create_event_series(standup_series)
    return model


# ==================== Helper Fixtures ====================

@pytest.fixture
def counting_ids():
    """Deterministic id factory producing UUIDs 1, 2, 3, ..."""
    counter = {'next': 0}

    def _next_id() -> uuid.UUID:
        counter['next'] += 1
        return uuid.UUID(int=counter['next'])

    return _next_id


@pytest.fixture
def assert_keys_unique():
    """Helper asserting the (subject, start, end) invariant on a model."""
    def _assert_unique(calendar_model: CalendarModel):
        keys = [e.key for e in calendar_model.get_all_events()]
        assert len(keys) == len(set(keys)), "Events must not share subject, start and end"

    return _assert_unique


@pytest.fixture
def june():
    """Shortcut for dates in June 2025."""
    return lambda day: date(2025, 6, day)


# ==================== Pytest Markers ====================

def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )

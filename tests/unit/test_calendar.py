# File: tests/unit/test_calendar.py
"""
Unit tests for Calendar.
Tests naming, timezone validation and event conversion on timezone change.
"""

from datetime import datetime
from unittest.mock import Mock

import pytest

from multical.core.calendar import Calendar
from multical.core.interfaces import CalendarModelInterface
from multical.models import EditSpec, Event


class TestCalendarCreation:
    """Tests for calendar construction and renaming."""

    def test_calendar_creation(self):
        calendar = Calendar("Work", "America/New_York")

        assert calendar.name == "Work"
        assert calendar.timezone == "America/New_York"
        assert len(calendar.model) == 0

    def test_blank_name_raises(self):
        with pytest.raises(ValueError, match="name cannot be empty"):
            Calendar("  ", "America/New_York")

    def test_unknown_timezone_raises(self):
        with pytest.raises(ValueError, match="Unknown timezone"):
            Calendar("Work", "Mars/Olympus_Mons")

    def test_set_name_keeps_model(self):
        calendar = Calendar("Work", "America/New_York")
        model = calendar.model

        calendar.set_name("Office")

        assert calendar.name == "Office"
        assert calendar.model is model

    def test_set_blank_name_raises(self):
        calendar = Calendar("Work", "America/New_York")

        with pytest.raises(ValueError):
            calendar.set_name("")
        assert calendar.name == "Work"

    def test_to_dict(self):
        assert Calendar("Home", "Europe/Paris").to_dict() == {
            'name': "Home",
            'timezone': "Europe/Paris",
        }

    def test_localize(self):
        calendar = Calendar("Home", "Europe/Paris")

        aware = calendar.localize(datetime(2025, 6, 1, 12, 0))

        assert aware.utcoffset().total_seconds() == 2 * 3600


class TestSetTimezone:
    """Tests for converting events when the timezone changes."""

    @pytest.fixture
    def calendar(self, meeting):
        calendar = Calendar("Work", "America/New_York")
        calendar.model.create_event(meeting)
        return calendar

    def test_events_keep_their_instant(self, calendar, meeting):
        """10:00 in New York is 16:00 in Paris in June."""
        failed = calendar.set_timezone("Europe/Paris")

        converted = calendar.model.find_event_by_id(meeting.id)
        assert failed == []
        assert calendar.timezone == "Europe/Paris"
        assert converted.start == datetime(2025, 6, 1, 16, 0)
        assert converted.end == datetime(2025, 6, 1, 17, 0)
        assert converted.subject == meeting.subject
        assert converted.description == meeting.description

    def test_round_trip(self, calendar, meeting):
        """Converting there and back restores the original times."""
        calendar.set_timezone("Asia/Tokyo")
        calendar.set_timezone("America/New_York")

        assert calendar.model.find_event_by_id(meeting.id) == meeting

    def test_same_timezone_is_noop(self, calendar, meeting):
        assert calendar.set_timezone("America/New_York") == []
        assert calendar.model.find_event_by_id(meeting.id) == meeting

    def test_unknown_timezone_raises(self, calendar):
        with pytest.raises(ValueError):
            calendar.set_timezone("Nowhere/Special")
        assert calendar.timezone == "America/New_York"

    def test_date_can_change(self):
        """Late evening in New York is the next morning in Tokyo."""
        calendar = Calendar("Work", "America/New_York")
        late = Event("Call", datetime(2025, 6, 1, 22, 0), datetime(2025, 6, 1, 23, 0))
        calendar.model.create_event(late)

        calendar.set_timezone("Asia/Tokyo")

        assert calendar.model.find_event_by_id(late.id).start == datetime(2025, 6, 2, 11, 0)

    def test_series_membership_kept(self, model_with_series):
        calendar = Calendar("Team", "America/New_York", model_with_series)
        series_ids = {e.series_id for e in model_with_series.get_all_events()}

        calendar.set_timezone("UTC")

        assert {e.series_id for e in calendar.model.get_all_events()} == series_ids
        assert [e.start.hour for e in calendar.model.get_all_events()] == [13] * 4

    def test_transient_collision_is_retried(self):
        """An event blocked by one that has not moved yet converts on the retry."""
        calendar = Calendar("Work", "America/New_York")
        morning = Event("Sync", datetime(2025, 6, 1, 10, 0), datetime(2025, 6, 1, 11, 0))
        afternoon = Event("Sync", datetime(2025, 6, 1, 16, 0), datetime(2025, 6, 1, 17, 0))
        calendar.model.create_event(morning)
        calendar.model.create_event(afternoon)

        failed = calendar.set_timezone("Europe/Paris")

        assert failed == []
        assert calendar.model.find_event_by_id(morning.id).start == datetime(2025, 6, 1, 16, 0)
        assert calendar.model.find_event_by_id(afternoon.id).start == datetime(2025, 6, 1, 22, 0)

    def test_conversion_goes_through_edit_event(self, meeting):
        """The model's edit_event applies each conversion."""
        model = Mock(spec=CalendarModelInterface)
        model.get_all_events.return_value = [meeting]
        model.edit_event.return_value = True
        calendar = Calendar("Work", "America/New_York", model)

        calendar.set_timezone("Europe/Paris")

        model.edit_event.assert_called_once_with(
            meeting.id,
            EditSpec(start=datetime(2025, 6, 1, 16, 0), end=datetime(2025, 6, 1, 17, 0)),
        )

    def test_rejected_conversion_reported(self, meeting):
        """Events the model keeps rejecting are returned; the zone still changes."""
        model = Mock(spec=CalendarModelInterface)
        model.get_all_events.return_value = [meeting]
        model.edit_event.return_value = False
        calendar = Calendar("Work", "America/New_York", model)

        failed = calendar.set_timezone("Europe/Paris")

        assert failed == [meeting.id]
        assert calendar.timezone == "Europe/Paris"
        assert model.edit_event.call_count == 1

    def test_dst_fall_back_conversion_reported(self):
        """An event whose converted end lands before its start keeps its times; the rest convert."""
        calendar = Calendar("Ops", "UTC")
        summer = Event("Deploy", datetime(2025, 6, 1, 10, 0), datetime(2025, 6, 1, 11, 0))
        # 05:30 UTC is 01:30 EDT, 06:00 UTC is 01:00 EST
        fall_back = Event("Backup", datetime(2025, 11, 2, 5, 30), datetime(2025, 11, 2, 6, 0))
        calendar.model.create_event(summer)
        calendar.model.create_event(fall_back)

        failed = calendar.set_timezone("America/New_York")

        assert failed == [fall_back.id]
        assert calendar.timezone == "America/New_York"
        assert calendar.model.find_event_by_id(summer.id).start == datetime(2025, 6, 1, 6, 0)
        assert calendar.model.find_event_by_id(fall_back.id) == fall_back

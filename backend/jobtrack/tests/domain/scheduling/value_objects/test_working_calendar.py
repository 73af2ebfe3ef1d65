"""
Unit tests for WorkingCalendar.

Covers daily windows, non-working days, holidays and windows that run past
midnight.
"""

from datetime import date, datetime, time, timedelta, timezone

import pytest

from jobtrack.domain.scheduling.value_objects.time_window import TimeWindow
from jobtrack.domain.scheduling.value_objects.working_calendar import WorkingCalendar

WEEKDAYS = frozenset(range(5))


class TestWorkingCalendarValidation:
    """Test calendar construction rules."""

    @pytest.mark.parametrize("hours", [0, -1, 24.5])
    def test_invalid_hours_rejected(self, hours):
        with pytest.raises(ValueError, match="Working hours per day"):
            WorkingCalendar(day_start=time(8, 0), hours_per_day=hours)

    def test_no_working_days_rejected(self):
        with pytest.raises(ValueError, match="At least one working weekday"):
            WorkingCalendar(day_start=time(8, 0), hours_per_day=8, working_weekdays=frozenset())

    def test_invalid_weekday_rejected(self):
        with pytest.raises(ValueError, match="Invalid weekday"):
            WorkingCalendar(day_start=time(8, 0), hours_per_day=8, working_weekdays=frozenset({7}))

    def test_full_day_allowed(self):
        calendar = WorkingCalendar(day_start=time(0, 0), hours_per_day=24)

        assert calendar.window_minutes == 24 * 60


class TestWindowForDate:
    """Test the window opening on a given date."""

    def test_working_day_window(self, calendar):
        window = calendar.window_for_date(date(2024, 1, 8))

        assert window == TimeWindow(datetime(2024, 1, 8, 8, 0), datetime(2024, 1, 8, 16, 0))

    def test_weekend_has_no_window(self):
        calendar = WorkingCalendar(day_start=time(8, 0), hours_per_day=8, working_weekdays=WEEKDAYS)

        assert calendar.window_for_date(date(2024, 1, 13)) is None  # Saturday
        assert calendar.window_for_date(date(2024, 1, 12)) is not None  # Friday

    def test_holiday_has_no_window(self):
        calendar = WorkingCalendar(
            day_start=time(8, 0), hours_per_day=8, holidays=frozenset({date(2024, 1, 9)})
        )

        assert not calendar.is_working_day(date(2024, 1, 9))
        assert calendar.window_for_date(date(2024, 1, 9)) is None

    def test_timezone_is_applied(self, calendar):
        window = calendar.window_for_date(date(2024, 1, 8), timezone.utc)

        assert window.start.tzinfo is timezone.utc


class TestNextWindow:
    """Test searching for the next working window."""

    def test_before_opening_returns_todays_window(self, calendar):
        window = calendar.next_window(datetime(2024, 1, 8, 6, 0), datetime(2024, 2, 1))

        assert window.start == datetime(2024, 1, 8, 8, 0)

    def test_inside_window_returns_current_window(self, calendar):
        window = calendar.next_window(datetime(2024, 1, 8, 10, 30), datetime(2024, 2, 1))

        assert window.start == datetime(2024, 1, 8, 8, 0)

    def test_at_closing_returns_next_day(self, calendar):
        window = calendar.next_window(datetime(2024, 1, 8, 16, 0), datetime(2024, 2, 1))

        assert window.start == datetime(2024, 1, 9, 8, 0)

    def test_friday_evening_skips_weekend(self):
        calendar = WorkingCalendar(day_start=time(8, 0), hours_per_day=8, working_weekdays=WEEKDAYS)

        window = calendar.next_window(datetime(2024, 1, 12, 17, 0), datetime(2024, 2, 1))

        assert window.start == datetime(2024, 1, 15, 8, 0)  # Monday

    def test_nothing_before_limit(self, calendar):
        window = calendar.next_window(datetime(2024, 1, 8, 17, 0), datetime(2024, 1, 9, 7, 0))

        assert window is None

    def test_overnight_window_from_previous_day(self):
        night_shift = WorkingCalendar(day_start=time(22, 0), hours_per_day=8)

        window = night_shift.next_window(datetime(2024, 1, 9, 2, 0), datetime(2024, 2, 1))

        assert window.start == datetime(2024, 1, 8, 22, 0)
        assert window.end == datetime(2024, 1, 9, 6, 0)


class TestContainsWindow:
    """Test working-hours containment."""

    def test_inside_window(self, calendar):
        candidate = TimeWindow.from_duration(datetime(2024, 1, 8, 9, 0), 120)

        assert calendar.contains_window(candidate)

    def test_exactly_the_window(self, calendar):
        candidate = TimeWindow.from_duration(datetime(2024, 1, 8, 8, 0), 480)

        assert calendar.contains_window(candidate)

    def test_runs_past_closing(self, calendar):
        candidate = TimeWindow.from_duration(datetime(2024, 1, 8, 15, 0), 120)

        assert not calendar.contains_window(candidate)

    def test_starts_before_opening(self, calendar):
        candidate = TimeWindow.from_duration(datetime(2024, 1, 8, 7, 0), 120)

        assert not calendar.contains_window(candidate)

    def test_spans_night(self, calendar):
        candidate = TimeWindow(datetime(2024, 1, 8, 15, 0), datetime(2024, 1, 9, 9, 0))

        assert not calendar.contains_window(candidate)


def test_str():
    calendar = WorkingCalendar(
        day_start=time(8, 0),
        hours_per_day=8,
        working_weekdays=WEEKDAYS,
        holidays=frozenset({date(2024, 12, 25)}),
    )

    assert str(calendar) == "Mon,Tue,Wed,Thu,Fri: 08:00 +8h (1 holidays)"


def test_window_length():
    calendar = WorkingCalendar(day_start=time(6, 30), hours_per_day=7.5)

    assert calendar.window_length == timedelta(hours=7, minutes=30)
    assert calendar.window_minutes == 450

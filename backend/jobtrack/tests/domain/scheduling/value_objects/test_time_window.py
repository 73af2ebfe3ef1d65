"""
Unit tests for the TimeWindow value object.

Covers construction, half-open overlap semantics and duration arithmetic.
"""

from datetime import datetime, timedelta

import pytest

from jobtrack.domain.shared.exceptions import ErrorType, InvalidIntervalError
from jobtrack.domain.scheduling.value_objects.time_window import TimeWindow


class TestTimeWindowCreation:
    """Test TimeWindow construction."""

    def test_create_valid_window(self):
        start = datetime(2024, 1, 8, 8, 0)
        end = datetime(2024, 1, 8, 12, 0)

        window = TimeWindow(start, end)

        assert window.start == start
        assert window.end == end

    def test_end_before_start_rejected(self):
        with pytest.raises(InvalidIntervalError):
            TimeWindow(datetime(2024, 1, 8, 12, 0), datetime(2024, 1, 8, 8, 0))

    def test_empty_window_rejected(self):
        instant = datetime(2024, 1, 8, 8, 0)
        with pytest.raises(InvalidIntervalError) as exc_info:
            TimeWindow(instant, instant)

        error = exc_info.value
        assert error.error_type == ErrorType.VALIDATION
        assert error.error_code == "INVALID_INTERVAL"
        assert error.to_dict()["field"] == "interval"

    def test_from_duration(self):
        window = TimeWindow.from_duration(datetime(2024, 1, 8, 8, 0), 240)

        assert window.end == datetime(2024, 1, 8, 12, 0)
        assert window.duration() == timedelta(hours=4)
        assert window.duration_minutes() == 240

    def test_from_zero_duration_rejected(self):
        with pytest.raises(InvalidIntervalError):
            TimeWindow.from_duration(datetime(2024, 1, 8, 8, 0), 0)


class TestTimeWindowOverlap:
    """Test half-open overlap semantics."""

    def setup_method(self):
        self.morning = TimeWindow(datetime(2024, 1, 8, 8, 0), datetime(2024, 1, 8, 12, 0))

    def test_touching_windows_do_not_overlap(self):
        afternoon = TimeWindow(datetime(2024, 1, 8, 12, 0), datetime(2024, 1, 8, 16, 0))

        assert not self.morning.overlaps(afternoon)
        assert not afternoon.overlaps(self.morning)

    def test_partial_overlap(self):
        late_morning = TimeWindow(datetime(2024, 1, 8, 11, 0), datetime(2024, 1, 8, 13, 0))

        assert self.morning.overlaps(late_morning)
        assert late_morning.overlaps(self.morning)

    def test_contained_window_overlaps(self):
        inner = TimeWindow(datetime(2024, 1, 8, 9, 0), datetime(2024, 1, 8, 10, 0))

        assert self.morning.overlaps(inner)
        assert self.morning.contains_window(inner)
        assert not inner.contains_window(self.morning)

    def test_disjoint_windows(self):
        tomorrow = self.morning.shift_by_minutes(24 * 60)

        assert not self.morning.overlaps(tomorrow)

    def test_contains_point_is_half_open(self):
        assert self.morning.contains(datetime(2024, 1, 8, 8, 0))
        assert self.morning.contains(datetime(2024, 1, 8, 11, 59))
        assert not self.morning.contains(datetime(2024, 1, 8, 12, 0))


class TestTimeWindowComparison:
    """Test equality, hashing and ordering."""

    def test_equal_windows_hash_alike(self):
        a = TimeWindow.from_duration(datetime(2024, 1, 8, 8, 0), 60)
        b = TimeWindow(datetime(2024, 1, 8, 8, 0), datetime(2024, 1, 8, 9, 0))

        assert a == b
        assert len({a, b}) == 1

    def test_ordering_by_start(self):
        early = TimeWindow.from_duration(datetime(2024, 1, 8, 8, 0), 60)
        late = TimeWindow.from_duration(datetime(2024, 1, 8, 9, 0), 30)

        assert sorted([late, early]) == [early, late]

    def test_shift_preserves_duration(self):
        window = TimeWindow.from_duration(datetime(2024, 1, 8, 8, 0), 90)

        shifted = window.shift_by_minutes(30)

        assert shifted.start == datetime(2024, 1, 8, 8, 30)
        assert shifted.duration_minutes() == 90

    def test_str(self):
        window = TimeWindow.from_duration(datetime(2024, 1, 8, 8, 0), 60)

        assert str(window) == "2024-01-08T08:00:00 to 2024-01-08T09:00:00"

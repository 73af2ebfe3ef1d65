"""
Time Window Value Object

Represents a half-open time interval [start, end). Used for bookings,
scheduled assignments and daily working windows.
"""

from datetime import datetime, timedelta

from ...shared.exceptions import InvalidIntervalError


class TimeWindow:
    """
    A half-open time interval between two instants.

    Touching windows (one ends exactly when the other starts) do not overlap.
    """

    __slots__ = ("_start", "_end")

    def __init__(self, start: datetime, end: datetime) -> None:
        """
        Initialize a TimeWindow.

        Args:
            start: Inclusive start instant
            end: Exclusive end instant

        Raises:
            InvalidIntervalError: If end is not after start
        """
        if end <= start:
            raise InvalidIntervalError(start, end)
        self._start = start
        self._end = end

    @classmethod
    def from_duration(cls, start: datetime, minutes: int | float) -> "TimeWindow":
        """
        Create TimeWindow from a start instant and a duration.

        Args:
            start: Inclusive start instant
            minutes: Duration in minutes (must be positive)

        Returns:
            TimeWindow covering [start, start + minutes)
        """
        return cls(start, start + timedelta(minutes=minutes))

    @property
    def start(self) -> datetime:
        return self._start

    @property
    def end(self) -> datetime:
        return self._end

    def duration(self) -> timedelta:
        return self._end - self._start

    def duration_minutes(self) -> int:
        """Whole minutes covered by the window."""
        return int(self.duration().total_seconds() // 60)

    def overlaps(self, other: "TimeWindow") -> bool:
        """True iff the two half-open windows share at least one instant."""
        return self._start < other._end and other._start < self._end

    def contains(self, point: datetime) -> bool:
        return self._start <= point < self._end

    def contains_window(self, other: "TimeWindow") -> bool:
        """True iff other lies entirely inside this window."""
        return self._start <= other._start and other._end <= self._end

    def shift_by_minutes(self, minutes: int | float) -> "TimeWindow":
        delta = timedelta(minutes=minutes)
        return TimeWindow(self._start + delta, self._end + delta)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TimeWindow):
            return NotImplemented
        return self._start == other._start and self._end == other._end

    def __lt__(self, other: "TimeWindow") -> bool:
        return (self._start, self._end) < (other._start, other._end)

    def __hash__(self) -> int:
        return hash((self._start, self._end))

    def __str__(self) -> str:
        return f"{self._start.isoformat()} to {self._end.isoformat()}"

    def __repr__(self) -> str:
        return f"TimeWindow(start={self._start!r}, end={self._end!r})"

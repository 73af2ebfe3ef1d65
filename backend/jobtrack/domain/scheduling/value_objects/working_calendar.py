"""
Working Calendar Value Object

Daily working windows of a work center: a fixed anchor time each working
day followed by a bounded number of contiguous working hours.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta, tzinfo

from .time_window import TimeWindow

DAY_NAMES = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]


@dataclass(frozen=True)
class WorkingCalendar:
    """
    Working calendar of a single work center.

    Every working day has exactly one window starting at ``day_start`` and
    lasting ``hours_per_day`` hours. Windows of consecutive days never
    overlap, since ``hours_per_day`` is capped at 24.
    """

    day_start: time
    hours_per_day: float
    working_weekdays: frozenset[int] = field(default_factory=lambda: frozenset(range(7)))
    holidays: frozenset[date] = field(default_factory=frozenset)

    def __post_init__(self):
        """Validate calendar constraints."""
        if not 0 < self.hours_per_day <= 24:
            raise ValueError(
                f"Working hours per day must be in (0, 24], got {self.hours_per_day}"
            )
        if not self.working_weekdays:
            raise ValueError("At least one working weekday is required")
        for weekday in self.working_weekdays:
            if not 0 <= weekday <= 6:
                raise ValueError(
                    f"Invalid weekday: {weekday}. Must be 0-6 (Monday=0, Sunday=6)"
                )

    @property
    def window_length(self) -> timedelta:
        return timedelta(hours=self.hours_per_day)

    @property
    def window_minutes(self) -> float:
        return self.hours_per_day * 60

    def is_working_day(self, target_date: date) -> bool:
        if target_date in self.holidays:
            return False
        return target_date.weekday() in self.working_weekdays

    def window_for_date(
        self, target_date: date, tz: tzinfo | None = None
    ) -> TimeWindow | None:
        """
        Get the working window that opens on a date.

        Args:
            target_date: Day the window opens on
            tz: Time zone of the produced instants (None for naive)

        Returns:
            The day's window, or None if the date is not a working day
        """
        if not self.is_working_day(target_date):
            return None
        start = datetime.combine(target_date, self.day_start, tzinfo=tz)
        return TimeWindow(start, start + self.window_length)

    def next_window(self, at: datetime, until: datetime) -> TimeWindow | None:
        """
        Find the earliest working window that has not ended at ``at``.

        The returned window either contains ``at`` or opens after it.

        Args:
            at: Reference instant
            until: Stop searching for windows opening after this instant

        Returns:
            The window, or None if no window opens before ``until``
        """
        # A window opened yesterday may still be running past midnight
        current = at.date() - timedelta(days=1)
        last = until.date()
        while current <= last:
            window = self.window_for_date(current, at.tzinfo)
            if window is not None:
                if window.start > until:
                    return None
                if window.end > at:
                    return window
            current += timedelta(days=1)
        return None

    def contains_window(self, candidate: TimeWindow) -> bool:
        """True iff the window lies entirely inside one working window."""
        window = self.next_window(candidate.start, candidate.end)
        return window is not None and window.contains_window(candidate)

    def __str__(self) -> str:
        days = ",".join(DAY_NAMES[d] for d in sorted(self.working_weekdays))
        text = f"{days}: {self.day_start.strftime('%H:%M')} +{self.hours_per_day:g}h"
        if self.holidays:
            text += f" ({len(self.holidays)} holidays)"
        return text

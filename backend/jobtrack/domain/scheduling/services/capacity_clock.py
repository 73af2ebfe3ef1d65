"""
Capacity Clock

Maps "N minutes on work center W, no earlier than T" onto a concrete
interval inside W's daily working windows that collides with no booking.
"""

from collections.abc import Iterable
from datetime import datetime, timedelta

from ...shared.base import DomainService
from ...shared.exceptions import NoCapacityFoundError
from ..entities.booking import Booking
from ..value_objects.time_window import TimeWindow
from ..value_objects.working_calendar import WorkingCalendar
from .conflict_detector import ConflictDetector

DEFAULT_HORIZON_DAYS = 90


class CapacityClock(DomainService):
    """
    Greedy first-fit slot search over a work center's working windows.

    Deterministic for a given booking set: bookings are scanned in start
    order and the candidate start only ever moves forward.
    """

    def __init__(
        self,
        horizon_days: int = DEFAULT_HORIZON_DAYS,
        conflict_detector: ConflictDetector | None = None,
    ) -> None:
        """
        Initialize the capacity clock.

        Args:
            horizon_days: Maximum look-ahead from the requested start
            conflict_detector: Collision lookup (defaults to a new detector)
        """
        if horizon_days <= 0:
            raise ValueError("Horizon must be at least one day")
        self._horizon = timedelta(days=horizon_days)
        self._conflict_detector = conflict_detector or ConflictDetector()

    @property
    def horizon(self) -> timedelta:
        return self._horizon

    def earliest_slot(
        self,
        work_center_id: str,
        calendar: WorkingCalendar,
        duration_minutes: int,
        not_before: datetime,
        bookings: Iterable[Booking],
    ) -> TimeWindow:
        """
        Find the earliest feasible interval for an operation.

        Args:
            work_center_id: Work center to book
            calendar: The work center's working calendar
            duration_minutes: Required contiguous minutes
            not_before: Earliest allowed start
            bookings: Known bookings (other work centers are ignored)

        Returns:
            Interval starting at or after not_before, inside one working
            window, overlapping no booking on the work center

        Raises:
            NoCapacityFoundError: If nothing fits before the horizon ends
        """
        horizon_end = not_before + self._horizon

        if duration_minutes > calendar.window_minutes:
            raise NoCapacityFoundError(
                work_center_id,
                duration_minutes,
                not_before,
                horizon_end,
                reason=(
                    f"operation needs {duration_minutes} minutes but the daily "
                    f"window is only {calendar.window_minutes:g} minutes"
                ),
            )

        ordered = sorted(
            (b for b in bookings if b.work_center_id == work_center_id),
            key=lambda b: (b.start, b.end),
        )

        candidate = not_before
        while True:
            window = calendar.next_window(candidate, horizon_end)
            if window is None:
                raise NoCapacityFoundError(
                    work_center_id, duration_minutes, not_before, horizon_end
                )
            candidate = max(candidate, window.start)
            if candidate >= horizon_end:
                raise NoCapacityFoundError(
                    work_center_id, duration_minutes, not_before, horizon_end
                )

            proposed = TimeWindow.from_duration(candidate, duration_minutes)
            if proposed.end > window.end:
                # Does not fit today; retry at the next window
                candidate = window.end
                continue

            collision = self._conflict_detector.first_collision(proposed, ordered)
            if collision is None:
                return proposed
            candidate = collision.end

    def best_effort_slot(
        self,
        work_center_id: str,
        calendar: WorkingCalendar,
        duration_minutes: int,
        not_before: datetime,
        bookings: Iterable[Booking],
    ) -> TimeWindow:
        """
        Placement used when earliest_slot found nothing.

        Starts at the horizon boundary, after the last booking on the work
        center, at the next window opening where there is one. The result
        never overlaps a booking but may leave the working windows.
        """
        start = not_before + self._horizon
        latest_end = max(
            (b.end for b in bookings if b.work_center_id == work_center_id),
            default=None,
        )
        if latest_end is not None and latest_end > start:
            start = latest_end

        window = calendar.next_window(start, start + timedelta(days=8))
        if window is not None:
            start = max(start, window.start)
        return TimeWindow.from_duration(start, duration_minutes)

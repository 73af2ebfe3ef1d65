"""Bookings and scheduled assignments."""

from datetime import datetime

from pydantic import Field

from ...shared.base import ValueObject
from ..value_objects.time_window import TimeWindow


class Booking(ValueObject):
    """
    Occupation of a work center for an interval.

    Either committed by another job before the run or proposed during the
    current run; the scheduler treats both the same way.
    """

    work_center_id: str = Field(min_length=1)
    interval: TimeWindow
    job_id: str | None = None
    operation_id: str | None = None

    @property
    def start(self) -> datetime:
        return self.interval.start

    @property
    def end(self) -> datetime:
        return self.interval.end


class ScheduledAssignment(ValueObject):
    """Placement of one operation on a work center."""

    operation_id: str
    operation_name: str
    sequence_order: int
    work_center_id: str
    work_center_name: str
    interval: TimeWindow
    estimated_duration: int

    @property
    def start(self) -> datetime:
        return self.interval.start

    @property
    def end(self) -> datetime:
        return self.interval.end

    def to_booking(self, job_id: str | None = None) -> Booking:
        return Booking(
            work_center_id=self.work_center_id,
            interval=self.interval,
            job_id=job_id,
            operation_id=self.operation_id,
        )

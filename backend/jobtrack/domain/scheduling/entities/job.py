"""Job descriptor handed to the scheduling engine."""

from datetime import date, datetime, time, timedelta

from pydantic import Field, field_validator

from ...shared.base import ValueObject
from .operation import Operation


class JobDescriptor(ValueObject):
    """
    The slice of a job the scheduler needs.

    ``priority_level`` (1-5) is advisory only and does not alter placement.
    """

    id: str | None = None
    job_number: str = ""
    due_date: datetime | date | None = None
    operations: tuple[Operation, ...] = ()
    priority_level: int = Field(default=3, ge=1, le=5)
    quantity: int = Field(default=1, ge=1)
    release_time: datetime | None = None

    @field_validator("due_date", mode="before")
    @classmethod
    def parse_date_only(cls, v):
        # "YYYY-MM-DD" is a calendar date, not midnight
        if isinstance(v, str) and len(v.strip()) == 10:
            return date.fromisoformat(v.strip())
        return v

    def due_at(self, now: datetime, default_due_days: int) -> datetime:
        """
        Deadline instant used for scoring.

        A plain date means "by the end of that day". A missing due date
        defaults to ``default_due_days`` after ``now``.
        """
        due = self.due_date
        if due is None:
            due = (now + timedelta(days=default_due_days)).date()
        if isinstance(due, datetime):
            return due
        return datetime.combine(due + timedelta(days=1), time.min, tzinfo=now.tzinfo)

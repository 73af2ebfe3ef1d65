"""Work center reference data."""

from collections.abc import Iterable
from datetime import date, time

from pydantic import Field, field_validator

from ...shared.base import ValueObject
from ..value_objects.working_calendar import WorkingCalendar
from .operation import normalize_tags


class WorkCenter(ValueObject):
    """
    A machine or station with a bounded daily working window.

    Owned by the persistence layer; the scheduler only reads it. Skill tags
    describe what the work center can do and are matched against an
    operation's skill requirements by subset containment.
    """

    id: str = Field(min_length=1)
    name: str = Field(min_length=1, max_length=100)
    capacity_hours_per_day: float = Field(gt=0, le=24)
    is_active: bool = True
    skill_tags: frozenset[str] = Field(default_factory=frozenset)
    hourly_rate: float | None = Field(default=None, ge=0)
    holidays: frozenset[date] = Field(default_factory=frozenset)

    @field_validator("skill_tags", mode="before")
    @classmethod
    def normalize_skill_tags(cls, v):
        return normalize_tags(v)

    def supports(self, skill_requirements: Iterable[str]) -> bool:
        """Check whether every required skill tag is offered here."""
        return frozenset(skill_requirements) <= self.skill_tags

    def calendar(self, day_start: time, working_weekdays: Iterable[int]) -> WorkingCalendar:
        """Build the working calendar for this work center."""
        return WorkingCalendar(
            day_start=day_start,
            hours_per_day=self.capacity_hours_per_day,
            working_weekdays=frozenset(working_weekdays),
            holidays=self.holidays,
        )

"""Scheduling suggestion output models."""

from datetime import datetime

from pydantic import Field

from ...shared.base import ValueObject
from ..value_objects.enums import ConflictSeverity, ConflictType
from .booking import ScheduledAssignment


class ConflictWarning(ValueObject):
    """A structured, severity-tagged explanation of a feasibility problem."""

    type: ConflictType
    severity: ConflictSeverity
    message: str
    affected_operation_ids: tuple[str, ...] = ()
    suggested_resolution: str | None = None


class SchedulingSuggestion(ValueObject):
    """
    Proposed schedule for one job.

    Assignments are ordered by interval start. The caller persists them as
    bookings and displays the warnings and notes for human review.
    """

    job_id: str | None = None
    job_number: str = ""
    assignments: tuple[ScheduledAssignment, ...]
    confidence_score: int = Field(ge=0, le=100)
    conflict_warnings: tuple[ConflictWarning, ...] = ()
    optimization_notes: tuple[str, ...] = ()
    suggested_start: datetime
    suggested_end: datetime
    due_at: datetime
    estimated_cost: float | None = None

    @property
    def has_critical_conflicts(self) -> bool:
        return any(
            w.severity == ConflictSeverity.CRITICAL for w in self.conflict_warnings
        )

    def warnings_of_type(self, conflict_type: ConflictType) -> list[ConflictWarning]:
        return [w for w in self.conflict_warnings if w.type == conflict_type]

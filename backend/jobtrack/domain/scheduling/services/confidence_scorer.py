"""
Confidence Scorer

Grades a produced schedule against its due date and conflict list and adds
advisory optimization notes.
"""

import math
from collections import Counter
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from datetime import datetime, timedelta

from ....core.config import Settings, settings as default_settings
from ...shared.base import DomainService
from ..entities.booking import ScheduledAssignment
from ..entities.suggestion import ConflictWarning
from ..value_objects.enums import ConflictSeverity, ConflictType

MAX_SCORE = 100
MIN_SCORE = 0


@dataclass(frozen=True)
class ScoreResult:
    confidence_score: int
    warnings: tuple[ConflictWarning, ...]
    notes: tuple[str, ...]


class ConfidenceScorer(DomainService):
    """
    Starts at 100, subtracts a severity-scaled penalty per conflict and a
    per-day penalty for finishing after the due date, floored at 0.

    Notes are advisory and never affect the score.
    """

    def __init__(self, config: Settings | None = None) -> None:
        config = config or default_settings
        self._penalties = {
            ConflictSeverity.INFO: config.PENALTY_INFO,
            ConflictSeverity.WARNING: config.PENALTY_WARNING,
            ConflictSeverity.CRITICAL: config.PENALTY_CRITICAL,
        }
        self._overrun_penalty_per_day = config.OVERRUN_PENALTY_PER_DAY
        self._slack = timedelta(days=config.DUE_DATE_SLACK_DAYS)
        self._tight_deadline = timedelta(days=config.TIGHT_DEADLINE_DAYS)
        self._high_priority_level = config.HIGH_PRIORITY_LEVEL

    def penalty_for(self, severity: ConflictSeverity) -> int:
        return self._penalties[severity]

    def overrun_days(self, schedule_end: datetime, due_at: datetime) -> int:
        """Started days between the due instant and the schedule end."""
        overrun = schedule_end - due_at
        if overrun <= timedelta(0):
            return 0
        return math.ceil(overrun / timedelta(days=1))

    def score(
        self,
        assignments: Sequence[ScheduledAssignment],
        warnings: Sequence[ConflictWarning],
        due_at: datetime,
        now: datetime,
        priority_level: int = 3,
        waits: Mapping[str, timedelta] | None = None,
    ) -> ScoreResult:
        """
        Score a schedule.

        Args:
            assignments: Assignments of one job
            warnings: Conflicts reported by the allocator and detector
            due_at: Deadline instant
            now: Reference time of the run
            priority_level: Advisory job priority (1-5)
            waits: Queueing delay per operation id

        Returns:
            Score, the full warning list (including any due-date warning)
            and optimization notes
        """
        all_warnings = list(warnings)
        overrun_days = 0

        if assignments:
            schedule_end = max(a.end for a in assignments)
            overrun_days = self.overrun_days(schedule_end, due_at)
            if overrun_days:
                all_warnings.append(self._due_date_warning(assignments, schedule_end, due_at))

        score = MAX_SCORE
        score -= sum(self.penalty_for(w.severity) for w in all_warnings)
        score -= overrun_days * self._overrun_penalty_per_day
        score = max(MIN_SCORE, score)

        notes = self._notes(assignments, all_warnings, due_at, now, priority_level, waits or {})
        return ScoreResult(
            confidence_score=score,
            warnings=tuple(all_warnings),
            notes=tuple(notes),
        )

    def _due_date_warning(
        self,
        assignments: Sequence[ScheduledAssignment],
        schedule_end: datetime,
        due_at: datetime,
    ) -> ConflictWarning:
        overrun = schedule_end - due_at
        severity = (
            ConflictSeverity.CRITICAL if overrun > self._slack else ConflictSeverity.WARNING
        )
        late = [a.operation_id for a in assignments if a.end > due_at]
        hours = overrun.total_seconds() / 3600
        return ConflictWarning(
            type=ConflictType.DUE_DATE_AT_RISK,
            severity=severity,
            message=(
                f"Schedule ends {schedule_end:%Y-%m-%d %H:%M}, "
                f"{hours:.1f} hours after the due date {due_at:%Y-%m-%d %H:%M}"
            ),
            affected_operation_ids=tuple(late),
            suggested_resolution="Expedite, add capacity or negotiate a later due date",
        )

    def _notes(
        self,
        assignments: Sequence[ScheduledAssignment],
        warnings: Sequence[ConflictWarning],
        due_at: datetime,
        now: datetime,
        priority_level: int,
        waits: Mapping[str, timedelta],
    ) -> list[str]:
        notes: list[str] = []

        if not warnings:
            notes.append("Schedule looks optimal with no conflicts detected")
        else:
            notes.append(f"{len(warnings)} potential issues identified - review suggestions")

        if priority_level >= self._high_priority_level:
            notes.append("High priority job - consider expediting or adding resources")

        if due_at - now <= self._tight_deadline:
            notes.append("Tight deadline - monitor progress closely and prepare contingency plans")

        per_work_center = Counter(a.work_center_id for a in assignments)
        if len(assignments) > 1:
            count = len(per_work_center)
            noun = "work center" if count == 1 else "work centers"
            notes.append(f"Schedule compressed into {count} {noun}")
        if len(per_work_center) == 1 and len(assignments) > 2:
            notes.append(
                "All operations on single work center - consider parallel processing if possible"
            )

        bottleneck = self._bottleneck_note(assignments, waits)
        if bottleneck:
            notes.append(bottleneck)

        return notes

    @staticmethod
    def _bottleneck_note(
        assignments: Sequence[ScheduledAssignment],
        waits: Mapping[str, timedelta],
    ) -> str | None:
        by_id = {a.operation_id: a for a in assignments}
        waiting = [(w, op_id) for op_id, w in waits.items() if op_id in by_id and w > timedelta(0)]
        if waiting:
            wait, op_id = max(waiting)
            assignment = by_id[op_id]
            hours = wait.total_seconds() / 3600
            return (
                f"Operation {assignment.operation_name} waits {hours:.1f} hours for "
                f"{assignment.work_center_name} and bottlenecks the timeline"
            )

        if len(assignments) < 2:
            return None
        total = sum(a.estimated_duration for a in assignments)
        longest = max(assignments, key=lambda a: (a.estimated_duration, -a.sequence_order))
        share = longest.estimated_duration / total
        if share > 0.5:
            return (
                f"Operation {longest.operation_name} accounts for {share:.0%} of "
                f"processing time and bottlenecks the timeline"
            )
        return None

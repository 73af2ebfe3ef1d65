"""
Scheduling Engine

Facade that turns one job's operations into a scheduling suggestion:
sequencer, then allocator, then verification, then scoring. A run is a
pure computation over its arguments and keeps no state between calls.
"""

from collections.abc import Iterable, Mapping, Sequence
from datetime import datetime

from ....core.config import Settings, settings as default_settings
from ....core.observability import get_logger
from ...shared.exceptions import NoOperationsDefinedError, TimezoneMismatchError
from ..entities.booking import Booking, ScheduledAssignment
from ..entities.job import JobDescriptor
from ..entities.operation import LineItem, Operation
from ..entities.suggestion import SchedulingSuggestion
from ..entities.work_center import WorkCenter
from ..value_objects.enums import OperationKind
from .capacity_clock import CapacityClock
from .confidence_scorer import ConfidenceScorer
from .conflict_detector import ConflictDetector
from .operation_generator import generate_operations_from_line_items
from .operation_sequencer import OperationSequencer
from .work_center_allocator import WorkCenterAllocator

logger = get_logger(__name__)


class SchedulingEngine:
    """
    Production scheduling engine.

    Safe to call concurrently for different jobs as long as each call gets
    its own booking snapshot. Persisting the result and keeping work
    centers exclusive across concurrent runs is the caller's job.
    """

    def __init__(
        self,
        config: Settings | None = None,
        conflict_detector: ConflictDetector | None = None,
        capacity_clock: CapacityClock | None = None,
        sequencer: OperationSequencer | None = None,
        scorer: ConfidenceScorer | None = None,
    ) -> None:
        self._config = config or default_settings
        self._conflict_detector = conflict_detector or ConflictDetector()
        self._capacity_clock = capacity_clock or CapacityClock(
            horizon_days=self._config.SCHEDULING_HORIZON_DAYS,
            conflict_detector=self._conflict_detector,
        )
        self._sequencer = sequencer or OperationSequencer()
        self._allocator = WorkCenterAllocator(
            self._capacity_clock,
            day_start=self._config.WORKDAY_START,
            working_weekdays=self._config.WORKING_WEEKDAYS,
        )
        self._scorer = scorer or ConfidenceScorer(self._config)

    def generate_scheduling_suggestions(
        self,
        job: JobDescriptor,
        work_centers: Sequence[WorkCenter],
        existing_bookings: Iterable[Booking] = (),
        now: datetime | None = None,
    ) -> SchedulingSuggestion:
        """
        Produce a scheduling suggestion for one job.

        Args:
            job: Job descriptor with its operations
            work_centers: Work center reference data
            existing_bookings: Snapshot of committed bookings
            now: Reference time of the run (defaults to the current time)

        Returns:
            Complete suggestion; feasibility problems appear as warnings

        Raises:
            NoOperationsDefinedError: If the job has no operations
            DuplicateSequenceOrderError: If sequence orders are not unique
            NoEligibleWorkCenterError: If there is no active work center
            TimezoneMismatchError: If naive and aware datetimes are mixed
        """
        if not job.operations:
            raise NoOperationsDefinedError(job.id)

        snapshot = tuple(existing_bookings)
        now = self._reference_time(job, snapshot, now)
        ordered = self._sequencer.sequence(job.operations)
        ready_time = max(now, job.release_time) if job.release_time else now

        allocation = self._allocator.allocate(
            ordered, work_centers, snapshot, ready_time, job_id=job.id
        )
        warnings = list(allocation.warnings)
        warnings.extend(
            self._conflict_detector.detect_schedule_conflicts(
                allocation.assignments,
                snapshot,
                allocation.calendars,
                skip_operation_ids=allocation.infeasible_operation_ids,
            )
        )

        due_at = job.due_at(now, self._config.DEFAULT_DUE_DAYS)
        result = self._scorer.score(
            allocation.assignments,
            warnings,
            due_at=due_at,
            now=now,
            priority_level=job.priority_level,
            waits=allocation.waits,
        )

        assignments = sorted(
            allocation.assignments, key=lambda a: (a.start, a.sequence_order)
        )
        suggestion = SchedulingSuggestion(
            job_id=job.id,
            job_number=job.job_number,
            assignments=tuple(assignments),
            confidence_score=result.confidence_score,
            conflict_warnings=result.warnings,
            optimization_notes=result.notes,
            suggested_start=assignments[0].start,
            suggested_end=max(a.end for a in assignments),
            due_at=due_at,
            estimated_cost=self._estimated_cost(assignments, work_centers),
        )

        if suggestion.suggested_end > due_at:
            logger.warning(
                "Schedule ends after due date",
                job_id=job.id,
                suggested_end=suggestion.suggested_end.isoformat(),
                due_at=due_at.isoformat(),
            )
        logger.info(
            "Generated scheduling suggestion",
            job_id=job.id,
            job_number=job.job_number,
            operation_count=len(assignments),
            confidence_score=suggestion.confidence_score,
            warning_count=len(suggestion.conflict_warnings),
        )
        return suggestion

    def generate_operations_from_line_items(
        self,
        line_items: Sequence[LineItem],
        preferred_work_centers: Mapping[OperationKind, str] | None = None,
    ) -> list[Operation]:
        """Default routing for a job created from a quote."""
        return generate_operations_from_line_items(line_items, preferred_work_centers)

    @staticmethod
    def _reference_time(
        job: JobDescriptor,
        snapshot: Sequence[Booking],
        now: datetime | None,
    ) -> datetime:
        """
        Resolve "now" for a run.

        All instants of a call must agree on being naive or aware. A missing
        ``now`` takes the time zone of the first aware input.
        """
        instants: list[tuple[str, datetime]] = []
        if now is not None:
            instants.append(("now", now))
        if job.release_time is not None:
            instants.append(("release_time", job.release_time))
        if isinstance(job.due_date, datetime):
            instants.append(("due_date", job.due_date))
        instants.extend(("existing_bookings", b.start) for b in snapshot)

        aware = [(name, t) for name, t in instants if t.utcoffset() is not None]
        if aware and len(aware) != len(instants):
            naive = next(name for name, t in instants if t.utcoffset() is None)
            raise TimezoneMismatchError(naive)

        if now is not None:
            return now
        return datetime.now(aware[0][1].tzinfo if aware else None)

    @staticmethod
    def _estimated_cost(
        assignments: Sequence[ScheduledAssignment],
        work_centers: Sequence[WorkCenter],
    ) -> float | None:
        rates = {
            wc.id: wc.hourly_rate for wc in work_centers if wc.hourly_rate is not None
        }
        priced = [a for a in assignments if a.work_center_id in rates]
        if not priced:
            return None
        return round(
            sum(a.estimated_duration / 60.0 * rates[a.work_center_id] for a in priced), 2
        )

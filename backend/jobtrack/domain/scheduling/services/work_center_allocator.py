"""
Work Center Allocator

Places a job's operations, in sequence order, onto work centers. Each
placement is booked immediately so that later operations of the same run
see it as committed.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import datetime, time, timedelta

from ....core.observability import get_logger
from ...shared.base import DomainService
from ...shared.exceptions import NoCapacityFoundError, NoEligibleWorkCenterError
from ..entities.booking import Booking, ScheduledAssignment
from ..entities.operation import Operation
from ..entities.suggestion import ConflictWarning
from ..entities.work_center import WorkCenter
from ..value_objects.enums import ConflictSeverity, ConflictType
from ..value_objects.time_window import TimeWindow
from ..value_objects.working_calendar import WorkingCalendar
from .capacity_clock import CapacityClock
from .operation_sequencer import OperationSequencer

logger = get_logger(__name__)


@dataclass
class AllocationResult:
    """Outcome of allocating one job's operations."""

    assignments: list[ScheduledAssignment] = field(default_factory=list)
    warnings: list[ConflictWarning] = field(default_factory=list)
    calendars: dict[str, WorkingCalendar] = field(default_factory=dict)
    infeasible_operation_ids: set[str] = field(default_factory=set)
    # Time each operation waited between becoming ready and starting
    waits: dict[str, timedelta] = field(default_factory=dict)


class WorkCenterAllocator(DomainService):
    """
    Assigns operations to work centers and time slots.

    Target resolution: the operation's preferred work center when it is
    known and active, otherwise the least-loaded active work center whose
    skill tags cover the operation's requirements. Least loaded means the
    earliest next available slot; ties go to the work center with fewer
    booked minutes, then to the lower id.
    """

    def __init__(
        self,
        capacity_clock: CapacityClock,
        day_start: time,
        working_weekdays: Iterable[int],
    ) -> None:
        self._clock = capacity_clock
        self._day_start = day_start
        self._working_weekdays = frozenset(working_weekdays)

    def allocate(
        self,
        operations: Sequence[Operation],
        work_centers: Sequence[WorkCenter],
        existing_bookings: Iterable[Booking],
        job_ready_time: datetime,
        job_id: str | None = None,
    ) -> AllocationResult:
        """
        Allocate already-sequenced operations.

        Args:
            operations: Operations in sequence order
            work_centers: Work center reference data
            existing_bookings: Committed bookings snapshot
            job_ready_time: Earliest start of the first operation
            job_id: Owner recorded on bookings proposed in this run

        Returns:
            Allocation result with one assignment per operation

        Raises:
            NoEligibleWorkCenterError: If an operation has nowhere to go
        """
        result = AllocationResult(
            calendars={
                wc.id: wc.calendar(self._day_start, self._working_weekdays)
                for wc in work_centers
            }
        )
        index = {wc.id: wc for wc in work_centers}
        bookings = list(existing_bookings)
        previous_end: datetime | None = None

        for op in operations:
            earliest = OperationSequencer.earliest_start(job_ready_time, previous_end)
            candidates, warnings = self._candidate_work_centers(op, index)
            result.warnings.extend(warnings)

            try:
                work_center, slot = self._place(
                    op, candidates, earliest, bookings, result.calendars
                )
            except NoCapacityFoundError as exc:
                work_center = candidates[0]
                slot = self._clock.best_effort_slot(
                    work_center.id,
                    result.calendars[work_center.id],
                    op.estimated_duration,
                    earliest,
                    bookings,
                )
                result.infeasible_operation_ids.add(op.id)
                result.warnings.append(
                    ConflictWarning(
                        type=ConflictType.CAPACITY_EXCEEDED,
                        severity=ConflictSeverity.CRITICAL,
                        message=(
                            f"No capacity for {op.name} within the scheduling horizon; "
                            f"placed on {work_center.name} at "
                            f"{slot.start:%Y-%m-%d %H:%M} for review. {exc.message}"
                        ),
                        affected_operation_ids=(op.id,),
                        suggested_resolution=(
                            "Add capacity, move the operation to another work center "
                            "or renegotiate the due date"
                        ),
                    )
                )
                logger.warning(
                    "No capacity within horizon",
                    job_id=job_id,
                    operation_id=op.id,
                    work_center_id=work_center.id,
                    best_effort_start=slot.start.isoformat(),
                )

            bookings.append(
                Booking(
                    work_center_id=work_center.id,
                    interval=slot,
                    job_id=job_id,
                    operation_id=op.id,
                )
            )
            result.assignments.append(
                ScheduledAssignment(
                    operation_id=op.id,
                    operation_name=op.name,
                    sequence_order=op.sequence_order,
                    work_center_id=work_center.id,
                    work_center_name=work_center.name,
                    interval=slot,
                    estimated_duration=op.estimated_duration,
                )
            )
            result.waits[op.id] = slot.start - earliest
            previous_end = slot.end

        return result

    def _candidate_work_centers(
        self, op: Operation, index: dict[str, WorkCenter]
    ) -> tuple[list[WorkCenter], list[ConflictWarning]]:
        """Resolve the work centers an operation may be placed on."""
        warnings: list[ConflictWarning] = []

        if op.preferred_work_center_id is not None:
            preferred = index.get(op.preferred_work_center_id)
            if preferred is not None and preferred.is_active:
                return [preferred], warnings

            reason = "is inactive" if preferred is not None else "does not exist"
            warnings.append(
                ConflictWarning(
                    type=ConflictType.WORK_CENTER_UNAVAILABLE,
                    severity=ConflictSeverity.WARNING,
                    message=(
                        f"Preferred work center {op.preferred_work_center_id} for "
                        f"{op.name} {reason}; using the default pool"
                    ),
                    affected_operation_ids=(op.id,),
                    suggested_resolution="Update the operation's routing",
                )
            )

        active = sorted((wc for wc in index.values() if wc.is_active), key=lambda wc: wc.id)
        pool = [wc for wc in active if wc.supports(op.skill_requirements)]
        if not pool and active:
            pool = active
            warnings.append(
                ConflictWarning(
                    type=ConflictType.SKILL_MISMATCH,
                    severity=ConflictSeverity.INFO,
                    message=(
                        f"No active work center offers {', '.join(sorted(op.skill_requirements))} "
                        f"for {op.name}; any active work center considered"
                    ),
                    affected_operation_ids=(op.id,),
                    suggested_resolution="Tag a work center with the required skills",
                )
            )
        if not pool:
            raise NoEligibleWorkCenterError(op.id)

        return pool, warnings

    def _place(
        self,
        op: Operation,
        candidates: list[WorkCenter],
        earliest: datetime,
        bookings: list[Booking],
        calendars: dict[str, WorkingCalendar],
    ) -> tuple[WorkCenter, TimeWindow]:
        """Pick the least-loaded candidate and its earliest slot."""
        best: tuple[tuple, WorkCenter, TimeWindow] | None = None
        first_error: NoCapacityFoundError | None = None

        for wc in candidates:
            try:
                slot = self._clock.earliest_slot(
                    wc.id, calendars[wc.id], op.estimated_duration, earliest, bookings
                )
            except NoCapacityFoundError as exc:
                first_error = first_error or exc
                continue

            key = (slot.start, self._booked_minutes(wc.id, bookings), wc.id)
            if best is None or key < best[0]:
                best = (key, wc, slot)

        if best is None:
            if first_error is None:
                raise NoEligibleWorkCenterError(op.id)
            raise first_error
        return best[1], best[2]

    @staticmethod
    def _booked_minutes(work_center_id: str, bookings: Iterable[Booking]) -> int:
        return sum(
            b.interval.duration_minutes()
            for b in bookings
            if b.work_center_id == work_center_id
        )

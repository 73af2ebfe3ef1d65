"""
Conflict Detector

Finds interval collisions between a candidate placement and the bookings of
a work center, and verifies a finished schedule against the sequencing,
exclusivity and working-hours invariants.
"""

from collections.abc import Iterable, Mapping, Sequence

from ...shared.base import DomainService
from ..entities.booking import Booking, ScheduledAssignment
from ..entities.suggestion import ConflictWarning
from ..value_objects.enums import ConflictSeverity, ConflictType
from ..value_objects.time_window import TimeWindow
from ..value_objects.working_calendar import WorkingCalendar


def _describe_booking(booking: Booking) -> str:
    owner = f"job {booking.job_id}" if booking.job_id else "an existing booking"
    if booking.operation_id:
        owner = f"{owner} (operation {booking.operation_id})"
    return f"{owner} from {booking.start:%Y-%m-%d %H:%M} to {booking.end:%Y-%m-%d %H:%M}"


class ConflictDetector(DomainService):
    """
    Detects overlap conflicts on work centers.

    Committed bookings from other jobs and bookings proposed earlier in the
    same run are treated identically.
    """

    def find_collisions(
        self, candidate: TimeWindow, bookings: Iterable[Booking]
    ) -> list[Booking]:
        """
        Find bookings overlapping a candidate interval.

        Args:
            candidate: Proposed interval
            bookings: Bookings of a single work center

        Returns:
            Overlapping bookings sorted by start
        """
        collisions = [b for b in bookings if b.interval.overlaps(candidate)]
        collisions.sort(key=lambda b: (b.start, b.end))
        return collisions

    def first_collision(
        self, candidate: TimeWindow, bookings: Iterable[Booking]
    ) -> Booking | None:
        collisions = self.find_collisions(candidate, bookings)
        return collisions[0] if collisions else None

    def check_candidate(
        self,
        operation_id: str,
        work_center_id: str,
        candidate: TimeWindow,
        bookings: Iterable[Booking],
    ) -> list[ConflictWarning]:
        """
        Report every booking a candidate placement would collide with.

        Args:
            operation_id: Operation being placed
            work_center_id: Target work center
            candidate: Proposed interval
            bookings: Bookings on the target work center

        Returns:
            One critical overlap warning per colliding booking
        """
        warnings = []
        for booking in self.find_collisions(candidate, bookings):
            affected = [operation_id]
            if booking.operation_id:
                affected.append(booking.operation_id)
            warnings.append(
                ConflictWarning(
                    type=ConflictType.OVERLAP,
                    severity=ConflictSeverity.CRITICAL,
                    message=(
                        f"Operation {operation_id} on work center {work_center_id} "
                        f"({candidate.start:%Y-%m-%d %H:%M}-{candidate.end:%H:%M}) "
                        f"overlaps {_describe_booking(booking)}"
                    ),
                    affected_operation_ids=tuple(affected),
                    suggested_resolution=(
                        "Move the operation to a free slot or another work center"
                    ),
                )
            )
        return warnings

    def detect_schedule_conflicts(
        self,
        assignments: Sequence[ScheduledAssignment],
        existing_bookings: Iterable[Booking],
        calendars: Mapping[str, WorkingCalendar],
        skip_operation_ids: Iterable[str] = (),
    ) -> list[ConflictWarning]:
        """
        Verify a complete schedule.

        Checks, in order: work center exclusivity against committed bookings
        and against other assignments of the run, sequence order, and
        working-hours containment.

        Args:
            assignments: Assignments of one job
            existing_bookings: Bookings committed before the run
            calendars: Working calendar per work center id
            skip_operation_ids: Operations already reported as infeasible

        Returns:
            Conflict warnings, empty for a clean schedule
        """
        skipped = set(skip_operation_ids)
        warnings: list[ConflictWarning] = []

        by_work_center: dict[str, list[Booking]] = {}
        for booking in existing_bookings:
            by_work_center.setdefault(booking.work_center_id, []).append(booking)

        proposed: dict[str, list[Booking]] = {}
        for assignment in assignments:
            if assignment.operation_id in skipped:
                continue
            committed = by_work_center.get(assignment.work_center_id, [])
            earlier = proposed.get(assignment.work_center_id, [])
            warnings.extend(
                self.check_candidate(
                    assignment.operation_id,
                    assignment.work_center_id,
                    assignment.interval,
                    [*committed, *earlier],
                )
            )
            proposed.setdefault(assignment.work_center_id, []).append(
                assignment.to_booking()
            )

        ordered = sorted(assignments, key=lambda a: a.sequence_order)
        for previous, current in zip(ordered, ordered[1:]):
            if current.start < previous.end:
                warnings.append(
                    ConflictWarning(
                        type=ConflictType.SEQUENCE_VIOLATION,
                        severity=ConflictSeverity.CRITICAL,
                        message=(
                            f"{current.operation_name} starts before "
                            f"{previous.operation_name} has finished"
                        ),
                        affected_operation_ids=(
                            previous.operation_id,
                            current.operation_id,
                        ),
                        suggested_resolution="Start the operation after its predecessor ends",
                    )
                )

        for assignment in assignments:
            if assignment.operation_id in skipped:
                continue
            calendar = calendars.get(assignment.work_center_id)
            if calendar is not None and not calendar.contains_window(assignment.interval):
                warnings.append(
                    ConflictWarning(
                        type=ConflictType.OUTSIDE_WORKING_HOURS,
                        severity=ConflictSeverity.WARNING,
                        message=(
                            f"{assignment.operation_name} on work center "
                            f"{assignment.work_center_name} runs outside its working hours"
                        ),
                        affected_operation_ids=(assignment.operation_id,),
                        suggested_resolution="Extend the work center's hours or split the operation",
                    )
                )

        return warnings

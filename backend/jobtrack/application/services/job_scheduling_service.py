"""
Job scheduling application service.

Caller-side orchestration around the pure scheduling engine: capability
check, booking snapshot, persistence and metrics.
"""

import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from datetime import datetime

from ...core.observability import get_logger, record_scheduling_run
from ...domain.scheduling.entities.booking import Booking
from ...domain.scheduling.entities.job import JobDescriptor
from ...domain.scheduling.entities.suggestion import SchedulingSuggestion
from ...domain.scheduling.entities.work_center import WorkCenter
from ...domain.scheduling.repositories.booking_repository import BookingRepository
from ...domain.scheduling.services.scheduling_engine import SchedulingEngine
from ...domain.shared.exceptions import (
    FeatureDisabledError,
    ResourceConflictError,
    ValidationError,
)

logger = get_logger(__name__)

FEATURE_NAME = "Smart scheduling suggestions"


@dataclass
class JobScheduleResult:
    """Outcome of scheduling a job."""

    job_id: str
    bookings: list[Booking] = field(default_factory=list)
    suggestion: SchedulingSuggestion | None = None
    is_existing: bool = False


class JobSchedulingService:
    """
    Application service for scheduling jobs onto work centers.

    The capability check is injected as a plain callable so that flag
    evaluation stays outside both this service and the engine.
    """

    def __init__(
        self,
        engine: SchedulingEngine,
        booking_repository: BookingRepository,
        is_enabled: Callable[[], bool] = lambda: True,
    ) -> None:
        """
        Initialize the job scheduling service.

        Args:
            engine: Scheduling engine
            booking_repository: Committed booking store
            is_enabled: Capability check for the current caller
        """
        self._engine = engine
        self._bookings = booking_repository
        self._is_enabled = is_enabled

    async def suggest_schedule(
        self,
        job: JobDescriptor,
        work_centers: Sequence[WorkCenter],
        now: datetime | None = None,
    ) -> SchedulingSuggestion:
        """
        Compute a suggestion without committing it.

        Raises:
            FeatureDisabledError: If scheduling is switched off for the caller
            ValidationError: If the job cannot be scheduled
        """
        started = time.perf_counter()
        self._ensure_enabled("suggest", started)

        snapshot = await self._bookings.get_bookings(
            [wc.id for wc in work_centers], exclude_job_id=job.id
        )
        suggestion = self._run_engine("suggest", job, work_centers, snapshot, now, started)

        record_scheduling_run(
            "suggest",
            "success",
            time.perf_counter() - started,
            [(w.type.value, w.severity.value) for w in suggestion.conflict_warnings],
        )
        return suggestion

    async def schedule_job(
        self,
        job: JobDescriptor,
        work_centers: Sequence[WorkCenter],
        force_reschedule: bool = False,
        now: datetime | None = None,
    ) -> JobScheduleResult:
        """
        Schedule a job and commit its bookings.

        A job that already has committed bookings is left alone and its
        bookings are returned, unless ``force_reschedule`` is set.

        Args:
            job: Job descriptor; must carry an id
            work_centers: Work center reference data
            force_reschedule: Replace existing bookings
            now: Reference time of the run

        Returns:
            Committed bookings and the suggestion they came from

        Raises:
            FeatureDisabledError: If scheduling is switched off for the caller
            ValidationError: If the job cannot be scheduled
            ResourceConflictError: If another job booked a slot meanwhile
        """
        started = time.perf_counter()
        self._ensure_enabled("schedule", started)

        if not job.id:
            record_scheduling_run("schedule", "rejected", time.perf_counter() - started)
            raise ValidationError(
                "job_id", None, "Job must be persisted before it can be scheduled", "JOB_ID_REQUIRED"
            )

        existing = await self._bookings.get_job_bookings(job.id)
        if existing and not force_reschedule:
            logger.info(
                "Job already scheduled",
                job_id=job.id,
                booking_count=len(existing),
            )
            record_scheduling_run("schedule", "existing", time.perf_counter() - started)
            return JobScheduleResult(job_id=job.id, bookings=existing, is_existing=True)

        snapshot = await self._bookings.get_bookings(
            [wc.id for wc in work_centers], exclude_job_id=job.id
        )
        suggestion = self._run_engine("schedule", job, work_centers, snapshot, now, started)

        try:
            committed = await self._bookings.replace_job_bookings(
                job.id, [a.to_booking(job.id) for a in suggestion.assignments]
            )
        except ResourceConflictError as e:
            logger.warning(
                "Booking conflict while committing schedule",
                job_id=job.id,
                error=e.message,
            )
            record_scheduling_run("schedule", "conflict", time.perf_counter() - started)
            raise

        record_scheduling_run(
            "schedule",
            "success",
            time.perf_counter() - started,
            [(w.type.value, w.severity.value) for w in suggestion.conflict_warnings],
        )
        logger.info(
            "Job scheduled",
            job_id=job.id,
            rescheduled=bool(existing),
            confidence_score=suggestion.confidence_score,
        )
        return JobScheduleResult(job_id=job.id, bookings=committed, suggestion=suggestion)

    def _ensure_enabled(self, operation_type: str, started: float) -> None:
        if not self._is_enabled():
            record_scheduling_run(operation_type, "disabled", time.perf_counter() - started)
            raise FeatureDisabledError(FEATURE_NAME)

    def _run_engine(
        self,
        operation_type: str,
        job: JobDescriptor,
        work_centers: Sequence[WorkCenter],
        snapshot: Sequence[Booking],
        now: datetime | None,
        started: float,
    ) -> SchedulingSuggestion:
        try:
            return self._engine.generate_scheduling_suggestions(
                job, work_centers, snapshot, now=now
            )
        except ValidationError as e:
            logger.info("Scheduling request rejected", job_id=job.id, error=e.message)
            record_scheduling_run(operation_type, "rejected", time.perf_counter() - started)
            raise

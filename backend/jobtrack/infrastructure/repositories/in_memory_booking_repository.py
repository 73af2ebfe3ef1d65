"""
In-memory booking repository.

Serialises writes per work center with asyncio locks, acquired in work
center id order so concurrent commits cannot deadlock.
"""

import asyncio
from collections import defaultdict
from collections.abc import Iterable, Sequence

from ...core.observability import get_logger
from ...domain.scheduling.entities.booking import Booking
from ...domain.scheduling.repositories.booking_repository import BookingRepository
from ...domain.shared.exceptions import ResourceConflictError

logger = get_logger(__name__)


def _sort_key(booking: Booking):
    return (booking.work_center_id, booking.start, booking.end)


class InMemoryBookingRepository(BookingRepository):
    """Booking store for tests and single-process deployments."""

    def __init__(self, bookings: Iterable[Booking] = ()) -> None:
        self._bookings: list[Booking] = sorted(bookings, key=_sort_key)
        self._locks: dict[str, asyncio.Lock] = defaultdict(asyncio.Lock)

    async def get_bookings(
        self,
        work_center_ids: Iterable[str] | None = None,
        exclude_job_id: str | None = None,
    ) -> list[Booking]:
        wanted = set(work_center_ids) if work_center_ids is not None else None
        return [
            b
            for b in self._bookings
            if (wanted is None or b.work_center_id in wanted)
            and (exclude_job_id is None or b.job_id != exclude_job_id)
        ]

    async def get_job_bookings(self, job_id: str) -> list[Booking]:
        owned = [b for b in self._bookings if b.job_id == job_id]
        owned.sort(key=lambda b: (b.start, b.end))
        return owned

    async def replace_job_bookings(
        self, job_id: str, bookings: Sequence[Booking]
    ) -> list[Booking]:
        new = [b.model_copy(update={"job_id": job_id}) for b in bookings]
        touched = {b.work_center_id for b in new}
        touched.update(b.work_center_id for b in self._bookings if b.job_id == job_id)

        locks = [self._locks[wc_id] for wc_id in sorted(touched)]
        for lock in locks:
            await lock.acquire()
        try:
            self._check_exclusive(job_id, new)
            kept = [b for b in self._bookings if b.job_id != job_id]
            self._bookings = sorted([*kept, *new], key=_sort_key)
        finally:
            for lock in reversed(locks):
                lock.release()

        logger.info(
            "Committed job bookings",
            job_id=job_id,
            booking_count=len(new),
            work_center_ids=sorted({b.work_center_id for b in new}),
        )
        return sorted(new, key=lambda b: (b.start, b.end))

    def _check_exclusive(self, job_id: str, new: Sequence[Booking]) -> None:
        others = [b for b in self._bookings if b.job_id != job_id]
        for i, booking in enumerate(new):
            rivals = [*others, *new[:i]]
            for other in rivals:
                if (
                    other.work_center_id == booking.work_center_id
                    and other.interval.overlaps(booking.interval)
                ):
                    raise ResourceConflictError(
                        f"Work center {booking.work_center_id} is already booked "
                        f"from {other.start:%Y-%m-%d %H:%M} to {other.end:%Y-%m-%d %H:%M}",
                        details={
                            "work_center_id": booking.work_center_id,
                            "job_id": job_id,
                            "conflicting_job_id": other.job_id,
                            "operation_id": booking.operation_id,
                        },
                    )

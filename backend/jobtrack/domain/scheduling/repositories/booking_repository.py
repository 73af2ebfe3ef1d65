"""
Booking Repository Interface

Defines the contract for reading and committing work center bookings.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable, Sequence

from ..entities.booking import Booking


class BookingRepository(ABC):
    """
    Abstract repository for committed work center bookings.

    Implementations must keep work centers exclusive: committing a booking
    that overlaps another job's booking on the same work center fails.
    """

    @abstractmethod
    async def get_bookings(
        self,
        work_center_ids: Iterable[str] | None = None,
        exclude_job_id: str | None = None,
    ) -> list[Booking]:
        """
        Retrieve committed bookings.

        Args:
            work_center_ids: Restrict to these work centers (all when None)
            exclude_job_id: Leave out bookings owned by this job

        Returns:
            Bookings sorted by work center and start
        """
        pass

    @abstractmethod
    async def get_job_bookings(self, job_id: str) -> list[Booking]:
        """
        Retrieve the bookings committed for one job.

        Args:
            job_id: Owning job

        Returns:
            The job's bookings sorted by start
        """
        pass

    @abstractmethod
    async def replace_job_bookings(
        self, job_id: str, bookings: Sequence[Booking]
    ) -> list[Booking]:
        """
        Atomically replace a job's bookings.

        Args:
            job_id: Owning job
            bookings: New bookings for the job

        Returns:
            The committed bookings

        Raises:
            ResourceConflictError: If a booking would overlap another job's
                booking on the same work center
        """
        pass

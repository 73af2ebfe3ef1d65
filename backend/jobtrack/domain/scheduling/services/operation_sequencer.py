"""Operation Sequencer: orders a job's operations by sequence number."""

from collections import defaultdict
from collections.abc import Iterable
from datetime import datetime

from ...shared.base import DomainService
from ...shared.exceptions import DuplicateSequenceOrderError
from ..entities.operation import Operation


class OperationSequencer(DomainService):
    """
    Produces the iteration order consumed by the allocator.

    Operation k+1 may not start before operation k ends, regardless of the
    work centers involved.
    """

    def sequence(self, operations: Iterable[Operation]) -> list[Operation]:
        """
        Sort operations by ascending sequence order.

        Raises:
            DuplicateSequenceOrderError: If two operations share a sequence number
        """
        ops = list(operations)

        seen: dict[int, list[str]] = defaultdict(list)
        for op in ops:
            seen[op.sequence_order].append(op.id)
        for order in sorted(seen):
            if len(seen[order]) > 1:
                raise DuplicateSequenceOrderError(order, seen[order])

        return sorted(ops, key=lambda op: op.sequence_order)

    @staticmethod
    def earliest_start(job_ready_time: datetime, previous_end: datetime | None) -> datetime:
        """Earliest start of the next operation in sequence."""
        if previous_end is None:
            return job_ready_time
        return max(job_ready_time, previous_end)

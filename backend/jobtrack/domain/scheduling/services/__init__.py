"""
Domain Services

Scheduling algorithms that coordinate operations, work centers and bookings:
slot search, conflict detection, sequencing, allocation and scoring, with
the scheduling engine as their facade.
"""

from .capacity_clock import CapacityClock
from .confidence_scorer import ConfidenceScorer, ScoreResult
from .conflict_detector import ConflictDetector
from .operation_generator import generate_operations_from_line_items
from .operation_sequencer import OperationSequencer
from .scheduling_engine import SchedulingEngine
from .work_center_allocator import AllocationResult, WorkCenterAllocator

__all__ = [
    "CapacityClock",
    "ConflictDetector",
    "OperationSequencer",
    "WorkCenterAllocator",
    "AllocationResult",
    "ConfidenceScorer",
    "ScoreResult",
    "SchedulingEngine",
    "generate_operations_from_line_items",
]

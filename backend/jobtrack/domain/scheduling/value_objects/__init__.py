"""Value objects for the scheduling domain."""

from .enums import ConflictSeverity, ConflictType, OperationKind
from .time_window import TimeWindow
from .working_calendar import WorkingCalendar

__all__ = [
    "ConflictSeverity",
    "ConflictType",
    "OperationKind",
    "TimeWindow",
    "WorkingCalendar",
]

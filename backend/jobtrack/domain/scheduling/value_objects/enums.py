"""Domain enums for scheduling."""

from enum import Enum


class ConflictType(str, Enum):
    """Kinds of feasibility problems reported in a scheduling suggestion."""

    CAPACITY_EXCEEDED = "capacity_exceeded"
    DUE_DATE_AT_RISK = "due_date_at_risk"
    OVERLAP = "overlap"
    SEQUENCE_VIOLATION = "sequence_violation"
    OUTSIDE_WORKING_HOURS = "outside_working_hours"
    WORK_CENTER_UNAVAILABLE = "work_center_unavailable"
    SKILL_MISMATCH = "skill_mismatch"


class ConflictSeverity(str, Enum):
    """Conflict severity, ordered info < warning < critical."""

    INFO = "info"
    WARNING = "warning"
    CRITICAL = "critical"

    @property
    def rank(self) -> int:
        """Numeric rank for ordering severities."""
        return {
            ConflictSeverity.INFO: 0,
            ConflictSeverity.WARNING: 1,
            ConflictSeverity.CRITICAL: 2,
        }[self]


class OperationKind(str, Enum):
    """Process family of a generated operation."""

    MACHINING = "machining"
    WELDING = "welding"
    ASSEMBLY = "assembly"
    PRODUCTION = "production"
    INSPECTION = "inspection"

"""
Domain Exceptions

Defines custom exceptions for domain-specific errors with discriminated unions.
Validation errors reject a whole scheduling call; resource conflicts describe
capacity problems that callers either degrade into warnings or surface as
write conflicts.
"""

from datetime import datetime
from enum import Enum


class ErrorType(str, Enum):
    """Error type enumeration for discriminated unions."""

    VALIDATION = "validation"
    BUSINESS_RULE = "business_rule"
    RESOURCE_CONFLICT = "resource_conflict"


class DomainError(Exception):
    """Base class for all domain errors with type discrimination."""

    def __init__(
        self,
        message: str,
        error_type: ErrorType,
        details: dict[str, str | int | bool | None] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_type = error_type
        self.details = details or {}

    def to_dict(self) -> dict[str, str | dict[str, str | int | bool | None]]:
        """Convert error to dictionary for API responses."""
        return {
            "type": self.error_type.value,
            "message": self.message,
            "details": self.details,
        }


class ValidationError(DomainError):
    """Raised when domain validation rules are violated."""

    def __init__(
        self,
        field_name: str,
        value: str | int | float | bool | None,
        message: str,
        error_code: str | None = None,
        details: dict[str, str | int | bool | None] | None = None,
    ) -> None:
        self.field_name = field_name
        self.value = value
        self.error_code = error_code or "VALIDATION_ERROR"

        full_message = f"Validation failed for field '{field_name}': {message}"
        details = details or {}
        details.update(
            {
                "field": field_name,
                "value": str(value) if value is not None else None,
                "error_code": self.error_code,
            }
        )

        super().__init__(full_message, ErrorType.VALIDATION, details)

    def to_dict(self) -> dict[str, str | None]:
        """Convert to dictionary for API responses."""
        return {
            "type": self.error_type.value,
            "field": self.field_name,
            "value": str(self.value) if self.value is not None else None,
            "message": self.message,
            "error_code": self.error_code,
        }


class InvalidIntervalError(ValidationError):
    """Raised when an interval does not end strictly after it starts."""

    def __init__(self, start: datetime, end: datetime) -> None:
        super().__init__(
            "interval",
            f"{start.isoformat()}/{end.isoformat()}",
            "Interval end must be after its start",
            "INVALID_INTERVAL",
        )
        self.start = start
        self.end = end


class NoOperationsDefinedError(ValidationError):
    """Raised when a job has no operations to schedule."""

    def __init__(self, job_id: str | None = None) -> None:
        super().__init__(
            "operations",
            None,
            "Job has no operations defined. Cannot create schedule.",
            "NO_OPERATIONS_DEFINED",
            {"job_id": job_id},
        )
        self.job_id = job_id


class DuplicateSequenceOrderError(ValidationError):
    """Raised when two operations of a job share a sequence number."""

    def __init__(self, sequence_order: int, operation_ids: list[str]) -> None:
        super().__init__(
            "sequence_order",
            sequence_order,
            f"Sequence order {sequence_order} is used by more than one operation "
            f"({', '.join(operation_ids)})",
            "DUPLICATE_SEQUENCE_ORDER",
        )
        self.sequence_order = sequence_order
        self.operation_ids = operation_ids


class NoEligibleWorkCenterError(ValidationError):
    """Raised when no active work center exists to host an operation."""

    def __init__(self, operation_id: str) -> None:
        super().__init__(
            "work_center_id",
            None,
            f"No active work center is available for operation {operation_id}",
            "NO_ELIGIBLE_WORK_CENTER",
            {"operation_id": operation_id},
        )
        self.operation_id = operation_id


class TimezoneMismatchError(ValidationError):
    """Raised when naive and timezone-aware instants are mixed in one call."""

    def __init__(self, field_name: str) -> None:
        super().__init__(
            field_name,
            None,
            "Cannot mix naive and timezone-aware datetimes in one scheduling call",
            "TIMEZONE_MISMATCH",
        )


class BusinessRuleError(DomainError):
    """Raised when business rules are violated."""

    def __init__(
        self, message: str, details: dict[str, str | int | bool | None] | None = None
    ) -> None:
        super().__init__(message, ErrorType.BUSINESS_RULE, details)


class FeatureDisabledError(BusinessRuleError):
    """Raised when a capability is switched off for the caller."""

    def __init__(self, feature_name: str) -> None:
        super().__init__(
            f"{feature_name} feature is not enabled", {"feature": feature_name}
        )
        self.feature_name = feature_name


class ResourceConflictError(DomainError):
    """Raised when resource conflicts occur (double booking, etc.)."""

    def __init__(
        self, message: str, details: dict[str, str | int | bool | None] | None = None
    ) -> None:
        super().__init__(message, ErrorType.RESOURCE_CONFLICT, details)


class NoCapacityFoundError(ResourceConflictError):
    """Raised when no slot fits on a work center within the look-ahead horizon."""

    def __init__(
        self,
        work_center_id: str,
        duration_minutes: int,
        not_before: datetime,
        horizon_end: datetime,
        reason: str | None = None,
    ) -> None:
        message = (
            f"No {duration_minutes}-minute slot on work center {work_center_id} "
            f"between {not_before.isoformat()} and {horizon_end.isoformat()}"
        )
        if reason:
            message = f"{message}: {reason}"
        super().__init__(
            message,
            {
                "work_center_id": work_center_id,
                "duration_minutes": duration_minutes,
                "not_before": not_before.isoformat(),
                "horizon_end": horizon_end.isoformat(),
            },
        )
        self.work_center_id = work_center_id
        self.duration_minutes = duration_minutes
        self.not_before = not_before
        self.horizon_end = horizon_end

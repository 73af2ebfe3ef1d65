"""
Observability Infrastructure

Structured logging with correlation tracking and Prometheus metrics for
scheduling runs.
"""

import contextvars
import logging
import sys
import uuid
from typing import Any

import structlog
from prometheus_client import Counter, Histogram

from .config import Settings, settings

# Context variables for correlation tracking
correlation_id_var: contextvars.ContextVar[str] = contextvars.ContextVar(
    "correlation_id", default=""
)
tenant_id_var: contextvars.ContextVar[str] = contextvars.ContextVar(
    "tenant_id", default=""
)

# Prometheus metrics
SCHEDULER_OPERATIONS = Counter(
    f"{settings.PROJECT_NAME}_scheduler_operations_total",
    "Total scheduler operations",
    ["operation_type", "status"],
)

SCHEDULER_DURATION = Histogram(
    f"{settings.PROJECT_NAME}_scheduler_operation_duration_seconds",
    "Scheduler operation duration",
    ["operation_type"],
)

CONFLICT_WARNINGS = Counter(
    f"{settings.PROJECT_NAME}_scheduler_conflict_warnings_total",
    "Conflict warnings emitted in scheduling suggestions",
    ["conflict_type", "severity"],
)


class CorrelationIdProcessor:
    """Structlog processor to add correlation ID to all log entries."""

    def __call__(
        self, logger: Any, name: str, event_dict: dict[str, Any]
    ) -> dict[str, Any]:
        correlation_id = correlation_id_var.get("")
        tenant_id = tenant_id_var.get("")

        if correlation_id:
            event_dict["correlation_id"] = correlation_id
        if tenant_id:
            event_dict["tenant_id"] = tenant_id

        return event_dict


def setup_structured_logging(config: Settings | None = None) -> None:
    """Configure structured logging with JSON or console output."""
    config = config or settings

    log_level = getattr(logging, config.LOG_LEVEL.upper(), logging.INFO)

    processors = [
        structlog.contextvars.merge_contextvars,
        CorrelationIdProcessor(),
        structlog.processors.TimeStamper(fmt="ISO"),
        structlog.processors.add_log_level,
        structlog.stdlib.add_logger_name,
    ]

    if config.LOG_FORMAT == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(colors=config.ENVIRONMENT == "local")
        )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=log_level,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)


def set_correlation_id(correlation_id: str | None = None) -> str:
    """Set correlation ID for request tracking."""
    if correlation_id is None:
        correlation_id = str(uuid.uuid4())

    correlation_id_var.set(correlation_id)
    return correlation_id


def set_tenant_id(tenant_id: str) -> None:
    """Set tenant ID for request tracking."""
    tenant_id_var.set(tenant_id)


def get_correlation_id() -> str:
    """Get current correlation ID."""
    return correlation_id_var.get("")


def record_scheduling_run(
    operation_type: str,
    status: str,
    duration_seconds: float,
    warnings: list[tuple[str, str]] | None = None,
) -> None:
    """
    Record Prometheus metrics for one scheduling call.

    Args:
        operation_type: Kind of scheduler call (e.g. "suggest", "persist")
        status: Outcome label ("success", "rejected", "conflict", ...)
        duration_seconds: Wall-clock duration of the call
        warnings: (conflict_type, severity) pairs emitted by the run
    """
    SCHEDULER_OPERATIONS.labels(operation_type=operation_type, status=status).inc()
    SCHEDULER_DURATION.labels(operation_type=operation_type).observe(duration_seconds)

    for conflict_type, severity in warnings or []:
        CONFLICT_WARNINGS.labels(conflict_type=conflict_type, severity=severity).inc()

"""Entities consumed and produced by the scheduling engine."""

from .booking import Booking, ScheduledAssignment
from .job import JobDescriptor
from .operation import LineItem, Operation
from .suggestion import ConflictWarning, SchedulingSuggestion
from .work_center import WorkCenter

__all__ = [
    "Booking",
    "ScheduledAssignment",
    "JobDescriptor",
    "LineItem",
    "Operation",
    "ConflictWarning",
    "SchedulingSuggestion",
    "WorkCenter",
]

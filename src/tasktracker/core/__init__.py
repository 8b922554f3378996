"""Functional core - pure business logic with no I/O."""

from .tasks import (
    InvalidArgument,
    InvalidDate,
    Task,
    TaskPriority,
    TaskStatus,
    TaskTrackerError,
    TaskUpdate,
    end_of_day,
    filter_by_priority,
    filter_by_status,
    filter_overdue,
    parse_due_date,
)
from .stats import (
    ABANDON_AFTER_DAYS,
    TaskStatistics,
    compute_statistics,
    select_for_abandon,
    should_abandon,
)

__all__ = [
    # Tasks
    "Task",
    "TaskPriority",
    "TaskStatus",
    "TaskUpdate",
    "end_of_day",
    "parse_due_date",
    "filter_by_status",
    "filter_by_priority",
    "filter_overdue",
    # Errors
    "TaskTrackerError",
    "InvalidArgument",
    "InvalidDate",
    # Statistics
    "ABANDON_AFTER_DAYS",
    "TaskStatistics",
    "compute_statistics",
    "select_for_abandon",
    "should_abandon",
]

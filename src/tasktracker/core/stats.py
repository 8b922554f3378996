"""Statistics and sweep selection over task collections - pure functions."""

from dataclasses import dataclass, field
from datetime import datetime

from .tasks import Task, TaskPriority, TaskStatus

ABANDON_AFTER_DAYS = 7
COMPLETED_RECENTLY_DAYS = 7


@dataclass
class TaskStatistics:
    """Aggregate counts over a set of tasks."""

    total: int = 0
    by_status: dict[TaskStatus, int] = field(
        default_factory=lambda: {s: 0 for s in TaskStatus}
    )
    by_priority: dict[TaskPriority, int] = field(
        default_factory=lambda: {p: 0 for p in TaskPriority}
    )
    overdue: int = 0
    completed_last_week: int = 0

    def to_dict(self) -> dict:
        """Render with plain keys: status tokens and priority integers."""
        return {
            "total": self.total,
            "byStatus": {s.value: n for s, n in self.by_status.items()},
            "byPriority": {p.value: n for p, n in self.by_priority.items()},
            "overdue": self.overdue,
            "completedLastWeek": self.completed_last_week,
        }


def compute_statistics(tasks: list[Task], as_of: datetime | None = None) -> TaskStatistics:
    """
    Count tasks by status and priority, plus overdue and recently completed.

    Every status and priority appears in the result, zero or not.
    """
    as_of = as_of or datetime.now()
    stats = TaskStatistics(total=len(tasks))

    for task in tasks:
        stats.by_status[task.status] += 1
        stats.by_priority[task.priority] += 1
        if task.is_overdue(as_of):
            stats.overdue += 1
        if task.is_completed_recently(COMPLETED_RECENTLY_DAYS, as_of):
            stats.completed_last_week += 1

    return stats


def should_abandon(task: Task, as_of: datetime | None = None) -> bool:
    """
    Auto-abandon policy.

    Overdue by more than ABANDON_AFTER_DAYS, not already DONE/ABANDONED, and
    not HIGH priority. HIGH priority tasks are never abandoned.
    """
    overdue = task.is_overdue_by_more_than_days(ABANDON_AFTER_DAYS, as_of)
    already_resolved = task.status.is_resolved
    high_priority = task.priority == TaskPriority.HIGH
    return overdue and not already_resolved and not high_priority


def select_for_abandon(tasks: list[Task], as_of: datetime | None = None) -> list[Task]:
    as_of = as_of or datetime.now()
    return [t for t in tasks if should_abandon(t, as_of)]

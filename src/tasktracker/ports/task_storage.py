"""Task storage interface."""

from typing import Protocol

from tasktracker.core.tasks import Task, TaskPriority, TaskStatus, TaskUpdate


class TaskStorage(Protocol):
    """Interface for persisting tasks keyed by id."""

    def add(self, task: Task) -> str:
        """Store a new task. Returns its id."""
        ...

    def get(self, task_id: str) -> Task | None:
        """Get a task by id. Returns None if not found."""
        ...

    def update(self, task_id: str, updates: TaskUpdate) -> bool:
        """Merge the set fields of `updates` into a stored task and persist."""
        ...

    def delete(self, task_id: str) -> bool:
        """Delete a task. Returns False if not found."""
        ...

    def get_all(self) -> list[Task]:
        ...

    def get_by_status(self, status: TaskStatus) -> list[Task]:
        ...

    def get_by_priority(self, priority: TaskPriority) -> list[Task]:
        ...

    def get_overdue(self) -> list[Task]:
        ...

    def save(self) -> None:
        """Flush all tasks to durable storage."""
        ...

"""Task manager - the façade between callers and task storage.

Bad input (priority, status, due date) raises InvalidArgument. A missing
task id is not an error: mutations return False and lookups return None.
"""

import logging
from datetime import datetime
from pathlib import Path

from .adapters.json_storage import JsonTaskStorage
from .core.stats import TaskStatistics, compute_statistics, select_for_abandon
from .core.tasks import (
    Task,
    TaskPriority,
    TaskStatus,
    TaskUpdate,
    parse_due_date,
)
from .ports.task_storage import TaskStorage

logger = logging.getLogger(__name__)


class TaskManager:
    """Create, query and update tasks held by a TaskStorage."""

    def __init__(
        self,
        storage_path: Path | str | None = None,
        storage: TaskStorage | None = None,
    ):
        if storage is None:
            if storage_path is None:
                raise ValueError("TaskManager needs a storage_path or a storage")
            storage = JsonTaskStorage(storage_path)
        self.storage = storage

    def create_task(
        self,
        title: str,
        description: str = "",
        priority_value: int = TaskPriority.MEDIUM.value,
        due_date_str: str | None = None,
        tags: list[str] | None = None,
    ) -> str:
        """Create and store a task. Returns the new task id."""
        priority = TaskPriority.from_value(priority_value)
        due_date = parse_due_date(due_date_str) if due_date_str else None

        task = Task(
            title=title,
            description=description or "",
            priority=priority,
            due_date=due_date,
            tags=set(tags or []),
        )
        task_id = self.storage.add(task)
        logger.info(f"Created task {task_id}: {title}")
        return task_id

    def list_tasks(
        self,
        status_filter: str | None = None,
        priority_filter: int | None = None,
        show_overdue: bool = False,
    ) -> list[Task]:
        """
        List tasks with at most one filter applied.

        Precedence: show_overdue, then status_filter, then priority_filter.
        Lower-precedence filters are ignored when a higher one is given.
        """
        if show_overdue:
            return self.storage.get_overdue()

        if status_filter is not None:
            return self.storage.get_by_status(TaskStatus.from_value(status_filter))

        if priority_filter is not None:
            return self.storage.get_by_priority(TaskPriority.from_value(priority_filter))

        return self.storage.get_all()

    def update_task_status(self, task_id: str, new_status_value: str) -> bool:
        new_status = TaskStatus.from_value(new_status_value)
        task = self.storage.get(task_id)
        if task is None:
            logger.debug(f"update_task_status: no task {task_id}")
            return False

        task.status = new_status
        if new_status == TaskStatus.DONE:
            task.mark_as_done()
        self.storage.save()
        return True

    def update_task_priority(self, task_id: str, new_priority_value: int) -> bool:
        new_priority = TaskPriority.from_value(new_priority_value)
        return self.storage.update(task_id, TaskUpdate(priority=new_priority))

    def update_task_due_date(self, task_id: str, due_date_str: str) -> bool:
        due_date = parse_due_date(due_date_str)
        return self.storage.update(task_id, TaskUpdate(due_date=due_date))

    def delete_task(self, task_id: str) -> bool:
        deleted = self.storage.delete(task_id)
        if deleted:
            logger.info(f"Deleted task {task_id}")
        return deleted

    def get_task_details(self, task_id: str) -> Task | None:
        return self.storage.get(task_id)

    def add_tag_to_task(self, task_id: str, tag: str) -> bool:
        task = self.storage.get(task_id)
        if task is None:
            logger.debug(f"add_tag_to_task: no task {task_id}")
            return False
        task.add_tag(tag)
        self.storage.save()
        return True

    def remove_tag_from_task(self, task_id: str, tag: str) -> bool:
        """Remove a tag. Only persists when the tag was actually there."""
        task = self.storage.get(task_id)
        if task is None or not task.remove_tag(tag):
            return False
        self.storage.save()
        return True

    def get_statistics(self, as_of: datetime | None = None) -> TaskStatistics:
        return compute_statistics(self.storage.get_all(), as_of)

    def abandon_overdue_tasks(self, as_of: datetime | None = None) -> list[str]:
        """
        Mark long-overdue tasks as ABANDONED.

        A task is abandoned when it is overdue by more than 7 days, is not
        already DONE or ABANDONED, and is not HIGH priority.

        Returns the ids of the abandoned tasks.
        """
        abandoned = []
        for task in select_for_abandon(self.storage.get_all(), as_of):
            if self.storage.update(task.id, TaskUpdate(status=TaskStatus.ABANDONED)):
                abandoned.append(task.id)

        if abandoned:
            logger.info(f"Abandoned {len(abandoned)} overdue task(s)")
        return abandoned

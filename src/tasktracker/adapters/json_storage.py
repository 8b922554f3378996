"""JSON file task storage adapter."""

import json
import logging
import os
import tempfile
from pathlib import Path

from tasktracker.core.tasks import (
    Task,
    TaskPriority,
    TaskStatus,
    TaskTrackerError,
    TaskUpdate,
    filter_by_priority,
    filter_by_status,
    filter_overdue,
)

logger = logging.getLogger(__name__)

FORMAT_VERSION = 1


class StorageError(TaskTrackerError):
    """Raised when the task file cannot be read or written."""

    pass


class JsonTaskStorage:
    """
    File-based task storage.

    Implements TaskStorage protocol. The whole file is loaded once on
    construction and held in memory keyed by task id; every mutation
    rewrites the file. Tasks returned by get() are the live objects, so
    callers that mutate them must call save(). add, update and delete undo
    their in-memory change when the write fails.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path).expanduser()
        self._tasks: dict[str, Task] = {}
        self._load()

    def _load(self) -> None:
        if not self.path.exists():
            logger.debug(f"No task file at {self.path}, starting empty")
            return

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise StorageError(f"Cannot read task file {self.path}: {e}")

        if not isinstance(data, dict) or not isinstance(data.get("tasks"), list):
            raise StorageError(f"Malformed task file {self.path}: missing 'tasks' list")

        try:
            for item in data["tasks"]:
                task = Task.from_dict(item)
                self._tasks[task.id] = task
        except (KeyError, TypeError, ValueError) as e:
            raise StorageError(f"Malformed task in {self.path}: {e}")

        logger.debug(f"Loaded {len(self._tasks)} tasks from {self.path}")

    def save(self) -> None:
        """Write all tasks to disk atomically."""
        payload = {
            "version": FORMAT_VERSION,
            "tasks": [t.to_dict() for t in self._tasks.values()],
        }
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(payload, f, indent=2)
                os.replace(tmp_name, self.path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise StorageError(f"Cannot write task file {self.path}: {e}")

        logger.debug(f"Saved {len(self._tasks)} tasks to {self.path}")

    def add(self, task: Task) -> str:
        self._tasks[task.id] = task
        try:
            self.save()
        except StorageError:
            del self._tasks[task.id]
            raise
        return task.id

    def get(self, task_id: str) -> Task | None:
        return self._tasks.get(task_id)

    def update(self, task_id: str, updates: TaskUpdate) -> bool:
        """Merge only the fields set on `updates`. Returns False if not found."""
        task = self._tasks.get(task_id)
        if task is None:
            return False
        previous = {name: getattr(task, name) for name in updates.changes()}
        updates.apply_to(task)
        try:
            self.save()
        except StorageError:
            for name, value in previous.items():
                setattr(task, name, value)
            raise
        return True

    def delete(self, task_id: str) -> bool:
        if task_id not in self._tasks:
            return False
        # Restored as-is, order included, if the write fails.
        previous = dict(self._tasks)
        del self._tasks[task_id]
        try:
            self.save()
        except StorageError:
            self._tasks = previous
            raise
        return True

    def get_all(self) -> list[Task]:
        return list(self._tasks.values())

    def get_by_status(self, status: TaskStatus) -> list[Task]:
        return filter_by_status(self.get_all(), status)

    def get_by_priority(self, priority: TaskPriority) -> list[Task]:
        return filter_by_priority(self.get_all(), priority)

    def get_overdue(self) -> list[Task]:
        return filter_overdue(self.get_all())

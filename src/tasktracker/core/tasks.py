"""Pure task domain logic - no I/O dependencies."""

import re
import uuid
from dataclasses import dataclass, field, fields
from datetime import date, datetime, time, timedelta
from enum import Enum

DUE_DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


class TaskTrackerError(Exception):
    """Base class for all tasktracker errors."""

    pass


class InvalidArgument(TaskTrackerError, ValueError):
    """Raised when caller input cannot be resolved to a valid value."""

    pass


class InvalidDate(InvalidArgument):
    """Raised when a due date string is not a YYYY-MM-DD date."""

    pass


class TaskPriority(Enum):
    """Task priority with its integer mapping."""

    LOW = 1
    MEDIUM = 2
    HIGH = 3

    @classmethod
    def from_value(cls, value: int | str) -> "TaskPriority":
        """Resolve an integer (or a string of digits) to a priority."""
        valid = ", ".join(str(p.value) for p in cls)
        error = InvalidArgument(f"Invalid priority value: {value!r} (expected one of {valid})")
        # bool is an int subclass; floats must not be truncated
        if isinstance(value, bool) or not isinstance(value, (int, str)):
            raise error
        try:
            return cls(int(value))
        except ValueError:
            raise error


class TaskStatus(Enum):
    """Task status tokens."""

    TODO = "todo"
    IN_PROGRESS = "in_progress"
    DONE = "done"
    ABANDONED = "abandoned"

    @property
    def is_resolved(self) -> bool:
        return self in (TaskStatus.DONE, TaskStatus.ABANDONED)

    @classmethod
    def from_value(cls, value: str) -> "TaskStatus":
        token = str(value).strip().lower().replace("-", "_")
        try:
            return cls(token)
        except ValueError:
            valid = ", ".join(s.value for s in cls)
            raise InvalidArgument(f"Invalid status value: {value!r} (expected one of {valid})")


def end_of_day(day: date) -> datetime:
    """Last instant of a calendar day."""
    return datetime.combine(day, time.max)


def parse_due_date(value: str) -> datetime:
    """Parse YYYY-MM-DD into the last instant of that day."""
    if not isinstance(value, str) or not DUE_DATE_PATTERN.fullmatch(value.strip()):
        raise InvalidDate(f"Invalid date format: {value!r}. Use YYYY-MM-DD")
    try:
        day = date.fromisoformat(value.strip())
    except ValueError:
        raise InvalidDate(f"Invalid date: {value!r}. Use YYYY-MM-DD")
    return end_of_day(day)


def _new_id() -> str:
    return uuid.uuid4().hex


@dataclass
class Task:
    """A tracked unit of work."""

    title: str
    description: str = ""
    priority: TaskPriority = TaskPriority.MEDIUM
    due_date: datetime | None = None
    tags: set[str] = field(default_factory=set)
    status: TaskStatus = TaskStatus.TODO
    completed_at: datetime | None = None
    id: str = field(default_factory=_new_id)
    created_at: datetime = field(default_factory=datetime.now)

    def __post_init__(self) -> None:
        if not self.title or not self.title.strip():
            raise InvalidArgument("Task title must not be empty")
        self.tags = set(self.tags)

    def is_overdue(self, as_of: datetime | None = None) -> bool:
        """Due date has passed and the task is not DONE or ABANDONED."""
        if self.due_date is None or self.status.is_resolved:
            return False
        as_of = as_of or datetime.now()
        return self.due_date < as_of

    def is_overdue_by_more_than_days(self, days: int, as_of: datetime | None = None) -> bool:
        as_of = as_of or datetime.now()
        if not self.is_overdue(as_of):
            return False
        return as_of - self.due_date > timedelta(days=days)

    def is_completed_recently(self, days: int = 7, as_of: datetime | None = None) -> bool:
        """Completed strictly after `as_of - days`."""
        if self.completed_at is None:
            return False
        as_of = as_of or datetime.now()
        return self.completed_at > as_of - timedelta(days=days)

    def mark_as_done(self, as_of: datetime | None = None) -> None:
        """Set DONE and stamp completion time. Re-stamps if already DONE."""
        self.status = TaskStatus.DONE
        self.completed_at = as_of or datetime.now()

    def add_tag(self, tag: str) -> None:
        self.tags.add(tag)

    def remove_tag(self, tag: str) -> bool:
        if tag not in self.tags:
            return False
        self.tags.remove(tag)
        return True

    def to_dict(self) -> dict:
        """Serialize to a JSON-compatible dict."""
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "priority": self.priority.value,
            "status": self.status.value,
            "due_date": self.due_date.isoformat() if self.due_date else None,
            "tags": sorted(self.tags),
            "completed_at": self.completed_at.isoformat() if self.completed_at else None,
            "created_at": self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Task":
        """Create Task from a dict produced by to_dict()."""
        due = data.get("due_date")
        completed = data.get("completed_at")
        created = data.get("created_at")
        return cls(
            id=data["id"],
            title=data["title"],
            description=data.get("description", "") or "",
            priority=TaskPriority.from_value(data.get("priority", TaskPriority.MEDIUM.value)),
            status=TaskStatus.from_value(data.get("status", TaskStatus.TODO.value)),
            due_date=datetime.fromisoformat(due) if due else None,
            tags=set(data.get("tags", [])),
            completed_at=datetime.fromisoformat(completed) if completed else None,
            created_at=datetime.fromisoformat(created) if created else datetime.now(),
        )


@dataclass
class TaskUpdate:
    """
    Partial update for a Task.

    Every field defaults to None, meaning "leave unchanged". Only the fields
    that are set get merged into the stored task.
    """

    title: str | None = None
    description: str | None = None
    priority: TaskPriority | None = None
    status: TaskStatus | None = None
    due_date: datetime | None = None
    tags: set[str] | None = None

    def __post_init__(self) -> None:
        if self.title is not None and not self.title.strip():
            raise InvalidArgument("Task title must not be empty")

    def changes(self) -> dict:
        """Fields that were explicitly set."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }

    def is_empty(self) -> bool:
        return not self.changes()

    def apply_to(self, task: Task) -> None:
        """Merge the set fields into `task` in place."""
        for name, value in self.changes().items():
            if name == "tags":
                value = set(value)
            setattr(task, name, value)


def filter_by_status(tasks: list[Task], status: TaskStatus) -> list[Task]:
    return [t for t in tasks if t.status == status]


def filter_by_priority(tasks: list[Task], priority: TaskPriority) -> list[Task]:
    return [t for t in tasks if t.priority == priority]


def filter_overdue(tasks: list[Task], as_of: datetime | None = None) -> list[Task]:
    """Filter to overdue tasks only."""
    as_of = as_of or datetime.now()
    return [t for t in tasks if t.is_overdue(as_of)]

"""Ports - interfaces/protocols for external dependencies."""

from .task_storage import TaskStorage

__all__ = [
    "TaskStorage",
]

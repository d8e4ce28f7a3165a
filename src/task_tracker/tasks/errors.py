# src/task_tracker/tasks/errors.py

from __future__ import annotations


class TaskError(Exception):
    """Base class for expected, user-recoverable task errors."""


class ValidationError(TaskError):
    """Description (or search term) is empty after trimming."""


class DuplicateError(TaskError):
    """Another task already has the same description (case-insensitive)."""


class NotFoundError(TaskError):
    """No task with the requested id exists in the collection."""

    def __init__(self, task_id: str) -> None:
        super().__init__(f"Task not found: {task_id}")
        self.task_id = task_id


class TaskStateError(TaskError):
    """Transition not allowed from the task's current state."""

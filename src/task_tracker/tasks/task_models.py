# src/task_tracker/tasks/task_models.py

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from enum import StrEnum
from typing import Any

from .errors import ValidationError


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def normalize_description(description: str) -> str:
    """Trim + casefold; two descriptions are duplicates iff their keys are equal."""
    return description.strip().casefold()


class TaskFilter(StrEnum):
    """Listing filter."""

    ALL = "all"
    COMPLETED = "completed"
    PENDING = "pending"

    @classmethod
    def parse(cls, raw: str | None) -> TaskFilter:
        if not raw:
            return cls.ALL
        try:
            return cls(raw.strip().lower())
        except ValueError:
            raise ValidationError(f"Unknown filter: {raw!r} (use all, completed or pending)") from None

    def accepts(self, task: Task) -> bool:
        if self is TaskFilter.COMPLETED:
            return task.completed
        if self is TaskFilter.PENDING:
            return not task.completed
        return True


@dataclass(slots=True)
class Task:
    """
    One tracked unit of work.

    Notes:
    - id and created_at never change after creation.
    - completed_at is set iff completed is True; persisted records omit the key
      entirely while the task is pending.
    - description edits go through TaskService (they need the sibling uniqueness check).
    """

    id: str
    description: str
    completed: bool = False
    created_at: datetime = field(default_factory=utc_now)
    completed_at: datetime | None = None

    @staticmethod
    def validate_description(description: Any) -> bool:
        if not isinstance(description, str):
            return False
        return bool(description.strip())

    @classmethod
    def create(cls, description: str) -> Task:
        if not cls.validate_description(description):
            raise ValidationError("Task description cannot be empty")
        return cls(id=uuid.uuid4().hex, description=description.strip())

    def mark_completed(self) -> None:
        self.completed = True
        self.completed_at = utc_now()

    def mark_pending(self) -> None:
        self.completed = False
        self.completed_at = None

    def matches(self, term: str) -> bool:
        return term.strip().casefold() in self.description.casefold()

    def is_duplicate_of(self, description: str) -> bool:
        return normalize_description(self.description) == normalize_description(description)

    @property
    def created_day(self) -> date:
        """Calendar date of creation in local time."""
        return self.created_at.astimezone().date()


@dataclass(frozen=True, slots=True)
class ProductiveDay:
    day: date
    count: int


@dataclass(frozen=True, slots=True)
class TaskStats:
    total: int
    completed_count: int
    pending_count: int
    completion_percentage: int
    most_productive_day: ProductiveDay | None


@dataclass(frozen=True, slots=True)
class MutationResult:
    """Outcome of a mutating service call; persisted=False means durable state may be stale."""

    task: Task
    persisted: bool

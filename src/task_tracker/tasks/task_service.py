# src/task_tracker/tasks/task_service.py

from __future__ import annotations

import logging
import math
from collections import Counter

from .errors import DuplicateError, TaskStateError, ValidationError
from .task_models import MutationResult, ProductiveDay, Task, TaskFilter, TaskStats
from .task_repository import TaskRepository

logger = logging.getLogger(__name__)


def sort_for_listing(tasks: list[Task]) -> list[Task]:
    """Pending before completed; newest first inside each group."""
    by_newest = sorted(tasks, key=lambda t: t.created_at, reverse=True)
    return sorted(by_newest, key=lambda t: t.completed)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


class TaskService:
    """
    User-facing task operations.

    The only place that enforces cross-task rules (description uniqueness)
    and the only caller of TaskRepository.persist(). Validation/duplicate
    failures raise before anything is mutated or saved.
    """

    def __init__(self, repository: TaskRepository) -> None:
        self._repo = repository

    @property
    def repository(self) -> TaskRepository:
        return self._repo

    # ---- helpers ----

    def _ensure_unique(self, description: str, *, exclude_id: str | None = None) -> None:
        for other in self._repo:
            if other.id == exclude_id:
                continue
            if other.is_duplicate_of(description):
                raise DuplicateError(f"A task with this description already exists: {other.description!r}")

    def _commit(self, task: Task, action: str) -> MutationResult:
        persisted = self._repo.persist()
        logger.info("Task %s id=%s persisted=%s", action, task.id, persisted)
        return MutationResult(task=task, persisted=persisted)

    # ---- operations ----

    def add_task(self, description: str) -> MutationResult:
        if not Task.validate_description(description):
            raise ValidationError("Task description cannot be empty")
        self._ensure_unique(description)

        task = Task.create(description)
        self._repo.add(task)
        return self._commit(task, "added")

    def list_tasks(self, task_filter: TaskFilter = TaskFilter.ALL) -> list[Task]:
        selected = [t for t in self._repo if task_filter.accepts(t)]
        return sort_for_listing(selected)

    def edit_task(self, task_id: str, new_description: str) -> MutationResult:
        task = self._repo.get(task_id)
        if not Task.validate_description(new_description):
            raise ValidationError("Task description cannot be empty")
        self._ensure_unique(new_description, exclude_id=task.id)

        task.description = new_description.strip()
        return self._commit(task, "edited")

    def complete_task(self, task_id: str) -> MutationResult:
        task = self._repo.get(task_id)
        if task.completed:
            raise TaskStateError(f"Task is already completed: {task.description!r}")
        task.mark_completed()
        return self._commit(task, "completed")

    def reopen_task(self, task_id: str) -> MutationResult:
        task = self._repo.get(task_id)
        if not task.completed:
            raise TaskStateError(f"Task is not completed: {task.description!r}")
        task.mark_pending()
        return self._commit(task, "reopened")

    def delete_task(self, task_id: str) -> MutationResult:
        task = self._repo.remove(task_id)
        return self._commit(task, "deleted")

    def search_tasks(self, term: str) -> list[Task]:
        """Case-insensitive substring match; keeps collection order."""
        if not isinstance(term, str) or not term.strip():
            raise ValidationError("Search term cannot be empty")
        return [t for t in self._repo if t.matches(term)]

    def compute_statistics(self) -> TaskStats:
        tasks = self._repo.all()
        total = len(tasks)
        completed = sum(1 for t in tasks if t.completed)
        pct = _round_half_up(completed / total * 100) if total else 0

        best: ProductiveDay | None = None
        if tasks:
            per_day = Counter(t.created_day for t in tasks)
            # Highest count wins; on a tie the earliest date wins.
            day, count = min(per_day.items(), key=lambda kv: (-kv[1], kv[0]))
            best = ProductiveDay(day=day, count=count)

        return TaskStats(
            total=total,
            completed_count=completed,
            pending_count=total - completed,
            completion_percentage=pct,
            most_productive_day=best,
        )

# src/task_tracker/tasks/task_repository.py

from __future__ import annotations

import logging
from collections.abc import Iterator

from ..core.ports import TaskStore
from .errors import NotFoundError
from .task_models import Task

logger = logging.getLogger(__name__)


class TaskRepository:
    """
    Single authoritative in-memory task collection + sync with a TaskStore.

    The list is built from durable state by initialize() and refreshed to the
    store by persist(). Nothing else should keep its own copy of the tasks.
    """

    def __init__(self, store: TaskStore) -> None:
        self._store = store
        self._tasks: list[Task] = []

    @property
    def store(self) -> TaskStore:
        return self._store

    def initialize(self) -> int:
        """Reset, then reload from the store. Never raises; returns the loaded count."""
        self._tasks.clear()
        try:
            loaded = self._store.load_all()
        except Exception:
            # Backends are fail-soft already; a buggy one must not abort startup.
            logger.exception("TaskStore.load_all raised; starting with an empty collection.")
            loaded = []

        seen: set[str] = set()
        for task in loaded:
            if task.id in seen:
                logger.warning("Dropping task with duplicate id=%s from storage.", task.id)
                continue
            seen.add(task.id)
            self._tasks.append(task)

        logger.info("Repository initialized with %d tasks from %s", len(self._tasks), self._store.describe())
        return len(self._tasks)

    def persist(self) -> bool:
        try:
            ok = bool(self._store.save_all(list(self._tasks)))
        except Exception:
            logger.exception("TaskStore.save_all raised; treating as not saved.")
            ok = False
        if not ok:
            logger.warning("Tasks were not saved to %s; durable state may be stale.", self._store.describe())
        return ok

    # ---- collection helpers ----

    def all(self) -> list[Task]:
        """Shallow copy in insertion order (same Task objects)."""
        return list(self._tasks)

    def add(self, task: Task) -> None:
        self._tasks.append(task)

    def get(self, task_id: str) -> Task:
        for task in self._tasks:
            if task.id == task_id:
                return task
        raise NotFoundError(task_id)

    def remove(self, task_id: str) -> Task:
        for i, task in enumerate(self._tasks):
            if task.id == task_id:
                return self._tasks.pop(i)
        raise NotFoundError(task_id)

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(list(self._tasks))

# src/task_tracker/core/state.py

from __future__ import annotations

from dataclasses import dataclass

from ..tasks.task_repository import TaskRepository
from ..tasks.task_service import TaskService
from .ports import TaskStore


@dataclass
class AppState:
    # Store Settings on the state for easy access in other modules later.
    settings: object

    store: TaskStore
    repository: TaskRepository
    service: TaskService

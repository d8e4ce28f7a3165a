# src/task_tracker/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures the local (gitignored) data directory exists,
- wires the configured storage backend, repository and service into AppState.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.ports import TaskStore
from ..core.state import AppState
from ..storage import build_store
from ..tasks.task_repository import TaskRepository
from ..tasks.task_service import TaskService

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings=None, store: TaskStore | None = None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings (and the store) injectable makes the app easier to test.
    If settings is None, falls back to get_settings(). The repository is NOT
    loaded here; call state.repository.initialize() once at startup.
    """
    if settings is None:
        settings = get_settings()

    if store is None:
        try:
            _ensure_local_dirs(settings)
        except OSError:
            logger.warning("Could not create data dir %s", settings.data_dir, exc_info=True)
        store = build_store(settings)

    repository = TaskRepository(store)
    state = AppState(
        settings=settings,
        store=store,
        repository=repository,
        service=TaskService(repository),
    )
    logger.debug("AppState created store=%s", store.describe())
    return state

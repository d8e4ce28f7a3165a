# tests/conftest.py

from __future__ import annotations

import logging
from pathlib import Path
from types import SimpleNamespace

import pytest

from task_tracker.cli.bootstrap import create_initial_state
from task_tracker.core.state import AppState
from task_tracker.storage.json_store import JsonFileTaskStore
from task_tracker.tasks.task_repository import TaskRepository
from task_tracker.tasks.task_service import TaskService

from .fakes import InMemoryTaskStore


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the storage factory.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="task-tracker-test",
        log_level="WARNING",
        log_to_file=False,
        storage_backend="json",
        data_dir=tmp_path,
        tasks_file_path=tmp_path / "tasks.json",
        tasks_db_path=tmp_path / "tasks.sqlite3",
        mongo_url="mongodb://localhost:27017",
        mongo_db="task-tracker-test",
        mongo_collection="tasks",
        mongo_timeout_ms=100,
    )


@pytest.fixture()
def memory_store() -> InMemoryTaskStore:
    return InMemoryTaskStore()


@pytest.fixture()
def repository(memory_store: InMemoryTaskStore) -> TaskRepository:
    repo = TaskRepository(memory_store)
    repo.initialize()
    return repo


@pytest.fixture()
def service(repository: TaskRepository) -> TaskService:
    return TaskService(repository)


@pytest.fixture()
def state(settings: SimpleNamespace) -> AppState:
    """
    AppState wired with a real JSON file store under tmp_path.

    NOTE: the real store is kept here because the save/load path is part of
    what the command tests exercise.
    """
    st = create_initial_state(settings=settings, store=JsonFileTaskStore(settings.tasks_file_path))
    st.repository.initialize()
    return st


@pytest.fixture()
def restore_root_logging():
    """setup_logging replaces root handlers; put pytest's back afterwards."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for h in list(root.handlers):
        if h not in handlers:
            h.close()
        root.removeHandler(h)
    for h in handlers:
        root.addHandler(h)
    root.setLevel(level)
    logging.captureWarnings(False)

"""
Storage backends for the task collection.

Components:
- records.py: record codec shared by every backend
- json_store.py: single pretty-printed JSON file
- sqlite_store.py: SQLite table, one row per task
- mongo_store.py: MongoDB collection, one document per task

All backends replace the whole collection on every save. This assumes a
single writer: two processes saving at the same time can lose data.
"""

from __future__ import annotations

import logging

from ..core.ports import TaskStore
from .json_store import JsonFileTaskStore
from .sqlite_store import SqliteTaskStore

logger = logging.getLogger(__name__)

BACKENDS = ("json", "sqlite", "mongo")


def build_store(settings) -> TaskStore:
    """Pick the backend named by settings.storage_backend (falls back to json)."""
    backend = str(getattr(settings, "storage_backend", "json") or "json").strip().lower()
    if backend not in BACKENDS:
        logger.warning("Unknown storage backend %r; using json.", backend)
        backend = "json"

    if backend == "sqlite":
        return SqliteTaskStore(settings.tasks_db_path)

    if backend == "mongo":
        from .mongo_store import MongoTaskStore

        return MongoTaskStore(
            settings.mongo_url,
            settings.mongo_db,
            settings.mongo_collection,
            timeout_ms=settings.mongo_timeout_ms,
        )

    return JsonFileTaskStore(settings.tasks_file_path)

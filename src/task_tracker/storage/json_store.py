# src/task_tracker/storage/json_store.py

from __future__ import annotations

import json
import logging
import os
from collections.abc import Sequence
from pathlib import Path

from ..tasks.task_models import Task
from .records import records_to_tasks, task_to_record

logger = logging.getLogger(__name__)


class JsonFileTaskStore:
    """
    Flat-file backend: one pretty-printed JSON array of task records.

    Every save rewrites the whole file (tmp file + os.replace).
    """

    def __init__(self, path: str | Path = "tasks.json") -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def describe(self) -> str:
        return f"json:{self._path}"

    def close(self) -> None:
        """Nothing to release; the file is opened per call."""
        return

    def load_all(self) -> list[Task]:
        if not self._path.exists():
            logger.info("No tasks file at %s; starting empty.", self._path)
            return []
        try:
            data = json.loads(self._path.read_text("utf-8"))
        except (OSError, ValueError):
            logger.exception("Failed to read tasks from %s", self._path)
            return []
        if not isinstance(data, list):
            logger.warning("Tasks file %s does not hold a JSON array; ignoring it.", self._path)
            return []
        tasks = records_to_tasks(data, source=str(self._path))
        logger.info("Loaded %d tasks from %s", len(tasks), self._path)
        return tasks

    def save_all(self, tasks: Sequence[Task]) -> bool:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            payload = json.dumps([task_to_record(t) for t in tasks], ensure_ascii=False, indent=2)
            tmp = self._path.with_suffix(self._path.suffix + ".tmp")
            tmp.write_text(payload, "utf-8")
            os.replace(tmp, self._path)
        except (OSError, TypeError, ValueError):
            logger.exception("Failed to save %d tasks to %s", len(tasks), self._path)
            return False
        logger.debug("Saved %d tasks to %s", len(tasks), self._path)
        return True

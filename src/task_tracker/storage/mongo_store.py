# src/task_tracker/storage/mongo_store.py

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from pymongo import MongoClient
from pymongo.errors import PyMongoError

from ..tasks.task_models import Task
from .records import records_to_tasks, task_to_record

logger = logging.getLogger(__name__)


class MongoTaskStore:
    """
    MongoDB document-store backend.

    - one document per task; _id is generated by the driver and never leaks
      into the engine (projection drops it on load)
    - save_all is delete_many({}) followed by insert_many(...)
    - the client is created on first use and reused for the whole session;
      close() releases it
    """

    def __init__(
        self,
        url: str = "mongodb://localhost:27017",
        db_name: str = "task-tracker",
        collection_name: str = "tasks",
        *,
        timeout_ms: int = 3000,
        client: Any | None = None,
    ) -> None:
        self._url = url
        self._db_name = db_name
        self._collection_name = collection_name
        self._timeout_ms = int(timeout_ms)
        self._client = client

    def describe(self) -> str:
        return f"mongo:{self._db_name}.{self._collection_name}"

    def _collection(self) -> Any:
        if self._client is None:
            self._client = MongoClient(self._url, serverSelectionTimeoutMS=self._timeout_ms)
            logger.info("MongoDB client created url=%s db=%s", self._url, self._db_name)
        return self._client[self._db_name][self._collection_name]

    def close(self) -> None:
        if self._client is None:
            return
        try:
            self._client.close()
            logger.info("MongoDB connection closed.")
        except PyMongoError:
            logger.warning("MongoDB close failed.", exc_info=True)
        finally:
            self._client = None

    def load_all(self) -> list[Task]:
        try:
            docs = list(self._collection().find({}, {"_id": 0}))
        except PyMongoError:
            logger.exception("Failed to load tasks from %s", self.describe())
            return []
        tasks = records_to_tasks(docs, source=self.describe())
        logger.info("Loaded %d tasks from %s", len(tasks), self.describe())
        return tasks

    def save_all(self, tasks: Sequence[Task]) -> bool:
        docs = [task_to_record(t) for t in tasks]
        try:
            coll = self._collection()
            coll.delete_many({})
            if docs:
                coll.insert_many(docs)
        except PyMongoError:
            logger.exception("Failed to save %d tasks to %s", len(docs), self.describe())
            return False
        logger.debug("Saved %d tasks to %s", len(docs), self.describe())
        return True

# src/task_tracker/storage/sqlite_store.py

from __future__ import annotations

import contextlib
import logging
import sqlite3
from collections.abc import Sequence
from pathlib import Path

from ..tasks.task_models import Task
from .records import records_to_tasks, task_to_record

logger = logging.getLogger(__name__)


class SqliteTaskStore:
    """
    SQLite collection backend.

    Each row is addressed by a database-generated key (pk); the engine only
    ever sees Task.id (stored in task_id).

    The schema is intentionally simple and migration-safe:
    - create table if missing
    - use PRAGMA table_info to detect missing columns
    - add columns with ALTER TABLE only when needed

    Each method opens its own SQLite connection.
    """

    def __init__(self, db_path: str | Path = "tasks.sqlite3") -> None:
        self._db_path = Path(db_path)
        self._ready = False

    def describe(self) -> str:
        return f"sqlite:{self._db_path}"

    def close(self) -> None:
        """Compatibility hook for shutdown (no persistent connections to close)."""
        return

    # ---- low-level helpers ----

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._db_path), timeout=30.0)
        conn.row_factory = sqlite3.Row
        self._configure_conn(conn)
        return conn

    @staticmethod
    def _configure_conn(conn: sqlite3.Connection) -> None:
        with contextlib.suppress(sqlite3.Error):
            conn.execute("PRAGMA journal_mode=WAL")

    def _ensure_schema(self) -> None:
        if self._ready:
            return
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        conn = self._get_conn()
        try:
            cur = conn.cursor()
            cur.execute(
                """
                CREATE TABLE IF NOT EXISTS tasks (
                    pk INTEGER PRIMARY KEY AUTOINCREMENT,
                    task_id TEXT NOT NULL,
                    description TEXT NOT NULL,
                    completed INTEGER NOT NULL DEFAULT 0,
                    created_at TEXT NOT NULL,
                    completed_at TEXT
                )
                """
            )

            cur.execute("PRAGMA table_info(tasks)")
            cols = {row["name"] for row in cur.fetchall()}

            def add_col(name: str, decl: str) -> None:
                if name in cols:
                    return
                cur.execute(f"ALTER TABLE tasks ADD COLUMN {name} {decl}")
                logger.info("SqliteTaskStore migration: added column %s", name)

            add_col("completed", "INTEGER NOT NULL DEFAULT 0")
            add_col("completed_at", "TEXT")

            conn.commit()
        finally:
            conn.close()
        self._ready = True

    # ---- port ----

    def load_all(self) -> list[Task]:
        try:
            self._ensure_schema()
            conn = self._get_conn()
            try:
                rows = conn.execute(
                    "SELECT task_id, description, completed, created_at, completed_at "
                    "FROM tasks ORDER BY pk ASC"
                ).fetchall()
            finally:
                conn.close()
        except (OSError, sqlite3.Error):
            logger.exception("Failed to load tasks from %s", self._db_path)
            return []

        records = []
        for row in rows:
            rec = {
                "id": row["task_id"],
                "description": row["description"],
                "completed": bool(row["completed"]),
                "createdAt": row["created_at"],
            }
            if row["completed_at"]:
                rec["completedAt"] = row["completed_at"]
            records.append(rec)

        tasks = records_to_tasks(records, source=str(self._db_path))
        logger.info("Loaded %d tasks from %s", len(tasks), self._db_path)
        return tasks

    def save_all(self, tasks: Sequence[Task]) -> bool:
        rows = []
        for t in tasks:
            rec = task_to_record(t)
            rows.append(
                (
                    rec["id"],
                    rec["description"],
                    1 if rec["completed"] else 0,
                    rec["createdAt"],
                    rec.get("completedAt"),
                )
            )

        try:
            self._ensure_schema()
            conn = self._get_conn()
            try:
                # One transaction: delete everything, then insert the full collection.
                with conn:
                    conn.execute("DELETE FROM tasks")
                    conn.executemany(
                        "INSERT INTO tasks(task_id, description, completed, created_at, completed_at) "
                        "VALUES (?, ?, ?, ?, ?)",
                        rows,
                    )
            finally:
                conn.close()
        except (OSError, sqlite3.Error):
            logger.exception("Failed to save %d tasks to %s", len(rows), self._db_path)
            return False

        logger.debug("Saved %d tasks to %s", len(rows), self._db_path)
        return True

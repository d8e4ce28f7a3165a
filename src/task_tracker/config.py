# src/task_tracker/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app (normal "settings layer").
- No storage is touched at import time.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TASKS"

load_dotenv(override=False)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str
    log_to_file: bool

    # ---- Storage ----
    storage_backend: str
    data_dir: Path
    tasks_file_path: Path
    tasks_db_path: Path

    # ---- MongoDB ----
    mongo_url: str
    mongo_db: str
    mongo_collection: str
    mongo_timeout_ms: int

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "task-tracker") or "task-tracker"
        # Console stays quiet by default; everything still goes to the log file.
        log_level = _env(_k("LOG_LEVEL"), "WARNING")
        log_to_file = _env_bool(_k("LOG_TO_FILE"), True)

        storage_backend = _env(_k("STORAGE"), "json").strip().lower() or "json"

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/task-tracker"))
        tasks_file_path = _env_path(_k("FILE_PATH"), data_dir / "tasks.json")
        tasks_db_path = _env_path(_k("DB_PATH"), data_dir / "tasks.sqlite3")

        mongo_url = _env(_k("MONGO_URL"), "mongodb://localhost:27017")
        mongo_db = _env(_k("MONGO_DB"), "task-tracker")
        mongo_collection = _env(_k("MONGO_COLLECTION"), "tasks")
        mongo_timeout_ms = _env_int(_k("MONGO_TIMEOUT_MS"), 3000)

        return Settings(
            app_name=app_name,
            log_level=log_level,
            log_to_file=log_to_file,
            storage_backend=storage_backend,
            data_dir=data_dir,
            tasks_file_path=tasks_file_path,
            tasks_db_path=tasks_db_path,
            mongo_url=mongo_url,
            mongo_db=mongo_db,
            mongo_collection=mongo_collection,
            mongo_timeout_ms=mongo_timeout_ms,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS

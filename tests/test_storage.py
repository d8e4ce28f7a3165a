# tests/test_storage.py

from __future__ import annotations

import json
import sqlite3
from pathlib import Path

import pytest

from task_tracker.storage import build_store
from task_tracker.storage.json_store import JsonFileTaskStore
from task_tracker.storage.mongo_store import MongoTaskStore
from task_tracker.storage.records import RecordError, record_to_task, task_to_record
from task_tracker.storage.sqlite_store import SqliteTaskStore
from task_tracker.tasks.task_models import Task

from .fakes import FakeMongoClient


def _sample_tasks() -> list[Task]:
    done = Task.create("Pay rent")
    done.mark_completed()
    return [Task.create("Buy milk"), done, Task.create("Llamar a mamá")]


def _assert_same(loaded: list[Task], original: list[Task]) -> None:
    assert [(t.id, t.description, t.completed, t.created_at, t.completed_at) for t in loaded] == [
        (t.id, t.description, t.completed, t.created_at, t.completed_at) for t in original
    ]


# ---- records ----


def test_record_omits_completed_at_while_pending() -> None:
    task = Task.create("Buy milk")
    rec = task_to_record(task)
    assert set(rec) == {"id", "description", "completed", "createdAt"}

    task.mark_completed()
    assert "completedAt" in task_to_record(task)

    task.mark_pending()
    assert "completedAt" not in task_to_record(task)


def test_record_accepts_zulu_timestamps() -> None:
    task = record_to_task(
        {
            "id": "tarea_1",
            "description": " Buy milk ",
            "completed": True,
            "createdAt": "2024-09-17T10:30:00.000Z",
            "completedAt": "2024-09-17T11:00:00.000Z",
        }
    )
    assert task.description == "Buy milk"
    assert task.created_at.tzinfo is not None
    assert task.completed_at is not None and task.completed_at > task.created_at


@pytest.mark.parametrize(
    "record",
    [
        {"description": "x", "createdAt": "2024-01-01T00:00:00"},
        {"id": "1", "description": "  ", "createdAt": "2024-01-01T00:00:00"},
        {"id": "1", "description": "x"},
        {"id": "1", "description": "x", "createdAt": "yesterday"},
        {"id": "1", "description": "x", "completed": "false", "createdAt": "2024-01-01T00:00:00"},
        {"id": "1", "description": "x", "completed": 1, "createdAt": "2024-01-01T00:00:00"},
        {"id": "1", "description": "x", "completed": None, "createdAt": "2024-01-01T00:00:00"},
    ],
)
def test_invalid_records_are_rejected(record) -> None:
    with pytest.raises(RecordError):
        record_to_task(record)


# ---- JSON file ----


def test_json_round_trip(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "tasks.json"
    store = JsonFileTaskStore(path)
    tasks = _sample_tasks()

    assert store.save_all(tasks) is True
    _assert_same(JsonFileTaskStore(path).load_all(), tasks)

    raw = path.read_text("utf-8")
    assert raw.startswith("[\n  {")
    assert "Llamar a mamá" in raw


def test_json_save_replaces_everything(tmp_path: Path) -> None:
    store = JsonFileTaskStore(tmp_path / "tasks.json")
    store.save_all(_sample_tasks())
    store.save_all([])
    assert json.loads((tmp_path / "tasks.json").read_text("utf-8")) == []


def test_json_missing_or_corrupt_file_loads_empty(tmp_path: Path) -> None:
    path = tmp_path / "tasks.json"
    assert JsonFileTaskStore(path).load_all() == []

    path.write_text("{not json", "utf-8")
    assert JsonFileTaskStore(path).load_all() == []

    path.write_text('{"tasks": []}', "utf-8")
    assert JsonFileTaskStore(path).load_all() == []


def test_json_skips_bad_records(tmp_path: Path) -> None:
    path = tmp_path / "tasks.json"
    good = Task.create("good")
    stringly = {**task_to_record(Task.create("stringly")), "completed": "false"}
    path.write_text(json.dumps([task_to_record(good), {"id": "x"}, "junk", stringly]), "utf-8")

    loaded = JsonFileTaskStore(path).load_all()
    assert [t.id for t in loaded] == [good.id]


def test_json_save_failure_returns_false(tmp_path: Path) -> None:
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("", "utf-8")
    store = JsonFileTaskStore(blocker / "tasks.json")
    assert store.save_all(_sample_tasks()) is False


# ---- SQLite ----


def test_sqlite_round_trip_and_replace(tmp_path: Path) -> None:
    db = tmp_path / "tasks.sqlite3"
    store = SqliteTaskStore(db)
    tasks = _sample_tasks()

    assert store.save_all(tasks) is True
    _assert_same(SqliteTaskStore(db).load_all(), tasks)

    assert store.save_all(tasks[:1]) is True
    conn = sqlite3.connect(str(db))
    try:
        (n,) = conn.execute("SELECT COUNT(*) FROM tasks").fetchone()
    finally:
        conn.close()
    assert n == 1


def test_sqlite_unreadable_db_loads_empty(tmp_path: Path) -> None:
    db = tmp_path / "tasks.sqlite3"
    db.write_bytes(b"this is not a sqlite database at all, just bytes" * 10)
    assert SqliteTaskStore(db).load_all() == []


# ---- MongoDB ----


def test_mongo_round_trip_hides_driver_ids() -> None:
    client = FakeMongoClient()
    store = MongoTaskStore(db_name="db", collection_name="tasks", client=client)
    tasks = _sample_tasks()

    assert store.save_all(tasks) is True
    coll = client.collections[("db", "tasks")]
    assert all("_id" in d for d in coll.docs)

    _assert_same(MongoTaskStore(db_name="db", collection_name="tasks", client=client).load_all(), tasks)

    assert store.save_all([]) is True
    assert coll.docs == []


def test_mongo_unreachable_is_fail_soft() -> None:
    client = FakeMongoClient()
    store = MongoTaskStore(db_name="db", collection_name="tasks", client=client)
    client["db"]["tasks"].fail = True

    assert store.load_all() == []
    assert store.save_all(_sample_tasks()) is False


def test_mongo_close_releases_client() -> None:
    client = FakeMongoClient()
    store = MongoTaskStore(client=client)
    store.close()
    store.close()
    assert client.closed is True


# ---- factory ----


@pytest.mark.parametrize(
    "backend,cls",
    [("json", JsonFileTaskStore), ("sqlite", SqliteTaskStore), ("mongo", MongoTaskStore), ("bogus", JsonFileTaskStore)],
)
def test_build_store_picks_backend(settings, backend: str, cls: type) -> None:
    settings.storage_backend = backend
    store = build_store(settings)
    try:
        assert isinstance(store, cls)
    finally:
        store.close()

# src/task_tracker/storage/records.py

"""
Record codec shared by all backends.

Record shape: {id, description, completed, createdAt, completedAt?}
- timestamps are ISO 8601 strings
- completedAt is present only when completed is true
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from datetime import datetime, timezone
from typing import Any

from ..tasks.task_models import Task

logger = logging.getLogger(__name__)


class RecordError(ValueError):
    pass


def _parse_ts(raw: Any, field_name: str) -> datetime:
    if isinstance(raw, datetime):
        dt = raw
    elif isinstance(raw, str) and raw.strip():
        try:
            # Accept the trailing "Z" written by other tools.
            dt = datetime.fromisoformat(raw.strip().replace("Z", "+00:00"))
        except ValueError as e:
            raise RecordError(f"invalid {field_name}: {raw!r}") from e
    else:
        raise RecordError(f"missing {field_name}")
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def task_to_record(task: Task) -> dict[str, Any]:
    record: dict[str, Any] = {
        "id": task.id,
        "description": task.description,
        "completed": task.completed,
        "createdAt": task.created_at.isoformat(),
    }
    if task.completed and task.completed_at is not None:
        record["completedAt"] = task.completed_at.isoformat()
    return record


def record_to_task(record: Mapping[str, Any]) -> Task:
    task_id = record.get("id")
    if not isinstance(task_id, str) or not task_id.strip():
        raise RecordError("missing id")

    description = record.get("description")
    if not Task.validate_description(description):
        raise RecordError(f"empty description for id={task_id}")

    completed = record.get("completed", False)
    if not isinstance(completed, bool):
        raise RecordError(f"invalid completed for id={task_id}: {completed!r}")
    created_at = _parse_ts(record.get("createdAt"), "createdAt")

    completed_at: datetime | None = None
    if completed:
        raw_done = record.get("completedAt")
        # A completed record without a timestamp falls back to createdAt.
        completed_at = _parse_ts(raw_done, "completedAt") if raw_done else created_at

    return Task(
        id=task_id,
        description=str(description).strip(),
        completed=completed,
        created_at=created_at,
        completed_at=completed_at,
    )


def records_to_tasks(records: Iterable[Any], *, source: str) -> list[Task]:
    """Decode records, skipping (and logging) the ones that cannot be decoded."""
    out: list[Task] = []
    for i, rec in enumerate(records):
        if not isinstance(rec, Mapping):
            logger.warning("Skipping non-object record #%d from %s", i, source)
            continue
        try:
            out.append(record_to_task(rec))
        except RecordError as e:
            logger.warning("Skipping invalid record #%d from %s: %s", i, source, e)
    return out

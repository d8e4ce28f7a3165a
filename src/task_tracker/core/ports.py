# src/task_tracker/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The repository depends on a Protocol instead of a concrete backend.
This keeps storage swappable (JSON file / SQLite / MongoDB) and makes testing easier.
"""

from collections.abc import Sequence
from typing import Protocol

from ..tasks.task_models import Task


class TaskStore(Protocol):
    """
    Persistence port: durable copy of the whole task collection.

    Contract:
    - load_all() is fail-soft: any read error yields [] instead of raising.
    - save_all() replaces everything (delete-then-write) and reports failure
      by returning False; it never raises.
    - Single writer only: two processes saving concurrently can lose data.
    """

    def load_all(self) -> list[Task]: ...
    def save_all(self, tasks: Sequence[Task]) -> bool: ...
    def close(self) -> None: ...
    def describe(self) -> str: ...

# tests/fakes.py

from __future__ import annotations

import copy
import itertools
from collections.abc import Iterable, Sequence
from dataclasses import replace
from typing import Any

from pymongo.errors import ServerSelectionTimeoutError

from task_tracker.tasks.task_models import Task


class InMemoryTaskStore:
    """
    Deterministic TaskStore for unit tests.

    - Keeps independent copies of saved tasks (like a real backend would)
    - Counts save calls for assertions
    - save_ok=False simulates a backend that cannot write
    """

    def __init__(self, tasks: Iterable[Task] = (), *, save_ok: bool = True) -> None:
        self.saved: list[Task] = [replace(t) for t in tasks]
        self.save_ok = save_ok
        self.save_calls = 0
        self.load_calls = 0
        self.closed = False

    def describe(self) -> str:
        return "memory:test"

    def load_all(self) -> list[Task]:
        self.load_calls += 1
        return [replace(t) for t in self.saved]

    def save_all(self, tasks: Sequence[Task]) -> bool:
        self.save_calls += 1
        if not self.save_ok:
            return False
        self.saved = [replace(t) for t in tasks]
        return True

    def close(self) -> None:
        self.closed = True


class ExplodingTaskStore(InMemoryTaskStore):
    """Backend that breaks the port contract by raising."""

    def load_all(self) -> list[Task]:
        raise RuntimeError("boom on load")

    def save_all(self, tasks: Sequence[Task]) -> bool:
        raise RuntimeError("boom on save")


class ScriptedAsk:
    """Replacement for input(): returns queued answers and records prompts."""

    def __init__(self, *answers: str) -> None:
        self._answers = list(answers)
        self.prompts: list[str] = []

    def __call__(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if not self._answers:
            raise EOFError
        return self._answers.pop(0)


class FakeMongoCollection:
    """Just enough of pymongo's Collection for MongoTaskStore."""

    _ids = itertools.count(1)

    def __init__(self) -> None:
        self.docs: list[dict[str, Any]] = []
        self.fail = False

    def _check(self) -> None:
        if self.fail:
            raise ServerSelectionTimeoutError("no servers available")

    def find(self, filter: dict[str, Any], projection: dict[str, int] | None = None):
        self._check()
        out = []
        for doc in self.docs:
            d = copy.deepcopy(doc)
            if projection and projection.get("_id") == 0:
                d.pop("_id", None)
            out.append(d)
        return iter(out)

    def delete_many(self, filter: dict[str, Any]) -> None:
        self._check()
        self.docs.clear()

    def insert_many(self, docs: list[dict[str, Any]]) -> None:
        self._check()
        for d in docs:
            # pymongo assigns _id on the passed documents.
            d.setdefault("_id", next(self._ids))
            self.docs.append(copy.deepcopy(d))


class FakeMongoClient:
    def __init__(self) -> None:
        self.collections: dict[tuple[str, str], FakeMongoCollection] = {}
        self.closed = False

    def __getitem__(self, db_name: str) -> _FakeDb:
        return _FakeDb(self, db_name)

    def close(self) -> None:
        self.closed = True


class _FakeDb:
    def __init__(self, client: FakeMongoClient, name: str) -> None:
        self._client = client
        self._name = name

    def __getitem__(self, coll_name: str) -> FakeMongoCollection:
        key = (self._name, coll_name)
        if key not in self._client.collections:
            self._client.collections[key] = FakeMongoCollection()
        return self._client.collections[key]

"""Shared fixtures: an in-memory stand-in for the async Mongo collections."""

from __future__ import annotations

import copy
import re
from types import SimpleNamespace
from typing import Any, Dict, List, Optional
from unittest.mock import AsyncMock, MagicMock

import pytest
from bson import ObjectId

from lessonhub.server.db import Storage


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _match_condition(value: Any, cond: Any) -> bool:
    if isinstance(cond, dict) and any(k.startswith("$") for k in cond):
        for op, arg in cond.items():
            if op == "$gt":
                if not (_is_number(value) and value > arg):
                    return False
            elif op == "$regex":
                flags = re.IGNORECASE if "i" in cond.get("$options", "") else 0
                if not (isinstance(value, str) and re.search(arg, value, flags)):
                    return False
            elif op == "$options":
                continue
            else:
                raise NotImplementedError(op)
        return True
    return value == cond


def _matches(doc: Dict[str, Any], filt: Optional[Dict[str, Any]]) -> bool:
    for key, cond in (filt or {}).items():
        if key == "$or":
            if not any(_matches(doc, sub) for sub in cond):
                return False
        elif not _match_condition(doc.get(key), cond):
            return False
    return True


class FakeCursor:
    def __init__(self, docs: List[Dict[str, Any]]) -> None:
        self._docs = docs

    async def to_list(self, length: Optional[int] = None) -> List[Dict[str, Any]]:
        return self._docs if length is None else self._docs[:length]


class FakeCollection:
    """Implements the subset of AsyncCollection the repositories call."""

    def __init__(self, docs: Optional[List[Dict[str, Any]]] = None) -> None:
        self.docs: List[Dict[str, Any]] = []
        self.writes = 0
        for d in docs or []:
            self.docs.append({"_id": ObjectId(), **d})

    def find(self, filt: Optional[Dict[str, Any]] = None, projection: Any = None) -> FakeCursor:
        return FakeCursor([copy.deepcopy(d) for d in self.docs if _matches(d, filt)])

    async def find_one(self, filt: Dict[str, Any], projection: Any = None) -> Optional[Dict[str, Any]]:
        for d in self.docs:
            if _matches(d, filt):
                return copy.deepcopy(d)
        return None

    async def insert_one(self, doc: Dict[str, Any]) -> SimpleNamespace:
        doc.setdefault("_id", ObjectId())
        self.docs.append(copy.deepcopy(doc))
        self.writes += 1
        return SimpleNamespace(inserted_id=doc["_id"])

    async def update_one(self, filt: Dict[str, Any], update: Dict[str, Any]) -> SimpleNamespace:
        for d in self.docs:
            if not _matches(d, filt):
                continue
            before = copy.deepcopy(d)
            for key, val in update.get("$set", {}).items():
                d[key] = val
            for key, delta in update.get("$inc", {}).items():
                d[key] = d.get(key, 0) + delta
            modified = int(d != before)
            self.writes += modified
            return SimpleNamespace(matched_count=1, modified_count=modified)
        return SimpleNamespace(matched_count=0, modified_count=0)

    def get(self, lesson_id: str) -> Optional[Dict[str, Any]]:
        for d in self.docs:
            if str(d["_id"]) == lesson_id:
                return d
        return None


MATH_LESSON = {
    "topic": "Math",
    "price": 10,
    "location": "Room1",
    "space": 5,
    "category": "Science",
    "level": "Beginner",
    "duration": "1h",
    "image": "math.png",
    "preview": "p",
    "subject": "Math",
}


@pytest.fixture
def math_lesson() -> Dict[str, Any]:
    return dict(MATH_LESSON)


@pytest.fixture
def lessons() -> FakeCollection:
    return FakeCollection()


@pytest.fixture
def orders() -> FakeCollection:
    return FakeCollection()


@pytest.fixture
def storage(lessons: FakeCollection, orders: FakeCollection) -> Storage:
    client = MagicMock()
    client.admin.command = AsyncMock(return_value={"ok": 1.0})
    client.close = AsyncMock()
    return Storage(client=client, lessons=lessons, orders=orders)


@pytest.fixture
def add_lesson(lessons: FakeCollection):
    """Store a lesson directly in the fake collection and return its id."""

    def _add(**overrides: Any) -> str:
        doc = {"_id": ObjectId(), **MATH_LESSON, **overrides}
        lessons.docs.append(doc)
        return str(doc["_id"])

    return _add

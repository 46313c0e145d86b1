"""Lesson and order operations against the document store."""

from __future__ import annotations

import logging
import re
from typing import Any, Dict, List, Mapping, Optional

from bson import ObjectId
from bson.errors import BSONError, InvalidId
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.errors import PyMongoError

from lessonhub.exceptions import (
    ClientInputError,
    DecrementFailedError,
    LessonNotFoundError,
    NoCapacityError,
    OrderInsertError,
)

logger = logging.getLogger(__name__)

LESSON_FIELDS = (
    "topic",
    "price",
    "location",
    "space",
    "category",
    "level",
    "duration",
    "image",
    "preview",
    "subject",
)

SEARCH_FIELDS = ("topic", "category", "subject", "location", "level")


def _object_id(value: str) -> Optional[ObjectId]:
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        return None


def serialize_document(doc: Mapping[str, Any]) -> Dict[str, Any]:
    """Return a JSON-ready copy of a stored document (ObjectIds as hex strings)."""
    return {
        key: str(val) if isinstance(val, ObjectId) else val
        for key, val in doc.items()
    }


def build_search_filter(query: str) -> Dict[str, Any]:
    """Case-insensitive literal substring match on any searchable field."""
    pattern = re.escape(query)
    return {
        "$or": [
            {name: {"$regex": pattern, "$options": "i"}} for name in SEARCH_FIELDS
        ]
    }


class LessonRepository:
    """Operations on the lessons collection."""

    def __init__(self, collection: AsyncCollection) -> None:
        self._collection = collection

    async def list_all(self) -> List[Dict[str, Any]]:
        cursor = self._collection.find()
        docs = await cursor.to_list(length=None)
        return [serialize_document(d) for d in docs]

    async def insert(self, fields: Mapping[str, Any]) -> str:
        """Store a new lesson and return its id.

        All ten lesson fields must be present and truthy. Zero prices or
        capacities are rejected too, which existing clients rely on.
        """
        if not all(fields.get(name) for name in LESSON_FIELDS):
            raise ClientInputError("Missing required lesson fields")

        lesson = {name: fields[name] for name in LESSON_FIELDS}
        result = await self._collection.insert_one(lesson)
        return str(result.inserted_id)

    async def update(self, lesson_id: str, updates: Mapping[str, Any]) -> None:
        """Set exactly the given fields on a lesson.

        Field names are not checked against the lesson schema.
        """
        if not updates:
            raise ClientInputError("No fields provided to update")
        if "_id" in updates:
            raise ClientInputError("Lesson id cannot be updated")

        oid = _object_id(lesson_id)
        if oid is None:
            raise LessonNotFoundError(lesson_id)

        result = await self._collection.update_one({"_id": oid}, {"$set": dict(updates)})
        if result.matched_count == 0:
            raise LessonNotFoundError(lesson_id)

    async def decrement_space(self, lesson_id: str) -> None:
        """Book one place on a lesson.

        The capacity check and the write are a single filtered update, so
        concurrent bookings can never take ``space`` below zero. When
        nothing was modified the lesson is re-read only to pick the error.
        """
        oid = _object_id(lesson_id)
        if oid is None:
            raise LessonNotFoundError(lesson_id)

        result = await self._collection.update_one(
            {"_id": oid, "space": {"$gt": 0}},
            {"$inc": {"space": -1}},
        )
        if result.modified_count == 1:
            logger.debug("Decremented space for lesson %s", lesson_id)
            return

        lesson = await self._collection.find_one({"_id": oid}, {"space": 1})
        if lesson is None:
            raise LessonNotFoundError(lesson_id)

        space = lesson.get("space")
        if isinstance(space, (int, float)) and not isinstance(space, bool) and space <= 0:
            raise NoCapacityError(lesson_id)

        logger.warning("Space decrement matched no document for lesson %s (space=%r)", lesson_id, space)
        raise DecrementFailedError(lesson_id)

    async def search(self, query: Optional[str]) -> List[Dict[str, Any]]:
        if not query:
            raise ClientInputError("Search query is required")

        cursor = self._collection.find(build_search_filter(query))
        docs = await cursor.to_list(length=None)
        return [serialize_document(d) for d in docs]


class OrderRepository:
    """Operations on the orders collection."""

    def __init__(self, collection: AsyncCollection) -> None:
        self._collection = collection

    async def insert(self, order: Mapping[str, Any]) -> str:
        # insert_one adds _id to the dict it is given
        doc = dict(order)
        try:
            result = await self._collection.insert_one(doc)
        except (PyMongoError, BSONError) as exc:
            logger.exception("Error saving order")
            raise OrderInsertError() from exc
        return str(result.inserted_id)

"""Lesson endpoints for the lessonhub API."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, Query

from lessonhub.server.db import Storage, get_storage
from lessonhub.server.models import LessonCreateRequest, LessonCreateResponse, MessageResponse
from lessonhub.server.repository import LessonRepository

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/lessons", tags=["lessons"])


def get_lesson_repository(storage: Storage = Depends(get_storage)) -> LessonRepository:
    return LessonRepository(storage.lessons)


# ── List ───────────────────────────────────────────────────────────


@router.get("")
async def list_lessons(
    repo: LessonRepository = Depends(get_lesson_repository),
) -> List[Dict[str, Any]]:
    """Return every lesson."""
    return await repo.list_all()


# ── Search ─────────────────────────────────────────────────────────


@router.get("/search")
async def search_lessons(
    q: Optional[str] = Query(None),
    repo: LessonRepository = Depends(get_lesson_repository),
) -> List[Dict[str, Any]]:
    """Lessons whose topic, category, subject, location or level contains ``q``."""
    return await repo.search(q)


# ── Create ─────────────────────────────────────────────────────────


@router.post("", response_model=LessonCreateResponse, status_code=201)
async def create_lesson(
    body: LessonCreateRequest,
    repo: LessonRepository = Depends(get_lesson_repository),
) -> LessonCreateResponse:
    lesson_id = await repo.insert(body.model_dump())
    logger.info("Lesson created: %s", lesson_id)
    return LessonCreateResponse(message="Lesson added successfully", lessonId=lesson_id)


# ── Update ─────────────────────────────────────────────────────────


@router.put("/{lesson_id}", response_model=MessageResponse)
async def update_lesson(
    lesson_id: str,
    updates: Dict[str, Any] = Body(...),
    repo: LessonRepository = Depends(get_lesson_repository),
) -> MessageResponse:
    """Set any subset of a lesson's attributes."""
    await repo.update(lesson_id, updates)
    return MessageResponse(message="Lesson updated successfully")


# ── Decrement ──────────────────────────────────────────────────────


@router.put("/{lesson_id}/decrement", response_model=MessageResponse)
async def decrement_lesson_space(
    lesson_id: str,
    repo: LessonRepository = Depends(get_lesson_repository),
) -> MessageResponse:
    """Take one place on a lesson."""
    await repo.decrement_space(lesson_id)
    return MessageResponse(message="Lesson space decremented successfully")

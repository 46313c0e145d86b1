"""Pydantic request/response models for the lessonhub API."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, field_validator


# ── Lesson Create ──────────────────────────────────────────────────


class LessonCreateRequest(BaseModel):
    """Request body for POST /api/lessons.

    Values are stored as sent. Fields default to None so that absent and
    falsy values are both reported as missing by the repository, with one
    400 message.
    """

    topic: Optional[Any] = None
    price: Optional[Any] = None
    location: Optional[Any] = None
    space: Optional[Any] = None
    category: Optional[Any] = None
    level: Optional[Any] = None
    duration: Optional[Any] = None
    image: Optional[Any] = None
    preview: Optional[Any] = None
    subject: Optional[Any] = None

    @field_validator("space")
    @classmethod
    def validate_space_not_negative(cls, v: Any) -> Any:
        if isinstance(v, (int, float)) and not isinstance(v, bool) and v < 0:
            raise ValueError("space must not be negative")
        return v


class LessonCreateResponse(BaseModel):
    """Response for POST /api/lessons."""

    message: str
    lessonId: str


# ── Orders ─────────────────────────────────────────────────────────


class OrderCreateResponse(BaseModel):
    """Response for POST /api/orders."""

    message: str
    orderId: str


# ── Generic ────────────────────────────────────────────────────────


class MessageResponse(BaseModel):
    message: str

"""Lesson image files served from the public directory."""

from __future__ import annotations

import logging
from pathlib import Path

from fastapi import APIRouter, Request
from fastapi.responses import FileResponse, JSONResponse, Response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/pictures", tags=["assets"])


def _image_not_found(request: Request) -> JSONResponse:
    requested = request.url.path
    if request.url.query:
        requested = f"{requested}?{request.url.query}"
    logger.warning("[404] Image not found: %s", requested)
    return JSONResponse(
        status_code=404,
        content={
            "message": "Error: Lesson image not found on server.",
            "requestedPath": requested,
        },
    )


@router.api_route("", methods=["GET", "HEAD"])
async def pictures_index(request: Request) -> Response:
    return _image_not_found(request)


@router.api_route("/{file_path:path}", methods=["GET", "HEAD"])
async def get_picture(file_path: str, request: Request) -> Response:
    public_dir = Path(request.app.state.settings.public_dir).resolve()
    candidate = (public_dir / file_path).resolve()

    # Paths resolving outside public_dir are reported as missing
    if candidate.is_file() and candidate.is_relative_to(public_dir):
        return FileResponse(candidate)
    return _image_not_found(request)

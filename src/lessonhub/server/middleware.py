"""Request logging middleware and error handlers for the lessonhub server."""

from __future__ import annotations

import logging
import time
import uuid
from datetime import datetime, timezone
from typing import Callable

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from lessonhub.exceptions import LessonHubError

logger = logging.getLogger(__name__)

SERVER_ERROR_MESSAGE = "Server error"


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Assign a request ID and log every request before and after dispatch."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get("x-request-id", str(uuid.uuid4()))
        request.state.request_id = request_id

        path = request.url.path
        req_logger = logging.getLogger("lessonhub.server.access")
        req_logger.info(
            "[%s] %s %s",
            datetime.now(timezone.utc).isoformat(),
            request.method,
            path,
            extra={"request_id": request_id, "method": request.method, "path": path},
        )

        start = time.monotonic()
        response = await call_next(request)
        duration = time.monotonic() - start

        response.headers["X-Request-Id"] = request_id

        req_logger.info(
            "request",
            extra={
                "request_id": request_id,
                "method": request.method,
                "path": path,
                "status": response.status_code,
                "latency_ms": round(duration * 1000, 2),
            },
        )
        return response


# ── Error Handlers ─────────────────────────────────────────────────


def _message(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message})


def install_error_handlers(app: FastAPI) -> None:
    """Install exception handlers so every error body is ``{"message": ...}``."""

    @app.exception_handler(LessonHubError)
    async def lessonhub_error_handler(request: Request, exc: LessonHubError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        return _message(exc.status_code, exc.message)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        message = str(exc.detail) if exc.detail else f"HTTP {exc.status_code}"
        return _message(exc.status_code, message)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        for error in exc.errors():
            if error.get("type") == "json_invalid":
                return _message(400, "Request body contains invalid JSON.")

        messages = []
        for error in exc.errors():
            loc = " -> ".join(str(l) for l in error["loc"])
            messages.append(f"{loc}: {error['msg']}")
        return _message(400, "; ".join(messages))

    @app.exception_handler(PyMongoError)
    async def database_exception_handler(request: Request, exc: PyMongoError) -> JSONResponse:
        logger.exception("Database error on %s %s", request.method, request.url.path)
        return _message(500, SERVER_ERROR_MESSAGE)

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled exception: %s", exc)
        return _message(500, SERVER_ERROR_MESSAGE)


def install_middleware(app: FastAPI) -> None:
    """Install all middleware on the app."""
    app.add_middleware(RequestContextMiddleware)
    install_error_handlers(app)

"""FastAPI application for the lessonhub storefront backend."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from lessonhub import __version__
from lessonhub.exceptions import StorageConnectionError
from lessonhub.server.config import Settings, settings
from lessonhub.server.db import close_storage, init_storage
from lessonhub.server.logging_config import setup_logging
from lessonhub.server.middleware import install_middleware
from lessonhub.server.routes.assets import router as assets_router
from lessonhub.server.routes.health import router as health_router
from lessonhub.server.routes.lessons import router as lessons_router
from lessonhub.server.routes.orders import router as orders_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Open the storage before serving and close it on shutdown.

    A failed connection aborts startup, so the server never listens
    without a database behind it.
    """
    config: Settings = app.state.settings
    try:
        storage = await init_storage(config)
    except StorageConnectionError as exc:
        logger.error("Database connection error: %s", exc)
        raise

    app.state.storage = storage
    logger.info("Server running on port %s", config.port)
    try:
        yield
    finally:
        app.state.storage = None
        await close_storage(storage)


def create_app(config: Optional[Settings] = None) -> FastAPI:
    """Build the API application for the given settings."""
    config = config or settings
    setup_logging(config)

    app = FastAPI(
        title="lessonhub",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = config
    app.state.storage = None

    app.include_router(health_router)
    app.include_router(lessons_router)
    app.include_router(orders_router)
    app.include_router(assets_router)

    install_middleware(app)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    return app


app = create_app()

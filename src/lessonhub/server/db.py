"""MongoDB client lifecycle and the shared storage context."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from fastapi import Request
from pymongo import AsyncMongoClient
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.errors import PyMongoError

from lessonhub.exceptions import StorageConnectionError
from lessonhub.server.config import Settings

logger = logging.getLogger(__name__)

LESSONS_COLLECTION = "lessons"
ORDERS_COLLECTION = "orders"


@dataclass
class Storage:
    """Open database client plus handles to the collections the API uses.

    Built once at startup and shared by reference between requests.
    """

    client: AsyncMongoClient
    lessons: AsyncCollection
    orders: AsyncCollection


async def init_storage(config: Settings) -> Storage:
    """Connect to MongoDB and return the storage context.

    The collections are only handed out after the server answers a ping.
    Raises StorageConnectionError when the database is not configured or
    not reachable.
    """
    if not config.mongo_uri or not config.db_name:
        raise StorageConnectionError("MONGO_URI and DB_NAME must be set")

    client: AsyncMongoClient = AsyncMongoClient(
        config.mongo_uri,
        serverSelectionTimeoutMS=config.mongo_timeout_ms,
    )
    try:
        await client.admin.command("ping")
    except PyMongoError as exc:
        await client.close()
        raise StorageConnectionError(f"Could not connect to MongoDB: {exc}") from exc

    db = client[config.db_name]
    logger.info("Connected to MongoDB database: %s", config.db_name)
    return Storage(
        client=client,
        lessons=db[LESSONS_COLLECTION],
        orders=db[ORDERS_COLLECTION],
    )


async def close_storage(storage: Optional[Storage]) -> None:
    """Close the database client."""
    if storage is None:
        return
    await storage.client.close()
    logger.info("MongoDB connection closed")


async def ping(storage: Storage) -> bool:
    """Return True when the database answers a ping."""
    try:
        await storage.client.admin.command("ping")
    except PyMongoError:
        logger.exception("Database ping failed")
        return False
    return True


def get_storage(request: Request) -> Storage:
    """FastAPI dependency returning the storage opened by the app lifespan."""
    storage = getattr(request.app.state, "storage", None)
    if storage is None:
        raise RuntimeError("Storage not initialized. Start the app through its lifespan.")
    return storage

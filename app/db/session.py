"""MongoDB client lifecycle helpers."""

from __future__ import annotations

import logging

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection
from pymongo.errors import PyMongoError

from app.core.config import settings

logger = logging.getLogger(__name__)


def create_client(url: str | None = None, *, timeout_ms: int | None = None) -> AsyncIOMotorClient:
    """Create a Motor client from settings; no I/O happens until first use."""

    options = {}
    timeout_ms = timeout_ms if timeout_ms is not None else settings.database_timeout_ms
    if timeout_ms is not None:
        options["serverSelectionTimeoutMS"] = timeout_ms
    return AsyncIOMotorClient(url or settings.database_url, **options)


async def connect(client: AsyncIOMotorClient) -> bool:
    """Ping the server and log the outcome without raising."""

    try:
        await client.admin.command("ping")
    except PyMongoError as exc:
        logger.error("Database connection failed: %s", exc)
        return False
    logger.info("Database connected...")
    return True


def get_collection(
    client: AsyncIOMotorClient,
    *,
    database_name: str | None = None,
    collection_name: str | None = None,
) -> AsyncIOMotorCollection:
    """Return the subscribers collection for the configured database."""

    database = client[database_name or settings.database_name]
    return database[collection_name or settings.collection_name]


def disconnect(client: AsyncIOMotorClient) -> None:
    client.close()
    logger.info("Database connection closed")

# meetvoice_api/db/mongo.py
from __future__ import annotations

import logging
from typing import Optional

from pymongo import AsyncMongoClient
from pymongo.asynchronous.collection import AsyncCollection

from meetvoice_api.config import MONGODB_COLLECTION, MONGODB_DATABASE, MONGODB_URI

logger = logging.getLogger("meetvoice_api.db")

_client: Optional[AsyncMongoClient] = None


async def connect_db() -> None:
    global _client
    if _client is None:
        # The driver connects lazily; a bad URI fails here, an unreachable server on first query
        _client = AsyncMongoClient(MONGODB_URI)
        logger.info(
            "MongoDB client created",
            extra={"event": "mongo_client_created", "database": MONGODB_DATABASE, "collection": MONGODB_COLLECTION},
        )


async def close_db() -> None:
    global _client
    if _client is not None:
        await _client.close()
        _client = None
        logger.info("MongoDB client closed", extra={"event": "mongo_client_closed"})


def collection() -> AsyncCollection:
    if _client is None:
        raise RuntimeError("MongoDB client is not initialized. Call connect_db() first.")
    return _client[MONGODB_DATABASE][MONGODB_COLLECTION]


async def get_collection() -> AsyncCollection:
    """FastAPI dependency returning the shared articles collection."""
    return collection()

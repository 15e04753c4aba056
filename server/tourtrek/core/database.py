"""MongoDB client lifecycle and database access."""

import logging
from typing import Any

from bson import ObjectId
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo.errors import PyMongoError
from pymongo.server_api import ServerApi

from .config import settings

logger = logging.getLogger(__name__)

USERS_COLLECTION = "users"
PACKAGES_COLLECTION = "tourPackages"
BOOKINGS_COLLECTION = "bookings"


def create_client(uri: str | None = None) -> AsyncIOMotorClient:
    """Create a Motor client pinned to the stable server API v1."""
    return AsyncIOMotorClient(
        uri or settings.mongodb_uri,
        server_api=ServerApi("1", strict=True, deprecation_errors=True),
    )


async def ensure_indexes(db: AsyncIOMotorDatabase) -> None:
    """Create the indexes the collections rely on."""
    await db[USERS_COLLECTION].create_index("email", unique=True)


async def init_db(app: FastAPI) -> None:
    """
    Open the MongoDB client and attach it to the application state.

    The client is owned by the application lifespan; handlers receive the
    database through the ``get_db`` dependency.
    """
    client = create_client()
    try:
        await client.admin.command("ping")
        await ensure_indexes(client[settings.database_name])
        logger.info("Connected to MongoDB", extra={"database": settings.database_name})
    except PyMongoError as e:
        # Motor connects lazily, the service still starts and requests fail with 500
        logger.warning("MongoDB startup checks failed", extra={"error": str(e)})

    app.state.mongo_client = client
    app.state.db = client[settings.database_name]


async def close_db(app: FastAPI) -> None:
    """Close the MongoDB client owned by the application."""
    client = getattr(app.state, "mongo_client", None)
    if client is not None:
        client.close()
        app.state.mongo_client = None
        app.state.db = None


def get_db(request: Request) -> AsyncIOMotorDatabase:
    """
    Database dependency.

    Returns:
        AsyncIOMotorDatabase: The database opened by the application lifespan
    """
    return request.app.state.db


def parse_object_id(value: str) -> ObjectId:
    """Convert a path identifier to an ObjectId, raising ``bson.errors.InvalidId`` if malformed."""
    return ObjectId(value)


def encode_document(document: Any) -> Any:
    """Convert documents (or lists of them) into JSON-safe structures."""
    return jsonable_encoder(document, custom_encoder={ObjectId: str})

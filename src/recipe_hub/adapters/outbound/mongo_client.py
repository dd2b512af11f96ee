"""
MongoDB Connection
==================

Owned connection handle for the document store.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

from pymongo import AsyncMongoClient
from pymongo.errors import ConnectionFailure, PyMongoError

from recipe_hub.domain.errors import StoreError
from recipe_hub.ports.connection import StoreConnection

if TYPE_CHECKING:
    from pymongo.asynchronous.collection import AsyncCollection
    from pymongo.asynchronous.database import AsyncDatabase

    from recipe_hub.infrastructure.config import MongoSettings

logger = logging.getLogger(__name__)

USERS_COLLECTION = "users"
RECIPES_COLLECTION = "recipes"


class MongoConnectionError(Exception):
    """Exception raised when the MongoDB connection cannot be established."""

    pass


@contextmanager
def translate_errors(action: str) -> Iterator[None]:
    """Re-raise driver failures as ``StoreError`` carrying the driver's message."""
    try:
        yield
    except PyMongoError as e:
        logger.error(f"MongoDB {action} failed: {e}")
        raise StoreError(str(e)) from e


class MongoConnection(StoreConnection):
    """
    Single MongoDB client shared by the document-store adapters.

    The client is created in ``connect`` and closed in ``disconnect``;
    adapters receive this handle at construction and never open their own.
    """

    name = "mongodb"

    def __init__(self, settings: MongoSettings) -> None:
        """
        Initialize the handle with configuration.

        Args:
            settings: MongoDB connection settings.
        """
        self._settings = settings
        self._client: AsyncMongoClient[dict[str, Any]] | None = None
        self._database: AsyncDatabase[dict[str, Any]] | None = None

    async def connect(self) -> None:
        """Create the client, ping the server and ensure indexes."""
        self._client = AsyncMongoClient(
            self._settings.connection_uri,
            serverSelectionTimeoutMS=self._settings.server_selection_timeout_ms,
        )
        self._database = self._client[self._settings.name]
        try:
            await self._client.admin.command("ping")
            await self._database[USERS_COLLECTION].create_index("email", unique=True)
        except ConnectionFailure as e:
            logger.error(f"MongoDB unavailable: {e}")
            await self.disconnect()
            raise MongoConnectionError(f"Service unavailable: {e}") from e
        except PyMongoError as e:
            logger.error(f"MongoDB setup failed: {e}")
            await self.disconnect()
            raise MongoConnectionError(f"Connection failed: {e}") from e
        logger.info(f"Connected to MongoDB database '{self._settings.name}'")

    async def disconnect(self) -> None:
        """Close the MongoDB client."""
        if self._client is not None:
            await self._client.close()
            self._client = None
            self._database = None
            logger.info("Disconnected from MongoDB")

    async def health_check(self) -> bool:
        """Check if MongoDB answers a ping."""
        if self._client is None:
            return False
        try:
            await self._client.admin.command("ping")
            return True
        except PyMongoError as e:
            logger.warning(f"MongoDB health check failed: {e}")
            return False

    def collection(self, name: str) -> AsyncCollection[dict[str, Any]]:
        """Return a collection of the configured database."""
        if self._database is None:
            raise StoreError("Not connected to MongoDB")
        return self._database[name]

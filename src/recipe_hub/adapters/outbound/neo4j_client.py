"""
Neo4j Connection
================

Owned driver handle for the graph store.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from neo4j import AsyncGraphDatabase
from neo4j.exceptions import AuthError, DriverError, Neo4jError, ServiceUnavailable

from recipe_hub.domain.errors import StoreError
from recipe_hub.ports.connection import StoreConnection

if TYPE_CHECKING:
    from neo4j import AsyncDriver

    from recipe_hub.infrastructure.config import Neo4jSettings

logger = logging.getLogger(__name__)

CONSTRAINTS = (
    "CREATE CONSTRAINT user_email_unique IF NOT EXISTS "
    "FOR (user:User) REQUIRE user.email IS UNIQUE",
)


class Neo4jConnectionError(Exception):
    """Exception raised when the Neo4j connection cannot be established."""

    pass


class Neo4jConnection(StoreConnection):
    """
    Single Neo4j driver shared by the graph-store adapters.

    Each ``run`` opens a short-lived session on the configured database
    and returns the records as plain dictionaries.
    """

    name = "neo4j"

    def __init__(self, settings: Neo4jSettings) -> None:
        """
        Initialize the handle with configuration.

        Args:
            settings: Neo4j connection settings.
        """
        self._settings = settings
        self._driver: AsyncDriver | None = None

    async def connect(self) -> None:
        """Create the driver, verify connectivity and ensure constraints."""
        try:
            self._driver = AsyncGraphDatabase.driver(
                self._settings.uri,
                auth=(
                    self._settings.username,
                    self._settings.password.get_secret_value(),
                ),
                max_connection_pool_size=self._settings.max_connection_pool_size,
            )
            await self._driver.verify_connectivity()
            for statement in CONSTRAINTS:
                await self.run(statement)
        except AuthError as e:
            logger.error(f"Neo4j authentication failed: {e}")
            await self.disconnect()
            raise Neo4jConnectionError(f"Authentication failed: {e}") from e
        except (ServiceUnavailable, StoreError) as e:
            logger.error(f"Neo4j service unavailable: {e}")
            await self.disconnect()
            raise Neo4jConnectionError(f"Service unavailable: {e}") from e
        logger.info(f"Connected to Neo4j at {self._settings.uri}")

    async def disconnect(self) -> None:
        """Close the Neo4j driver."""
        if self._driver is not None:
            await self._driver.close()
            self._driver = None
            logger.info("Disconnected from Neo4j")

    async def health_check(self) -> bool:
        """Check if Neo4j is reachable."""
        if self._driver is None:
            return False
        try:
            await self._driver.verify_connectivity()
            return True
        except Exception as e:
            logger.warning(f"Neo4j health check failed: {e}")
            return False

    async def run(
        self,
        query: str,
        parameters: dict[str, Any] | None = None,
    ) -> list[dict[str, Any]]:
        """
        Execute a Cypher statement in an auto-commit transaction.

        Returns:
            Every record of the result as a dictionary.

        Raises:
            StoreError: If the driver or the server rejects the statement.
        """
        if self._driver is None:
            raise StoreError("Not connected to Neo4j")

        try:
            async with self._driver.session(database=self._settings.database) as session:
                result = await session.run(query, parameters or {})
                return await result.data()
        except Neo4jError as e:
            logger.error(f"Neo4j query failed: {e}")
            raise StoreError(getattr(e, "message", None) or str(e)) from e
        except DriverError as e:
            logger.error(f"Neo4j driver error: {e}")
            raise StoreError(str(e)) from e
        except (ValueError, TypeError, OverflowError) as e:
            # Raised while packing parameters, e.g. integers beyond 64 bits
            logger.error(f"Neo4j rejected query parameters: {e}")
            raise StoreError("Invalid query parameters", detail=str(e)) from e

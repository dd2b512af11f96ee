"""
Dependency Injection Container
==============================

Provides FastAPI dependency functions for injecting services.
Wires the store adapters to the ports on startup.
"""

from __future__ import annotations

import asyncio
import logging
import os
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any

from recipe_hub.adapters.outbound.mongo_client import MongoConnection
from recipe_hub.adapters.outbound.mongo_recipes import MongoRecipeStore
from recipe_hub.adapters.outbound.mongo_users import MongoUserStore
from recipe_hub.adapters.outbound.neo4j_client import Neo4jConnection
from recipe_hub.adapters.outbound.neo4j_recipes import Neo4jRecipeStore
from recipe_hub.adapters.outbound.neo4j_users import Neo4jUserStore
from recipe_hub.application.dispatch import StoreBackends
from recipe_hub.application.recipes import RecipeService
from recipe_hub.application.users import UserService
from recipe_hub.domain.entities import StoreKind
from recipe_hub.infrastructure.config import get_settings
from recipe_hub.infrastructure.logging import configure_logging

if TYPE_CHECKING:
    from fastapi import FastAPI

    from recipe_hub.ports.connection import StoreConnection

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Singleton holders (initialized on app startup)
# -----------------------------------------------------------------------------

_logging_configured = False
_connections: list[StoreConnection] = []
_user_service: UserService | None = None
_recipe_service: RecipeService | None = None


# -----------------------------------------------------------------------------
# Lifecycle management
# -----------------------------------------------------------------------------


@asynccontextmanager
async def lifespan_manager(app: FastAPI) -> AsyncIterator[dict[str, Any]]:
    """
    Manage application lifecycle: open both stores and close them on shutdown.

    Usage in FastAPI:
        app = FastAPI(lifespan=lifespan_manager)
    """
    _configure_logging()

    await _initialize_adapters()
    try:
        yield {}
    finally:
        await _cleanup_adapters()


def _configure_logging() -> None:
    """Configure logging once per worker process."""
    global _logging_configured

    if _logging_configured:
        return

    configure_logging(get_settings().log_level)
    _logging_configured = True
    logger.info(f"Logging configured for worker process {os.getpid()}")


async def _initialize_adapters() -> None:
    """
    Connect both stores and build the services on top of them.

    A connection failure is logged and re-raised, which aborts startup.
    """
    global _connections, _user_service, _recipe_service

    settings = get_settings()
    logger.info(f"Initializing DI container - Environment: {settings.environment}")

    mongo = MongoConnection(settings.mongo)
    neo4j = Neo4jConnection(settings.neo4j)

    for connection in (mongo, neo4j):
        try:
            await connection.connect()
        except Exception as e:
            logger.error(f"Failed to connect {connection.name}: {e}")
            await _cleanup_adapters()
            raise
        _connections.append(connection)

    backends = StoreBackends(
        users={
            StoreKind.MONGODB: MongoUserStore(mongo),
            StoreKind.NEO4J: Neo4jUserStore(neo4j),
        },
        recipes={
            StoreKind.MONGODB: MongoRecipeStore(mongo),
            StoreKind.NEO4J: Neo4jRecipeStore(neo4j),
        },
    )
    _user_service = UserService(backends)
    _recipe_service = RecipeService(backends)
    logger.info("Services initialized - DI container ready")


async def _cleanup_adapters() -> None:
    """
    Close every open store connection.

    Uses asyncio.shield() to protect cleanup operations from task cancellation.
    """
    global _connections, _user_service, _recipe_service

    logger.info("Starting adapter cleanup...")

    for connection in reversed(_connections):
        try:
            await asyncio.shield(asyncio.wait_for(connection.disconnect(), timeout=10.0))
            logger.debug(f"Disconnected {connection.name}")
        except TimeoutError:
            logger.warning(f"{connection.name} disconnect timed out")
        except asyncio.CancelledError:
            logger.warning(f"{connection.name} disconnect cancelled (graceful shutdown)")
        except Exception as e:
            logger.warning(f"{connection.name} disconnect failed: {e}")

    _connections = []
    _user_service = None
    _recipe_service = None

    logger.info("Adapter cleanup complete")


# -----------------------------------------------------------------------------
# FastAPI Dependency providers
# -----------------------------------------------------------------------------


async def get_user_service() -> UserService:
    """Dependency: Get the user service instance."""
    if _user_service is None:
        raise RuntimeError("UserService not initialized. Check store configuration.")
    return _user_service


async def get_recipe_service() -> RecipeService:
    """Dependency: Get the recipe service instance."""
    if _recipe_service is None:
        raise RuntimeError("RecipeService not initialized. Check store configuration.")
    return _recipe_service


async def get_store_connections() -> list[StoreConnection]:
    """Dependency: Get the open store connections, for readiness probes."""
    return list(_connections)

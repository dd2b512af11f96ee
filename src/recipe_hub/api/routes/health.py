"""
Health Check Endpoints
======================

Liveness and readiness probes for container orchestration.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Annotated, Literal

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from recipe_hub.infrastructure.config import get_settings
from recipe_hub.infrastructure.dependencies import get_store_connections
from recipe_hub.ports.connection import StoreConnection

router = APIRouter()

# Connections the API cannot serve requests without.
REQUIRED_STORES = ("mongodb", "neo4j")


class HealthStatus(BaseModel):
    """Health check response model."""

    status: Literal["healthy", "degraded", "unhealthy"]
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))
    version: str
    environment: str


class ReadinessStatus(BaseModel):
    """Readiness check response with per-store details."""

    ready: bool
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))
    services: dict[str, dict[str, bool | str]] = Field(default_factory=dict)


@router.get(
    "/live",
    response_model=HealthStatus,
    status_code=status.HTTP_200_OK,
    summary="Liveness probe",
    description="Check if the API is alive and responding.",
)
async def liveness() -> HealthStatus:
    """
    Liveness probe for container orchestration.

    Always returns healthy if the service is running.
    """
    settings = get_settings()
    return HealthStatus(
        status="healthy",
        version=settings.api.version,
        environment=settings.environment,
    )


@router.get(
    "/ready",
    response_model=ReadinessStatus,
    status_code=status.HTTP_200_OK,
    summary="Readiness probe",
    description="Check if both stores are connected and answering.",
)
async def readiness(
    connections: Annotated[list[StoreConnection], Depends(get_store_connections)],
) -> ReadinessStatus:
    """Returns ready=True only if every required store answers its health check."""
    services: dict[str, dict[str, bool | str]] = {
        name: {"connected": False, "status": "not_initialized"} for name in REQUIRED_STORES
    }

    for connection in connections:
        try:
            is_healthy = await connection.health_check()
        except Exception:
            services[connection.name] = {"connected": False, "status": "error"}
            continue
        services[connection.name] = {
            "connected": bool(is_healthy),
            "status": "healthy" if is_healthy else "unhealthy",
        }

    ready = all(bool(services[name]["connected"]) for name in REQUIRED_STORES)
    return ReadinessStatus(ready=ready, services=services)


@router.get(
    "",
    response_model=HealthStatus,
    status_code=status.HTTP_200_OK,
    summary="Basic health check",
    description="Simple health check endpoint.",
)
async def health() -> HealthStatus:
    """Basic health check - alias for liveness."""
    return await liveness()

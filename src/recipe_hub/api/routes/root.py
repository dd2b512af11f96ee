"""
Versioned Root
==============
"""

from __future__ import annotations

from fastapi import APIRouter
from fastapi.responses import ORJSONResponse

from recipe_hub.api.envelope import respond

router = APIRouter()

ROOT_MESSAGE = "You've reached the v1 API Root Controller!"


@router.get("", summary="API root")
async def root() -> ORJSONResponse:
    """Answer on the version prefix so clients can probe the API."""
    return respond(ROOT_MESSAGE)

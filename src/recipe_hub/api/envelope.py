"""
Response Envelope
=================

Every endpoint answers with ``{success, message, data?, error?}``.
Absent keys are omitted from the body.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import ORJSONResponse
from pydantic import BaseModel

from recipe_hub.domain.errors import RecipeHubError

logger = logging.getLogger(__name__)

INVALID_REQUEST = "Invalid request"


class Envelope(BaseModel):
    """Uniform response body."""

    success: bool
    message: str
    data: dict[str, Any] | None = None
    error: str | None = None


def respond(
    message: str,
    *,
    status_code: int = status.HTTP_200_OK,
    **data: Any,
) -> ORJSONResponse:
    """Build a success envelope carrying ``data`` under the given keys."""
    body = Envelope(success=True, message=message, data=data or None)
    return ORJSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


def fail(message: str, *, error: str | None = None) -> ORJSONResponse:
    """Build a failure envelope. Every failure is reported as 400."""
    body = Envelope(success=False, message=message, error=error)
    return ORJSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=body.model_dump(exclude_none=True),
    )


async def recipe_hub_error_handler(request: Request, exc: RecipeHubError) -> ORJSONResponse:
    logger.info(f"{request.method} {request.url.path} failed: {exc.message}")
    return fail(exc.message, error=exc.detail)


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> ORJSONResponse:
    issues = "; ".join(
        f"{'.'.join(str(part) for part in item['loc'])}: {item['msg']}" for item in exc.errors()
    )
    return fail(INVALID_REQUEST, error=issues)


def install_exception_handlers(app: FastAPI) -> None:
    """Render domain failures and malformed requests as 400 envelopes."""
    app.add_exception_handler(RecipeHubError, recipe_hub_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)

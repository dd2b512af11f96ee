"""
Domain Errors
=============

Failure taxonomy shared by the dispatch layer and the store adapters.
Every class maps to a 400 response envelope at the HTTP boundary.
"""

from __future__ import annotations


class RecipeHubError(Exception):
    """Base class for failures reported through the response envelope."""

    def __init__(self, message: str, *, detail: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail


class ValidationFailure(RecipeHubError):
    """Missing or empty required input, rejected before any store access."""


class NotFoundError(RecipeHubError):
    """Identifier does not resolve in the selected store."""


class AuthenticationError(RecipeHubError):
    """Unknown account or password mismatch. Never says which."""


class StoreError(RecipeHubError):
    """
    The underlying store rejected the operation.

    Adapters raise it with the store's raw message; the dispatch layer
    re-tags it with an operation-level message and keeps the raw text
    as ``detail``.
    """

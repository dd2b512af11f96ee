"""
Domain Layer
============

Entities and errors with no infrastructure dependencies.
"""

from recipe_hub.domain.entities import (
    EntityId,
    Ingredient,
    Recipe,
    StoreKind,
    User,
)
from recipe_hub.domain.errors import (
    AuthenticationError,
    NotFoundError,
    RecipeHubError,
    StoreError,
    ValidationFailure,
)

__all__ = [
    "AuthenticationError",
    "EntityId",
    "Ingredient",
    "NotFoundError",
    "Recipe",
    "RecipeHubError",
    "StoreError",
    "StoreKind",
    "User",
    "ValidationFailure",
]

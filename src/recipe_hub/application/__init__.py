"""
Application Layer
=================

Use-case orchestration. Resolves the caller's store choice and coordinates
the user and recipe ports. No infrastructure details leak here.
"""

from recipe_hub.application.dispatch import StoreBackends, resolve_store_kind
from recipe_hub.application.recipes import RecipeService
from recipe_hub.application.users import AuthenticatedUser, UserService

__all__ = [
    "AuthenticatedUser",
    "RecipeService",
    "StoreBackends",
    "UserService",
    "resolve_store_kind",
]

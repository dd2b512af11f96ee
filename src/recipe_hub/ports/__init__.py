"""Port interfaces (hexagonal boundaries)."""

from recipe_hub.ports.connection import StoreConnection
from recipe_hub.ports.entity_store import RecipeStore, UserStore

__all__ = ["RecipeStore", "StoreConnection", "UserStore"]

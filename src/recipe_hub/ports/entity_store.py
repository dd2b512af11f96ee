"""
EntityStore Ports
=================

Abstract interfaces for user and recipe persistence.
One implementation per backing store; the dispatch layer only sees these.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from recipe_hub.domain.entities import EntityId, Recipe, StoreKind, User


class UserStore(ABC):
    """
    Port for user persistence.

    Contract:
    - Read operations never return the password hash, except
      ``get_by_email`` which is used for login verification.
    - Lookups that do not resolve return ``None``; store rejections
      raise ``StoreError``.
    """

    kind: StoreKind

    @abstractmethod
    async def create(self, user: User) -> User:
        """Persist a new user whose password is already hashed."""
        ...

    @abstractmethod
    async def get_by_id(self, user_id: EntityId) -> User | None:
        """Fetch a user by store-native identifier, without password."""
        ...

    @abstractmethod
    async def get_by_email(self, email: str) -> User | None:
        """Fetch a user by email, including the password hash."""
        ...

    @abstractmethod
    async def list_all(self) -> list[User]:
        """Fetch every user, without passwords."""
        ...

    @abstractmethod
    async def update(self, user_id: EntityId, user: User) -> User | None:
        """
        Overwrite the mutable fields of a user.

        A ``None`` password keeps the stored hash.

        Returns:
            The post-update user, or None if the identifier does not resolve.
        """
        ...

    @abstractmethod
    async def delete(self, user_id: EntityId) -> User | None:
        """Remove a user, returning it as it was before removal."""
        ...


class RecipeStore(ABC):
    """
    Port for recipe persistence.

    Ingredient order is preserved across create and read.
    """

    kind: StoreKind

    @abstractmethod
    async def create(self, recipe: Recipe) -> Recipe:
        """Persist a new recipe and its ingredients."""
        ...

    @abstractmethod
    async def get_by_id(self, recipe_id: EntityId) -> Recipe | None:
        """Fetch a recipe by store-native identifier."""
        ...

    @abstractmethod
    async def list_all(self) -> list[Recipe]:
        """Fetch every recipe."""
        ...

    @abstractmethod
    async def list_by_owner(self, user_id: EntityId) -> list[Recipe]:
        """Fetch every recipe whose ``userId`` matches."""
        ...

    @abstractmethod
    async def update(self, recipe_id: EntityId, recipe: Recipe) -> Recipe | None:
        """Overwrite every field of a recipe, ingredients included."""
        ...

    @abstractmethod
    async def delete(self, recipe_id: EntityId) -> Recipe | None:
        """Remove a recipe, returning it as it was before removal."""
        ...

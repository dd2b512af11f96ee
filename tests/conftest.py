"""
Pytest Fixtures
===============

Shared fixtures for all test modules.
"""

from __future__ import annotations

from typing import Any
from unittest.mock import AsyncMock

import pytest

from recipe_hub.application.dispatch import StoreBackends
from recipe_hub.domain.entities import EntityId, Ingredient, Recipe, StoreKind, User
from recipe_hub.ports.entity_store import RecipeStore, UserStore

# -----------------------------------------------------------------------------
# Wire payload fixtures
# -----------------------------------------------------------------------------


@pytest.fixture
def user_payload() -> dict[str, Any]:
    """A registration payload as sent by a client."""
    return {
        "firstName": "A",
        "lastName": "B",
        "email": "a@b.com",
        "password": "abcdefgh",
    }


@pytest.fixture
def recipe_payload() -> dict[str, Any]:
    """A recipe payload as sent by a client."""
    return {
        "name": "Pancakes",
        "description": "Fluffy breakfast pancakes",
        "type": "breakfast",
        "ingredients": [
            {"name": "Flour", "weight": 200},
            {"name": "Salt", "weight": 5},
        ],
        "cookTime": 10,
        "prepTime": 5,
        "servings": 2,
        "userId": "42",
    }


# -----------------------------------------------------------------------------
# Domain entity fixtures
# -----------------------------------------------------------------------------


@pytest.fixture
def stored_user() -> User:
    """A user as returned by a store read (no password)."""
    return User(id="65f1c0ffee0000000000abcd", first_name="A", last_name="B", email="a@b.com")


@pytest.fixture
def stored_recipe() -> Recipe:
    """A recipe as returned by a store read."""
    return Recipe(
        id=7,
        name="Soup",
        description="Salty soup",
        type="dinner",
        ingredients=[Ingredient(name="Salt", weight=5)],
        cook_time=10,
        prep_time=5,
        servings=2,
        user_id="3",
    )


# -----------------------------------------------------------------------------
# Store doubles
# -----------------------------------------------------------------------------


def _store_double(port: type, kind: StoreKind) -> AsyncMock:
    store = AsyncMock(spec=port)
    store.kind = kind
    return store


@pytest.fixture
def mongo_users() -> AsyncMock:
    return _store_double(UserStore, StoreKind.MONGODB)


@pytest.fixture
def neo4j_users() -> AsyncMock:
    return _store_double(UserStore, StoreKind.NEO4J)


@pytest.fixture
def mongo_recipes() -> AsyncMock:
    return _store_double(RecipeStore, StoreKind.MONGODB)


@pytest.fixture
def neo4j_recipes() -> AsyncMock:
    return _store_double(RecipeStore, StoreKind.NEO4J)


@pytest.fixture
def backends(
    mongo_users: AsyncMock,
    neo4j_users: AsyncMock,
    mongo_recipes: AsyncMock,
    neo4j_recipes: AsyncMock,
) -> StoreBackends:
    """Registry wired to mock stores for both kinds."""
    return StoreBackends(
        users={StoreKind.MONGODB: mongo_users, StoreKind.NEO4J: neo4j_users},
        recipes={StoreKind.MONGODB: mongo_recipes, StoreKind.NEO4J: neo4j_recipes},
    )


# -----------------------------------------------------------------------------
# In-memory stores
# -----------------------------------------------------------------------------


class InMemoryUserStore(UserStore):
    """Dict-backed user port; reads other than by email omit the password."""

    def __init__(self, kind: StoreKind) -> None:
        self.kind = kind
        self._users: dict[str, User] = {}
        self._next = 1

    def _new_id(self) -> EntityId:
        node_id, self._next = self._next, self._next + 1
        return node_id if self.kind is StoreKind.NEO4J else f"{node_id:024x}"

    async def create(self, user: User) -> User:
        created = user.model_copy(update={"id": self._new_id()})
        self._users[str(created.id)] = created
        return created.model_copy(update={"password": None})

    async def get_by_id(self, user_id: EntityId) -> User | None:
        user = self._users.get(str(user_id))
        return user.model_copy(update={"password": None}) if user else None

    async def get_by_email(self, email: str) -> User | None:
        return next((user for user in self._users.values() if user.email == email), None)

    async def list_all(self) -> list[User]:
        return [user.model_copy(update={"password": None}) for user in self._users.values()]

    async def update(self, user_id: EntityId, user: User) -> User | None:
        current = self._users.get(str(user_id))
        if current is None:
            return None
        updated = user.model_copy(
            update={"id": current.id, "password": user.password or current.password}
        )
        self._users[str(user_id)] = updated
        return updated.model_copy(update={"password": None})

    async def delete(self, user_id: EntityId) -> User | None:
        user = self._users.pop(str(user_id), None)
        return user.model_copy(update={"password": None}) if user else None


class InMemoryRecipeStore(RecipeStore):
    """Dict-backed recipe port."""

    def __init__(self, kind: StoreKind) -> None:
        self.kind = kind
        self._recipes: dict[str, Recipe] = {}
        self._next = 1

    async def create(self, recipe: Recipe) -> Recipe:
        node_id, self._next = self._next, self._next + 1
        recipe_id: EntityId = node_id if self.kind is StoreKind.NEO4J else f"{node_id:024x}"
        created = recipe.model_copy(update={"id": recipe_id})
        self._recipes[str(recipe_id)] = created
        return created

    async def get_by_id(self, recipe_id: EntityId) -> Recipe | None:
        return self._recipes.get(str(recipe_id))

    async def list_all(self) -> list[Recipe]:
        return list(self._recipes.values())

    async def list_by_owner(self, user_id: EntityId) -> list[Recipe]:
        return [r for r in self._recipes.values() if r.user_id == str(user_id)]

    async def update(self, recipe_id: EntityId, recipe: Recipe) -> Recipe | None:
        current = self._recipes.get(str(recipe_id))
        if current is None:
            return None
        updated = recipe.model_copy(update={"id": current.id})
        self._recipes[str(recipe_id)] = updated
        return updated

    async def delete(self, recipe_id: EntityId) -> Recipe | None:
        return self._recipes.pop(str(recipe_id), None)


@pytest.fixture
def memory_backends() -> StoreBackends:
    """Registry wired to in-memory stores for both kinds."""
    return StoreBackends(
        users={kind: InMemoryUserStore(kind) for kind in StoreKind},
        recipes={kind: InMemoryRecipeStore(kind) for kind in StoreKind},
    )

"""
MongoDB Recipe Store Adapter
============================

Recipe persistence in the ``recipes`` collection.
Ingredients are embedded as an ordered array.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from pymongo import ReturnDocument

from recipe_hub.adapters.outbound.mongo_client import RECIPES_COLLECTION, translate_errors
from recipe_hub.adapters.outbound.mongo_schemas import (
    RecipeDocument,
    from_document,
    parse_object_id,
    to_document,
)
from recipe_hub.domain.entities import Recipe, StoreKind
from recipe_hub.ports.entity_store import RecipeStore

if TYPE_CHECKING:
    from pymongo.asynchronous.collection import AsyncCollection

    from recipe_hub.adapters.outbound.mongo_client import MongoConnection
    from recipe_hub.domain.entities import EntityId

logger = logging.getLogger(__name__)


class MongoRecipeStore(RecipeStore):
    """Document-store implementation of the recipe port."""

    kind = StoreKind.MONGODB

    def __init__(self, connection: MongoConnection) -> None:
        self._connection = connection

    @property
    def _recipes(self) -> AsyncCollection[dict[str, Any]]:
        return self._connection.collection(RECIPES_COLLECTION)

    def _document(self, recipe: Recipe) -> dict[str, Any]:
        return to_document(RecipeDocument, "Recipes", recipe.model_dump(exclude={"id"}))

    async def create(self, recipe: Recipe) -> Recipe:
        document = self._document(recipe)
        with translate_errors("insert recipe"):
            result = await self._recipes.insert_one(document)
        logger.debug(f"Inserted recipe {result.inserted_id}")
        return Recipe.model_validate(from_document({**document, "_id": result.inserted_id}))

    async def get_by_id(self, recipe_id: EntityId) -> Recipe | None:
        oid = parse_object_id(recipe_id)
        if oid is None:
            return None
        with translate_errors("find recipe"):
            document = await self._recipes.find_one({"_id": oid})
        return _to_recipe(document)

    async def list_all(self) -> list[Recipe]:
        return await self._find({})

    async def list_by_owner(self, user_id: EntityId) -> list[Recipe]:
        return await self._find({"userId": str(user_id)})

    async def _find(self, query: dict[str, Any]) -> list[Recipe]:
        with translate_errors("list recipes"):
            return [
                Recipe.model_validate(from_document(document))
                async for document in self._recipes.find(query)
            ]

    async def update(self, recipe_id: EntityId, recipe: Recipe) -> Recipe | None:
        oid = parse_object_id(recipe_id)
        if oid is None:
            return None
        replacement = self._document(recipe)
        with translate_errors("update recipe"):
            document = await self._recipes.find_one_and_replace(
                {"_id": oid},
                replacement,
                return_document=ReturnDocument.AFTER,
            )
        return _to_recipe(document)

    async def delete(self, recipe_id: EntityId) -> Recipe | None:
        oid = parse_object_id(recipe_id)
        if oid is None:
            return None
        with translate_errors("delete recipe"):
            document = await self._recipes.find_one_and_delete({"_id": oid})
        return _to_recipe(document)


def _to_recipe(document: dict[str, Any] | None) -> Recipe | None:
    if document is None:
        return None
    return Recipe.model_validate(from_document(document))

"""
RecipeService
=============

Recipe use-cases against the store selected by the caller's discriminator.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from recipe_hub.application.dispatch import (
    parse_payload,
    require_fields,
    require_identifier,
    resolve_store_kind,
    store_failure,
)
from recipe_hub.domain.entities import Recipe
from recipe_hub.domain.errors import NotFoundError

if TYPE_CHECKING:
    from recipe_hub.application.dispatch import StoreBackends
    from recipe_hub.domain.entities import EntityId

logger = logging.getLogger(__name__)

NO_ID = "Please provide an id"
NOT_FOUND = "Recipe does not exist"

RECIPE_FIELDS = (
    "name",
    "description",
    "type",
    "ingredients",
    "cookTime",
    "prepTime",
    "servings",
    "userId",
)


class RecipeService:
    """Orchestrates recipe operations over the configured stores."""

    def __init__(self, backends: StoreBackends) -> None:
        self._backends = backends

    def _parse(self, payload: Mapping[str, Any] | None) -> Recipe:
        values = require_fields(payload, RECIPE_FIELDS)
        return parse_payload(
            Recipe, {k: v for k, v in values.items() if k not in ("_id", "id")}
        )

    async def create(self, payload: Mapping[str, Any] | None, data_base_type: str | None) -> Recipe:
        """
        Store a new recipe with its ingredients.

        Raises:
            ValidationFailure: Bad discriminator or missing field.
            StoreError: The store rejected the insert.
        """
        kind = resolve_store_kind(data_base_type)
        recipe = self._parse(payload)
        store = self._backends.recipes_for(kind)
        with store_failure("Recipe was not added"):
            created = await store.create(recipe)
        logger.info(f"Added recipe {created.id} to {kind.value}")
        return created

    async def list_all(self, data_base_type: str | None) -> list[Recipe]:
        """Fetch every recipe of the selected store."""
        store = self._backends.recipes_for(resolve_store_kind(data_base_type))
        with store_failure("Recipes were not retrieved"):
            return await store.list_all()

    async def get(self, recipe_id: EntityId | None, data_base_type: str | None) -> Recipe:
        """Fetch one recipe by identifier."""
        recipe_id = require_identifier(recipe_id, NO_ID)
        store = self._backends.recipes_for(resolve_store_kind(data_base_type))
        with store_failure("Recipe was not retrieved"):
            recipe = await store.get_by_id(recipe_id)
        if recipe is None:
            raise NotFoundError(NOT_FOUND)
        return recipe

    async def list_by_owner(
        self, user_id: EntityId | None, data_base_type: str | None
    ) -> list[Recipe]:
        """Fetch every recipe whose owner is ``user_id``."""
        user_id = require_identifier(user_id, NO_ID)
        store = self._backends.recipes_for(resolve_store_kind(data_base_type))
        with store_failure("Recipes were not retrieved"):
            return await store.list_by_owner(user_id)

    async def update(
        self,
        recipe_id: EntityId | None,
        payload: Mapping[str, Any] | None,
        data_base_type: str | None,
    ) -> Recipe:
        """Overwrite every field of a recipe, ingredients included."""
        recipe_id = require_identifier(recipe_id, NO_ID)
        kind = resolve_store_kind(data_base_type)
        recipe = self._parse(payload)
        store = self._backends.recipes_for(kind)
        with store_failure("Recipe was not updated"):
            updated = await store.update(recipe_id, recipe)
        if updated is None:
            raise NotFoundError(NOT_FOUND)
        return updated

    async def delete(self, recipe_id: EntityId | None, data_base_type: str | None) -> Recipe:
        """Remove a recipe and return it as it was before removal."""
        recipe_id = require_identifier(recipe_id, NO_ID)
        kind = resolve_store_kind(data_base_type)
        store = self._backends.recipes_for(kind)
        with store_failure("Recipe was not deleted"):
            deleted = await store.delete(recipe_id)
        if deleted is None:
            raise NotFoundError(NOT_FOUND)
        logger.info(f"Deleted recipe {deleted.id} from {kind.value}")
        return deleted

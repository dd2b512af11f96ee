"""
Neo4j Recipe Store Adapter
==========================

Recipes are ``(:Recipe)`` nodes with one ``(:Ingredient)`` node per list entry.

Graph model:
    (:User)-[:CREATED]->(:Recipe)-[:CONTAINS]->(:Ingredient {name, weight, position})

``position`` keeps the caller's ingredient order. The ``CREATED`` edge is
only written when the owner id resolves to an existing user node.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from recipe_hub.adapters.outbound.neo4j_users import parse_node_id
from recipe_hub.domain.entities import Recipe, StoreKind
from recipe_hub.ports.entity_store import RecipeStore

if TYPE_CHECKING:
    from recipe_hub.adapters.outbound.neo4j_client import Neo4jConnection
    from recipe_hub.domain.entities import EntityId

logger = logging.getLogger(__name__)

_CREATE_INGREDIENTS = """
    FOREACH (idx IN range(0, size($ingredients) - 1) |
        CREATE (recipe)-[:CONTAINS]->(:Ingredient {
            name: $ingredients[idx].name,
            weight: $ingredients[idx].weight,
            position: idx
        })
    )
"""

_LINK_OWNER = """
    WITH recipe
    OPTIONAL MATCH (owner:User) WHERE id(owner) = $ownerId
    FOREACH (_ IN CASE WHEN owner IS NULL THEN [] ELSE [1] END |
        MERGE (owner)-[:CREATED]->(recipe)
    )
"""

_PROJECT_RECIPE = """
    OPTIONAL MATCH (recipe)-[:CONTAINS]->(ingredient:Ingredient)
    WITH recipe, ingredient
    ORDER BY ingredient.position
    WITH recipe, collect(ingredient {.name, .weight}) AS ingredients
    RETURN id(recipe) AS id, properties(recipe) AS recipe, ingredients
"""

CREATE_RECIPE = (
    "CREATE (recipe:Recipe $props)"
    + _CREATE_INGREDIENTS
    + _LINK_OWNER
    + "RETURN id(recipe) AS id"
)

GET_RECIPE_BY_ID = "MATCH (recipe:Recipe) WHERE id(recipe) = $id" + _PROJECT_RECIPE

LIST_RECIPES = "MATCH (recipe:Recipe)" + _PROJECT_RECIPE + "ORDER BY id"

LIST_RECIPES_BY_OWNER = (
    "MATCH (recipe:Recipe) WHERE recipe.userId = $userId" + _PROJECT_RECIPE + "ORDER BY id"
)

UPDATE_RECIPE = (
    """
    MATCH (recipe:Recipe) WHERE id(recipe) = $id
    OPTIONAL MATCH (recipe)-[:CONTAINS]->(old:Ingredient)
    DETACH DELETE old
    WITH DISTINCT recipe
    OPTIONAL MATCH (previous:User)-[created:CREATED]->(recipe)
    DELETE created
    WITH DISTINCT recipe
    SET recipe = $props
    """
    + _CREATE_INGREDIENTS
    + _LINK_OWNER
    + "RETURN id(recipe) AS id"
)

DELETE_RECIPE = """
    MATCH (recipe:Recipe) WHERE id(recipe) = $id
    OPTIONAL MATCH (recipe)-[:CONTAINS]->(ingredient:Ingredient)
    WITH recipe, ingredient
    ORDER BY ingredient.position
    WITH recipe,
         collect(ingredient) AS nodes,
         collect(ingredient {.name, .weight}) AS ingredients
    WITH recipe, nodes, ingredients, id(recipe) AS id, properties(recipe) AS snapshot
    FOREACH (node IN nodes | DETACH DELETE node)
    DETACH DELETE recipe
    RETURN id, snapshot AS recipe, ingredients
"""


class Neo4jRecipeStore(RecipeStore):
    """Graph-store implementation of the recipe port."""

    kind = StoreKind.NEO4J

    def __init__(self, connection: Neo4jConnection) -> None:
        self._connection = connection

    async def create(self, recipe: Recipe) -> Recipe:
        records = await self._connection.run(CREATE_RECIPE, _write_parameters(recipe))
        recipe_id = records[0]["id"]
        logger.debug(f"Created recipe node {recipe_id} with {len(recipe.ingredients)} ingredients")
        return recipe.model_copy(update={"id": recipe_id})

    async def get_by_id(self, recipe_id: EntityId) -> Recipe | None:
        node_id = parse_node_id(recipe_id)
        if node_id is None:
            return None
        records = await self._connection.run(GET_RECIPE_BY_ID, {"id": node_id})
        return _to_recipe(records[0]) if records else None

    async def list_all(self) -> list[Recipe]:
        records = await self._connection.run(LIST_RECIPES)
        return [_to_recipe(record) for record in records]

    async def list_by_owner(self, user_id: EntityId) -> list[Recipe]:
        records = await self._connection.run(LIST_RECIPES_BY_OWNER, {"userId": str(user_id)})
        return [_to_recipe(record) for record in records]

    async def update(self, recipe_id: EntityId, recipe: Recipe) -> Recipe | None:
        node_id = parse_node_id(recipe_id)
        if node_id is None:
            return None
        records = await self._connection.run(
            UPDATE_RECIPE, {"id": node_id, **_write_parameters(recipe)}
        )
        if not records:
            return None
        return recipe.model_copy(update={"id": records[0]["id"]})

    async def delete(self, recipe_id: EntityId) -> Recipe | None:
        node_id = parse_node_id(recipe_id)
        if node_id is None:
            return None
        records = await self._connection.run(DELETE_RECIPE, {"id": node_id})
        return _to_recipe(records[0]) if records else None


def _write_parameters(recipe: Recipe) -> dict[str, Any]:
    """Split a recipe into node properties, ingredient maps and the owner node id."""
    return {
        "props": recipe.to_wire(exclude={"id", "ingredients"}),
        "ingredients": [ingredient.to_wire() for ingredient in recipe.ingredients],
        "ownerId": parse_node_id(recipe.user_id),
    }


def _to_recipe(record: dict[str, Any]) -> Recipe:
    return Recipe.model_validate(
        {**record["recipe"], "ingredients": record["ingredients"], "_id": record["id"]}
    )

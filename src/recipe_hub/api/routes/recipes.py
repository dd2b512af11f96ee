"""
Recipe Endpoints
================

CRUD for recipes. Reads and writes go to the store named by ``dataBaseType``.
"""

from __future__ import annotations

from typing import Annotated, Any

from fastapi import APIRouter, Depends, status
from fastapi.responses import ORJSONResponse
from pydantic import BaseModel, ConfigDict, Field

from recipe_hub.api.envelope import respond
from recipe_hub.application.recipes import RecipeService
from recipe_hub.infrastructure.dependencies import get_recipe_service

router = APIRouter()

Recipes = Annotated[RecipeService, Depends(get_recipe_service)]


class RecipeRequest(BaseModel):
    """Request body carrying a recipe payload."""

    model_config = ConfigDict(populate_by_name=True)

    recipe: dict[str, Any] | None = Field(
        default=None,
        description=(
            "Recipe fields in camelCase: name, description, type, ingredients, "
            "cookTime, prepTime, servings, image, userId."
        ),
    )
    data_base_type: str | None = Field(default=None, alias="dataBaseType")


@router.post("", status_code=status.HTTP_201_CREATED, summary="Add a recipe")
async def create_recipe(body: RecipeRequest, recipes: Recipes) -> ORJSONResponse:
    created = await recipes.create(body.recipe, body.data_base_type)
    return respond(
        "Recipe added successfully",
        status_code=status.HTTP_201_CREATED,
        newRecipe=created.to_wire(),
    )


# Registered before /{id}/{dataBaseType}, which would otherwise capture it.
@router.get("/dataBaseType/{dataBaseType}", summary="List recipes")
async def list_recipes(dataBaseType: str, recipes: Recipes) -> ORJSONResponse:  # noqa: N803
    found = await recipes.list_all(dataBaseType)
    return respond("Recipes retrieved successfully", recipes=[r.to_wire() for r in found])


@router.get("/user/{id}/{dataBaseType}", summary="List a user's recipes")
async def list_recipes_by_owner(
    id: str,  # noqa: A002
    dataBaseType: str,  # noqa: N803
    recipes: Recipes,
) -> ORJSONResponse:
    found = await recipes.list_by_owner(id, dataBaseType)
    return respond("Recipes retrieved successfully", recipes=[r.to_wire() for r in found])


@router.get("/{id}/{dataBaseType}", summary="Get a recipe")
async def get_recipe(id: str, dataBaseType: str, recipes: Recipes) -> ORJSONResponse:  # noqa: A002, N803
    recipe = await recipes.get(id, dataBaseType)
    return respond("Recipe retrieved successfully", recipe=recipe.to_wire())


@router.put("/{id}/{dataBaseType}", summary="Update a recipe")
async def update_recipe(
    id: str,  # noqa: A002
    dataBaseType: str,  # noqa: N803
    body: RecipeRequest,
    recipes: Recipes,
) -> ORJSONResponse:
    updated = await recipes.update(id, body.recipe, dataBaseType)
    return respond("Recipe updated successfully", updatedRecipe=updated.to_wire())


@router.delete("/{id}/{dataBaseType}", summary="Delete a recipe")
async def delete_recipe(id: str, dataBaseType: str, recipes: Recipes) -> ORJSONResponse:  # noqa: A002, N803
    deleted = await recipes.delete(id, dataBaseType)
    return respond("Recipe deleted successfully", deletedRecipe=deleted.to_wire())

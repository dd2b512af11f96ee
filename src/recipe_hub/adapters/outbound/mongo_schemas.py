"""
MongoDB Document Schemas
========================

Field-level constraints enforced before a document is written.
Documents are stored with camelCase keys.
"""

from __future__ import annotations

from typing import Any

from bson import ObjectId
from bson.errors import InvalidId
from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from recipe_hub.domain.entities import EntityId, Number
from recipe_hub.domain.errors import StoreError

MAX_QUANTITY = 10_000


class _Document(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class UserUpdateDocument(_Document):
    """Mutable user fields; the password may be omitted on update."""

    first_name: str = Field(min_length=1, max_length=50)
    last_name: str = Field(min_length=1, max_length=50)
    email: str = Field(min_length=5, max_length=255)
    password: str | None = Field(default=None, min_length=8, max_length=1024)


class UserDocument(UserUpdateDocument):
    password: str = Field(min_length=8, max_length=1024)


class IngredientDocument(_Document):
    name: str = Field(min_length=2, max_length=50)
    weight: Number = Field(ge=0, le=MAX_QUANTITY)


class RecipeDocument(_Document):
    name: str = Field(min_length=2, max_length=50)
    description: str = Field(min_length=2, max_length=255)
    type: str = Field(min_length=2, max_length=50)
    ingredients: list[IngredientDocument] = Field(default_factory=list)
    cook_time: Number = Field(ge=0, le=MAX_QUANTITY)
    prep_time: Number = Field(ge=0, le=MAX_QUANTITY)
    servings: Number = Field(ge=0, le=MAX_QUANTITY)
    image: str | None = None
    user_id: str = Field(min_length=1)


def validation_message(collection: str, error: ValidationError) -> str:
    """Render schema violations as ``<collection> validation failed: field: reason, ...``."""
    issues = []
    for item in error.errors():
        path = ".".join(str(part) for part in item["loc"])
        issues.append(f"{path}: {item['msg']}")
    return f"{collection} validation failed: " + ", ".join(issues)


def to_document(
    schema: type[_Document],
    collection: str,
    values: dict[str, Any],
) -> dict[str, Any]:
    """
    Validate values against a schema and return the storable document.

    Raises:
        StoreError: If any field constraint is violated.
    """
    try:
        document = schema.model_validate(values)
    except ValidationError as e:
        raise StoreError(validation_message(collection, e)) from e
    return document.model_dump(by_alias=True, exclude_none=True)


def parse_object_id(raw: EntityId) -> ObjectId | None:
    """Parse a caller-supplied identifier; anything malformed resolves to None."""
    if isinstance(raw, bool) or not isinstance(raw, str):
        return None
    try:
        return ObjectId(raw.strip())
    except (InvalidId, TypeError):
        return None


def from_document(document: dict[str, Any]) -> dict[str, Any]:
    """Turn a stored document into entity input with a string ``_id``."""
    return {**document, "_id": str(document["_id"])}

"""
Domain Entities
===============

Core business objects shared by every store adapter.
Field names are snake_case in Python and camelCase on the wire.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

# Store-native identifier: ObjectId hex string (MongoDB) or internal node id (Neo4j).
EntityId = str | int

# JSON numbers keep their int/float shape on round-trip.
Number = int | float


def normalize_email(email: str) -> str:
    """Canonical form under which emails are stored and looked up."""
    return email.strip()


class StoreKind(StrEnum):
    """Backing store selected by the caller's ``dataBaseType`` discriminator."""

    MONGODB = "mongoDB"
    NEO4J = "neo4j"


class _WireModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    def to_wire(self, **kwargs: Any) -> dict[str, Any]:
        """Dump with camelCase keys, dropping unset optional fields."""
        return self.model_dump(by_alias=True, exclude_none=True, **kwargs)


class Ingredient(_WireModel):
    """One entry of a recipe's ordered ingredient list."""

    name: str
    weight: Number


class User(_WireModel):
    """
    A registered account.

    ``password`` holds the bcrypt hash and is only populated on the
    internal lookup used for login verification.
    """

    id: EntityId | None = Field(default=None, alias="_id")
    first_name: str
    last_name: str
    email: str
    password: str | None = None

    @field_validator("email", mode="before")
    @classmethod
    def _normalize_email(cls, value: Any) -> Any:
        return normalize_email(value) if isinstance(value, str) else value

    def public(self) -> dict[str, Any]:
        """Wire representation with the password hash removed."""
        return self.to_wire(exclude={"password"})


class Recipe(_WireModel):
    """A recipe owned by a user of the same store."""

    id: EntityId | None = Field(default=None, alias="_id")
    name: str
    description: str
    type: str
    ingredients: list[Ingredient] = Field(default_factory=list)
    cook_time: Number
    prep_time: Number
    servings: Number
    image: str | None = None
    user_id: str

    @field_validator("user_id", mode="before")
    @classmethod
    def _stringify_owner(cls, value: Any) -> Any:
        # Neo4j owners are numeric node ids; ownership is stored as a plain string.
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

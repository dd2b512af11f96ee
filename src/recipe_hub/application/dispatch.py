"""
Store Dispatch
==============

Resolves the caller's ``dataBaseType`` discriminator into a ``StoreKind``
and hands out the matching store implementations.

Also holds the presence checks shared by the user and recipe use-cases:
every check here runs before any store is touched.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, TypeVar

from pydantic import BaseModel, ValidationError

from recipe_hub.domain.entities import StoreKind
from recipe_hub.domain.errors import StoreError, ValidationFailure

if TYPE_CHECKING:
    from recipe_hub.domain.entities import EntityId
    from recipe_hub.ports.entity_store import RecipeStore, UserStore

ModelT = TypeVar("ModelT", bound=BaseModel)

MISSING_DATABASE_TYPE = "Please specify the database type"
UNSUPPORTED_DATABASE_TYPE = "Unsupported database type"
MISSING_FIELDS = "Please fill all fields"


def resolve_store_kind(raw: str | None) -> StoreKind:
    """
    Resolve a discriminator value into a store kind.

    Raises:
        ValidationFailure: If the value is missing or not a known store.
    """
    if raw is None or not str(raw).strip():
        raise ValidationFailure(MISSING_DATABASE_TYPE)
    try:
        return StoreKind(str(raw).strip())
    except ValueError:
        raise ValidationFailure(UNSUPPORTED_DATABASE_TYPE, detail=str(raw)) from None


def require_identifier(raw: EntityId | None, message: str) -> EntityId:
    """Reject a missing or blank identifier with ``message``."""
    if raw is None or isinstance(raw, bool):
        raise ValidationFailure(message)
    if isinstance(raw, str):
        if not raw.strip():
            raise ValidationFailure(message)
        return raw.strip()
    return raw


def is_blank(value: Any) -> bool:
    """True for absent values and empty strings. ``0`` counts as present."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def require_fields(
    payload: Mapping[str, Any] | None,
    fields: Iterable[str],
    message: str = MISSING_FIELDS,
) -> Mapping[str, Any]:
    """
    Check that every named wire field is present and non-empty.

    Returns:
        The payload, narrowed to a mapping.

    Raises:
        ValidationFailure: If the payload is absent or any field is blank.
    """
    if not isinstance(payload, Mapping):
        raise ValidationFailure(message)
    missing = [name for name in fields if is_blank(payload.get(name))]
    if missing:
        raise ValidationFailure(message, detail=", ".join(missing))
    return payload


def parse_payload(model: type[ModelT], payload: Mapping[str, Any]) -> ModelT:
    """
    Coerce a wire payload into an entity.

    Raises:
        ValidationFailure: If a field has the wrong shape (e.g. text for a number).
    """
    try:
        return model.model_validate(dict(payload))
    except ValidationError as e:
        issues = "; ".join(
            f"{'.'.join(str(part) for part in item['loc'])}: {item['msg']}" for item in e.errors()
        )
        raise ValidationFailure(MISSING_FIELDS, detail=issues) from e


@contextmanager
def store_failure(message: str) -> Iterator[None]:
    """Re-tag an adapter ``StoreError`` with an operation-level message."""
    try:
        yield
    except StoreError as e:
        raise StoreError(message, detail=e.detail or e.message) from e


@dataclass(frozen=True)
class StoreBackends:
    """Registry of the configured store implementations, keyed by kind."""

    users: Mapping[StoreKind, UserStore] = field(default_factory=dict)
    recipes: Mapping[StoreKind, RecipeStore] = field(default_factory=dict)

    def users_for(self, kind: StoreKind) -> UserStore:
        """Return the user store for ``kind``."""
        try:
            return self.users[kind]
        except KeyError:
            raise ValidationFailure(UNSUPPORTED_DATABASE_TYPE, detail=kind.value) from None

    def recipes_for(self, kind: StoreKind) -> RecipeStore:
        """Return the recipe store for ``kind``."""
        try:
            return self.recipes[kind]
        except KeyError:
            raise ValidationFailure(UNSUPPORTED_DATABASE_TYPE, detail=kind.value) from None

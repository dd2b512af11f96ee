"""
UserService
===========

User use-cases: registration, login and CRUD against the store selected
by the caller's discriminator.

Flow per operation:
1. Reject a blank identifier
2. Resolve the discriminator into a ``StoreKind``
3. Check required fields
4. Call the matching ``UserStore``, re-tagging store failures
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from recipe_hub.application.dispatch import (
    is_blank,
    parse_payload,
    require_fields,
    require_identifier,
    resolve_store_kind,
    store_failure,
)
from recipe_hub.application.passwords import hash_password, verify_password
from recipe_hub.domain.entities import StoreKind, User, normalize_email
from recipe_hub.domain.errors import (
    AuthenticationError,
    NotFoundError,
    ValidationFailure,
)

if TYPE_CHECKING:
    from recipe_hub.application.dispatch import StoreBackends
    from recipe_hub.domain.entities import EntityId

logger = logging.getLogger(__name__)

NO_ID = "No id was provided"
NO_EMAIL = "No email was provided"
NO_USER = "No user was provided"
NOT_FOUND = "User does not exist"
ALREADY_EXISTS = "User already exists"
INVALID_CREDENTIALS = "Invalid credentials"

REGISTRATION_FIELDS = ("firstName", "lastName", "email", "password")
PROFILE_FIELDS = ("firstName", "lastName", "email")


@dataclass(frozen=True)
class AuthenticatedUser:
    """Outcome of a successful login: the user and the store it lives in."""

    user: User
    kind: StoreKind


class UserService:
    """
    Orchestrates user operations over the configured stores.

    Passwords are hashed here, before any adapter sees them, and are
    stripped from every user this service returns.
    """

    def __init__(self, backends: StoreBackends) -> None:
        """
        Initialize the service.

        Args:
            backends: Store registry keyed by ``StoreKind``.
        """
        self._backends = backends

    async def create(self, payload: Mapping[str, Any] | None, data_base_type: str | None) -> User:
        """
        Register a new user.

        Raises:
            ValidationFailure: Bad discriminator, missing field or duplicate email.
            StoreError: The store rejected the insert.
        """
        kind = resolve_store_kind(data_base_type)
        values = require_fields(payload, REGISTRATION_FIELDS)
        user = parse_payload(User, {k: v for k, v in values.items() if k not in ("_id", "id")})
        store = self._backends.users_for(kind)

        with store_failure("User was not added"):
            if await store.get_by_email(user.email) is not None:
                raise ValidationFailure(ALREADY_EXISTS)
            hashed = await hash_password(user.password or "")
            created = await store.create(user.model_copy(update={"password": hashed}))

        logger.info(f"Registered user {created.id} in {kind.value}")
        return _without_password(created)

    async def login(
        self,
        email: str | None,
        password: str | None,
        data_base_type: str | None,
    ) -> AuthenticatedUser:
        """
        Verify credentials and return the matching user with its store kind.

        Raises:
            AuthenticationError: Unknown email or wrong password.
        """
        kind = resolve_store_kind(data_base_type)
        if is_blank(email) or is_blank(password):
            raise ValidationFailure("Please fill all fields")
        store = self._backends.users_for(kind)

        with store_failure("User was not logged in"):
            user = await store.get_by_email(normalize_email(str(email)))

        if user is None or not await verify_password(str(password), user.password):
            logger.warning(f"Failed login attempt on {kind.value}")
            raise AuthenticationError(INVALID_CREDENTIALS)
        return AuthenticatedUser(_without_password(user), kind)

    async def get(self, user_id: EntityId | None, data_base_type: str | None) -> User:
        """Fetch one user by identifier."""
        user_id = require_identifier(user_id, NO_ID)
        store = self._backends.users_for(resolve_store_kind(data_base_type))
        with store_failure("User was not retrieved"):
            user = await store.get_by_id(user_id)
        if user is None:
            raise NotFoundError(NOT_FOUND)
        return _without_password(user)

    async def get_by_email(self, email: str | None, data_base_type: str | None) -> User:
        """Fetch one user by email."""
        kind = resolve_store_kind(data_base_type)
        if is_blank(email):
            raise ValidationFailure(NO_EMAIL)
        store = self._backends.users_for(kind)
        with store_failure("User was not retrieved"):
            user = await store.get_by_email(normalize_email(str(email)))
        if user is None:
            raise NotFoundError(NOT_FOUND)
        return _without_password(user)

    async def list_all(self, data_base_type: str | None) -> list[User]:
        """Fetch every user of the selected store."""
        store = self._backends.users_for(resolve_store_kind(data_base_type))
        with store_failure("Users were not retrieved"):
            users = await store.list_all()
        return [_without_password(user) for user in users]

    async def update(
        self,
        user_id: EntityId | None,
        payload: Mapping[str, Any] | None,
        data_base_type: str | None,
    ) -> User:
        """
        Overwrite a user's profile.

        A non-blank ``password`` in the payload is re-hashed; an omitted one
        keeps the stored hash.
        """
        user_id = require_identifier(user_id, NO_ID)
        kind = resolve_store_kind(data_base_type)
        if payload is None:
            raise ValidationFailure(NO_USER)
        values = dict(require_fields(payload, PROFILE_FIELDS))
        values.pop("_id", None)
        values.pop("id", None)
        if is_blank(values.get("password")):
            values.pop("password", None)
        user = parse_payload(User, values)
        store = self._backends.users_for(kind)

        with store_failure("User was not updated"):
            if user.password is not None:
                user = user.model_copy(update={"password": await hash_password(user.password)})
            updated = await store.update(user_id, user)

        if updated is None:
            raise NotFoundError(NOT_FOUND)
        return _without_password(updated)

    async def delete(self, user_id: EntityId | None, data_base_type: str | None) -> User:
        """Remove a user and return it as it was before removal."""
        user_id = require_identifier(user_id, NO_ID)
        kind = resolve_store_kind(data_base_type)
        store = self._backends.users_for(kind)
        with store_failure("User was not deleted"):
            deleted = await store.delete(user_id)
        if deleted is None:
            raise NotFoundError(NOT_FOUND)
        logger.info(f"Deleted user {deleted.id} from {kind.value}")
        return _without_password(deleted)


def _without_password(user: User) -> User:
    return user.model_copy(update={"password": None})

"""
User Endpoints
==============

Registration, session login/logout and CRUD for users.
Every request names its backing store through ``dataBaseType``.
"""

from __future__ import annotations

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import ORJSONResponse
from pydantic import BaseModel, ConfigDict, Field

from recipe_hub.api.envelope import respond
from recipe_hub.application.users import UserService
from recipe_hub.infrastructure.dependencies import get_user_service

router = APIRouter()

Users = Annotated[UserService, Depends(get_user_service)]

SESSION_USER_KEY = "userId"
SESSION_STORE_KEY = "dataBaseType"


# -----------------------------------------------------------------------------
# Request Schemas (API layer DTOs)
# -----------------------------------------------------------------------------


class _StoreRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    data_base_type: str | None = Field(
        default=None,
        alias="dataBaseType",
        description="Backing store: 'mongoDB' or 'neo4j'.",
    )


class UserRequest(_StoreRequest):
    """Request body carrying a user payload."""

    user: dict[str, Any] | None = Field(
        default=None,
        description="User fields in camelCase: firstName, lastName, email, password.",
    )


class LoginRequest(_StoreRequest):
    """Request body for login."""

    email: str | None = None
    password: str | None = None


class EmailLookupRequest(_StoreRequest):
    """Request body for lookup by email."""

    email: str | None = None


# -----------------------------------------------------------------------------
# Endpoints
# -----------------------------------------------------------------------------


@router.post("", status_code=status.HTTP_201_CREATED, summary="Register a user")
async def create_user(body: UserRequest, users: Users) -> ORJSONResponse:
    created = await users.create(body.user, body.data_base_type)
    return respond(
        "User added successfully",
        status_code=status.HTTP_201_CREATED,
        newUser=created.public(),
    )


@router.post("/login", summary="Log a user in")
async def login(body: LoginRequest, request: Request, users: Users) -> ORJSONResponse:
    """Verify credentials and remember the user in the session cookie."""
    authenticated = await users.login(body.email, body.password, body.data_base_type)
    request.session[SESSION_USER_KEY] = authenticated.user.id
    request.session[SESSION_STORE_KEY] = authenticated.kind.value
    return respond("User logged in successfully", authUser=authenticated.user.public())


@router.post("/logout", summary="Log the current user out")
async def logout(request: Request) -> ORJSONResponse:
    request.session.clear()
    return respond("User logged out successfully")


@router.post("/email", summary="Find a user by email")
async def get_user_by_email(body: EmailLookupRequest, users: Users) -> ORJSONResponse:
    user = await users.get_by_email(body.email, body.data_base_type)
    return respond("User retrieved successfully", user=user.public())


# Registered before /{id}/{dataBaseType}, which would otherwise capture it.
@router.get("/dataBaseType/{dataBaseType}", summary="List users")
async def list_users(dataBaseType: str, users: Users) -> ORJSONResponse:  # noqa: N803
    found = await users.list_all(dataBaseType)
    return respond("Users retrieved successfully", users=[user.public() for user in found])


@router.get("/{id}/{dataBaseType}", summary="Get a user")
async def get_user(id: str, dataBaseType: str, users: Users) -> ORJSONResponse:  # noqa: A002, N803
    user = await users.get(id, dataBaseType)
    return respond("User retrieved successfully", user=user.public())


@router.put("/{id}", summary="Update a user")
async def update_user(id: str, body: UserRequest, users: Users) -> ORJSONResponse:  # noqa: A002
    updated = await users.update(id, body.user, body.data_base_type)
    return respond("User updated successfully", updatedUser=updated.public())


@router.delete("/{id}/{dataBaseType}", summary="Delete a user")
async def delete_user(id: str, dataBaseType: str, users: Users) -> ORJSONResponse:  # noqa: A002, N803
    deleted = await users.delete(id, dataBaseType)
    return respond("User deleted successfully", deletedUser=deleted.public())

"""
MongoDB User Store Adapter
==========================

User persistence in the ``users`` collection.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from pymongo import ReturnDocument

from recipe_hub.adapters.outbound.mongo_client import USERS_COLLECTION, translate_errors
from recipe_hub.adapters.outbound.mongo_schemas import (
    UserDocument,
    UserUpdateDocument,
    from_document,
    parse_object_id,
    to_document,
)
from recipe_hub.domain.entities import StoreKind, User
from recipe_hub.ports.entity_store import UserStore

if TYPE_CHECKING:
    from pymongo.asynchronous.collection import AsyncCollection

    from recipe_hub.adapters.outbound.mongo_client import MongoConnection
    from recipe_hub.domain.entities import EntityId

logger = logging.getLogger(__name__)

WITHOUT_PASSWORD = {"password": 0}


class MongoUserStore(UserStore):
    """Document-store implementation of the user port."""

    kind = StoreKind.MONGODB

    def __init__(self, connection: MongoConnection) -> None:
        self._connection = connection

    @property
    def _users(self) -> AsyncCollection[dict[str, Any]]:
        return self._connection.collection(USERS_COLLECTION)

    async def create(self, user: User) -> User:
        document = to_document(UserDocument, "Users", user.model_dump(exclude={"id"}))
        with translate_errors("insert user"):
            result = await self._users.insert_one(document)
        logger.debug(f"Inserted user {result.inserted_id}")
        return User.model_validate(from_document({**document, "_id": result.inserted_id}))

    async def get_by_id(self, user_id: EntityId) -> User | None:
        oid = parse_object_id(user_id)
        if oid is None:
            return None
        with translate_errors("find user"):
            document = await self._users.find_one({"_id": oid}, WITHOUT_PASSWORD)
        return _to_user(document)

    async def get_by_email(self, email: str) -> User | None:
        with translate_errors("find user by email"):
            document = await self._users.find_one({"email": email})
        return _to_user(document)

    async def list_all(self) -> list[User]:
        with translate_errors("list users"):
            return [
                User.model_validate(from_document(document))
                async for document in self._users.find({}, WITHOUT_PASSWORD)
            ]

    async def update(self, user_id: EntityId, user: User) -> User | None:
        oid = parse_object_id(user_id)
        if oid is None:
            return None
        changes = to_document(UserUpdateDocument, "Users", user.model_dump(exclude={"id"}))
        with translate_errors("update user"):
            document = await self._users.find_one_and_update(
                {"_id": oid},
                {"$set": changes},
                projection=WITHOUT_PASSWORD,
                return_document=ReturnDocument.AFTER,
            )
        return _to_user(document)

    async def delete(self, user_id: EntityId) -> User | None:
        oid = parse_object_id(user_id)
        if oid is None:
            return None
        with translate_errors("delete user"):
            document = await self._users.find_one_and_delete(
                {"_id": oid}, projection=WITHOUT_PASSWORD
            )
        return _to_user(document)


def _to_user(document: dict[str, Any] | None) -> User | None:
    if document is None:
        return None
    return User.model_validate(from_document(document))

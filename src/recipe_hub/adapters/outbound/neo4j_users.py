"""
Neo4j User Store Adapter
========================

Users are ``(:User)`` nodes; identifiers are internal node ids.

Graph model:
    (:User {firstName, lastName, email, password})-[:CREATED]->(:Recipe)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from recipe_hub.domain.entities import StoreKind, User
from recipe_hub.ports.entity_store import UserStore

if TYPE_CHECKING:
    from recipe_hub.adapters.outbound.neo4j_client import Neo4jConnection
    from recipe_hub.domain.entities import EntityId

logger = logging.getLogger(__name__)

# Map projections; the password is only selected for login lookups.
PUBLIC_FIELDS = "user {.firstName, .lastName, .email}"
PRIVATE_FIELDS = "user {.firstName, .lastName, .email, .password}"

# Node ids are signed 64-bit integers on the wire.
MAX_NODE_ID = 2**63 - 1

CREATE_USER = f"""
    CREATE (user:User {{
        firstName: $firstName,
        lastName: $lastName,
        email: $email,
        password: $password
    }})
    RETURN id(user) AS id, {PUBLIC_FIELDS} AS user
"""

GET_USER_BY_ID = f"""
    MATCH (user:User) WHERE id(user) = $id
    RETURN id(user) AS id, {PUBLIC_FIELDS} AS user
    LIMIT 1
"""

GET_USER_BY_EMAIL = f"""
    MATCH (user:User {{email: $email}})
    RETURN id(user) AS id, {PRIVATE_FIELDS} AS user
    LIMIT 1
"""

LIST_USERS = f"""
    MATCH (user:User)
    RETURN id(user) AS id, {PUBLIC_FIELDS} AS user
    ORDER BY id
"""

UPDATE_USER = f"""
    MATCH (user:User) WHERE id(user) = $id
    SET user += $props
    RETURN id(user) AS id, {PUBLIC_FIELDS} AS user
"""

DELETE_USER = f"""
    MATCH (user:User) WHERE id(user) = $id
    WITH user, id(user) AS id, {PUBLIC_FIELDS} AS snapshot
    DETACH DELETE user
    RETURN id, snapshot AS user
"""


def parse_node_id(raw: EntityId) -> int | None:
    """Parse a caller-supplied identifier into a node id; malformed input yields None."""
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        node_id = raw
    else:
        value = raw.strip()
        if not (value.isascii() and value.isdigit()):
            return None
        node_id = int(value)
    if not 0 <= node_id <= MAX_NODE_ID:
        return None
    return node_id


class Neo4jUserStore(UserStore):
    """Graph-store implementation of the user port."""

    kind = StoreKind.NEO4J

    def __init__(self, connection: Neo4jConnection) -> None:
        self._connection = connection

    async def create(self, user: User) -> User:
        records = await self._connection.run(
            CREATE_USER,
            {
                "firstName": user.first_name,
                "lastName": user.last_name,
                "email": user.email,
                "password": user.password,
            },
        )
        created = _record_to_user(records[0])
        logger.debug(f"Created user node {created.id}")
        return created

    async def get_by_id(self, user_id: EntityId) -> User | None:
        node_id = parse_node_id(user_id)
        if node_id is None:
            return None
        return _first_user(await self._connection.run(GET_USER_BY_ID, {"id": node_id}))

    async def get_by_email(self, email: str) -> User | None:
        return _first_user(await self._connection.run(GET_USER_BY_EMAIL, {"email": email}))

    async def list_all(self) -> list[User]:
        records = await self._connection.run(LIST_USERS)
        return [_record_to_user(record) for record in records]

    async def update(self, user_id: EntityId, user: User) -> User | None:
        node_id = parse_node_id(user_id)
        if node_id is None:
            return None
        props = user.to_wire(exclude={"id"})
        return _first_user(
            await self._connection.run(UPDATE_USER, {"id": node_id, "props": props})
        )

    async def delete(self, user_id: EntityId) -> User | None:
        node_id = parse_node_id(user_id)
        if node_id is None:
            return None
        return _first_user(await self._connection.run(DELETE_USER, {"id": node_id}))


def _record_to_user(record: dict[str, Any]) -> User:
    return User.model_validate({**record["user"], "_id": record["id"]})


def _first_user(records: list[dict[str, Any]]) -> User | None:
    if not records:
        return None
    return _record_to_user(records[0])

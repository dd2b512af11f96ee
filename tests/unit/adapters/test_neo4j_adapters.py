"""Unit tests for the Neo4j store adapters."""

from __future__ import annotations

from typing import Any
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from neo4j.exceptions import ServiceUnavailable, TransientError
from pydantic import SecretStr

from recipe_hub.adapters.outbound.neo4j_client import (
    CONSTRAINTS,
    Neo4jConnection,
    Neo4jConnectionError,
)
from recipe_hub.adapters.outbound.neo4j_recipes import (
    CREATE_RECIPE,
    DELETE_RECIPE,
    GET_RECIPE_BY_ID,
    LIST_RECIPES_BY_OWNER,
    UPDATE_RECIPE,
    Neo4jRecipeStore,
)
from recipe_hub.adapters.outbound.neo4j_users import (
    GET_USER_BY_EMAIL,
    UPDATE_USER,
    Neo4jUserStore,
    parse_node_id,
)
from recipe_hub.domain.entities import Ingredient, Recipe, User
from recipe_hub.domain.errors import StoreError
from recipe_hub.infrastructure.config import Neo4jSettings


@pytest.fixture
def connection() -> MagicMock:
    """Connection double whose ``run`` returns canned records."""
    mock = MagicMock(spec=Neo4jConnection)
    mock.run = AsyncMock(return_value=[])
    return mock


def _user_record(node_id: int, **extra: Any) -> dict[str, Any]:
    return {
        "id": node_id,
        "user": {"firstName": "Ada", "lastName": "Lovelace", "email": "ada@b.com", **extra},
    }


def _recipe_record(node_id: int) -> dict[str, Any]:
    return {
        "id": node_id,
        "recipe": {
            "name": "Soup",
            "description": "Salty soup",
            "type": "dinner",
            "cookTime": 10,
            "prepTime": 5,
            "servings": 2,
            "userId": "3",
        },
        "ingredients": [{"name": "Salt", "weight": 5}, {"name": "Water", "weight": 500}],
    }


class TestParseNodeId:
    @pytest.mark.parametrize(("raw", "expected"), [(5, 5), ("12", 12), (" 7 ", 7), (2**63 - 1, 2**63 - 1)])
    def test_valid(self, raw: Any, expected: int) -> None:
        assert parse_node_id(raw) == expected

    @pytest.mark.parametrize(
        "raw",
        ["abc", "-1", "1.5", "", True, "\u00b2", "\u0663", -1, "99999999999999999999", 2**63],
    )
    def test_invalid(self, raw: Any) -> None:
        assert parse_node_id(raw) is None


class TestNeo4jUserStore:
    @pytest.fixture
    def store(self, connection: MagicMock) -> Neo4jUserStore:
        return Neo4jUserStore(connection)

    async def test_create_returns_node_id(
        self, store: Neo4jUserStore, connection: MagicMock
    ) -> None:
        connection.run.return_value = [_user_record(11)]
        user = User(first_name="Ada", last_name="Lovelace", email="ada@b.com", password="$2b$h")

        created = await store.create(user)

        parameters = connection.run.await_args.args[1]
        assert parameters["password"] == "$2b$h"
        assert created.id == 11
        assert created.password is None

    async def test_get_by_id_parses_path_id(
        self, store: Neo4jUserStore, connection: MagicMock
    ) -> None:
        connection.run.return_value = [_user_record(11)]

        user = await store.get_by_id("11")

        assert connection.run.await_args.args[1] == {"id": 11}
        assert user is not None
        assert user.email == "ada@b.com"

    async def test_get_by_id_unparseable(
        self, store: Neo4jUserStore, connection: MagicMock
    ) -> None:
        assert await store.get_by_id("65f1c0ffee0000000000abcd") is None
        connection.run.assert_not_awaited()

    @pytest.mark.parametrize("raw", ["\u00b2", "99999999999999999999"])
    async def test_get_by_id_out_of_range_is_missing(
        self, store: Neo4jUserStore, connection: MagicMock, raw: str
    ) -> None:
        assert await store.get_by_id(raw) is None
        assert await store.delete(raw) is None
        connection.run.assert_not_awaited()

    async def test_get_by_email_includes_password(
        self, store: Neo4jUserStore, connection: MagicMock
    ) -> None:
        connection.run.return_value = [_user_record(11, password="$2b$h")]

        user = await store.get_by_email("ada@b.com")

        assert connection.run.await_args.args[0] == GET_USER_BY_EMAIL
        assert user is not None
        assert user.password == "$2b$h"

    async def test_get_by_email_missing(self, store: Neo4jUserStore) -> None:
        assert await store.get_by_email("nobody@b.com") is None

    async def test_update_omits_blank_password(
        self, store: Neo4jUserStore, connection: MagicMock
    ) -> None:
        connection.run.return_value = [_user_record(11)]

        await store.update(11, User(first_name="Ada", last_name="Lovelace", email="ada@b.com"))

        query, parameters = connection.run.await_args.args
        assert query == UPDATE_USER
        assert parameters == {
            "id": 11,
            "props": {"firstName": "Ada", "lastName": "Lovelace", "email": "ada@b.com"},
        }

    async def test_update_unknown_id(self, store: Neo4jUserStore) -> None:
        updated = await store.update(
            99, User(first_name="Ada", last_name="Lovelace", email="ada@b.com")
        )

        assert updated is None

    async def test_delete_returns_snapshot(
        self, store: Neo4jUserStore, connection: MagicMock
    ) -> None:
        connection.run.return_value = [_user_record(11)]

        deleted = await store.delete("11")

        assert deleted is not None
        assert deleted.id == 11

    async def test_list_all(self, store: Neo4jUserStore, connection: MagicMock) -> None:
        connection.run.return_value = [_user_record(1), _user_record(2)]

        users = await store.list_all()

        assert [u.id for u in users] == [1, 2]


class TestNeo4jRecipeStore:
    @pytest.fixture
    def store(self, connection: MagicMock) -> Neo4jRecipeStore:
        return Neo4jRecipeStore(connection)

    @pytest.fixture
    def recipe(self) -> Recipe:
        return Recipe(
            name="Soup",
            description="Salty soup",
            type="dinner",
            ingredients=[Ingredient(name="Salt", weight=5), Ingredient(name="Water", weight=500)],
            cook_time=10,
            prep_time=5,
            servings=2,
            user_id="3",
        )

    async def test_create_sends_composite_query(
        self, store: Neo4jRecipeStore, connection: MagicMock, recipe: Recipe
    ) -> None:
        connection.run.return_value = [{"id": 21}]

        created = await store.create(recipe)

        query, parameters = connection.run.await_args.args
        assert query == CREATE_RECIPE
        assert parameters["props"] == {
            "name": "Soup",
            "description": "Salty soup",
            "type": "dinner",
            "cookTime": 10,
            "prepTime": 5,
            "servings": 2,
            "userId": "3",
        }
        assert parameters["ingredients"] == [
            {"name": "Salt", "weight": 5},
            {"name": "Water", "weight": 500},
        ]
        assert parameters["ownerId"] == 3
        assert created.id == 21
        assert created.ingredients == recipe.ingredients

    async def test_create_with_non_numeric_owner(
        self, store: Neo4jRecipeStore, connection: MagicMock, recipe: Recipe
    ) -> None:
        connection.run.return_value = [{"id": 21}]

        await store.create(recipe.model_copy(update={"user_id": "65f1c0ffee0000000000abcd"}))

        assert connection.run.await_args.args[1]["ownerId"] is None

    async def test_create_with_oversized_owner(
        self, store: Neo4jRecipeStore, connection: MagicMock, recipe: Recipe
    ) -> None:
        connection.run.return_value = [{"id": 21}]

        await store.create(recipe.model_copy(update={"user_id": "99999999999999999999"}))

        assert connection.run.await_args.args[1]["ownerId"] is None

    async def test_get_by_id_keeps_ingredient_order(
        self, store: Neo4jRecipeStore, connection: MagicMock
    ) -> None:
        connection.run.return_value = [_recipe_record(21)]

        recipe = await store.get_by_id("21")

        assert connection.run.await_args.args == (GET_RECIPE_BY_ID, {"id": 21})
        assert recipe is not None
        assert recipe.id == 21
        assert [i.name for i in recipe.ingredients] == ["Salt", "Water"]

    async def test_get_by_id_missing(self, store: Neo4jRecipeStore) -> None:
        assert await store.get_by_id("21") is None

    async def test_list_by_owner(self, store: Neo4jRecipeStore, connection: MagicMock) -> None:
        connection.run.return_value = [_recipe_record(21), _recipe_record(22)]

        recipes = await store.list_by_owner(3)

        assert connection.run.await_args.args == (LIST_RECIPES_BY_OWNER, {"userId": "3"})
        assert [r.id for r in recipes] == [21, 22]

    async def test_update(
        self, store: Neo4jRecipeStore, connection: MagicMock, recipe: Recipe
    ) -> None:
        connection.run.return_value = [{"id": 21}]

        updated = await store.update("21", recipe)

        query, parameters = connection.run.await_args.args
        assert query == UPDATE_RECIPE
        assert parameters["id"] == 21
        assert updated is not None
        assert updated.id == 21

    async def test_update_unknown_id(self, store: Neo4jRecipeStore, recipe: Recipe) -> None:
        assert await store.update("21", recipe) is None

    async def test_delete_returns_snapshot(
        self, store: Neo4jRecipeStore, connection: MagicMock
    ) -> None:
        connection.run.return_value = [_recipe_record(21)]

        deleted = await store.delete(21)

        assert connection.run.await_args.args == (DELETE_RECIPE, {"id": 21})
        assert deleted is not None
        assert deleted.name == "Soup"


class TestNeo4jConnection:
    @pytest.fixture
    def settings(self) -> Neo4jSettings:
        return Neo4jSettings(
            uri="bolt://localhost:7687",
            username="neo4j",
            password=SecretStr("test_password"),
            database="neo4j",
        )

    @pytest.fixture
    def driver(self) -> MagicMock:
        """Mock async driver whose sessions return canned records."""
        mock = MagicMock()
        mock.verify_connectivity = AsyncMock()
        mock.close = AsyncMock()
        result = MagicMock()
        result.data = AsyncMock(return_value=[{"id": 1}])
        session = mock.session.return_value.__aenter__.return_value
        session.run = AsyncMock(return_value=result)
        return mock

    @pytest.fixture
    async def connection(self, settings: Neo4jSettings, driver: MagicMock) -> Neo4jConnection:
        with patch(
            "recipe_hub.adapters.outbound.neo4j_client.AsyncGraphDatabase.driver",
            return_value=driver,
        ):
            connection = Neo4jConnection(settings)
            await connection.connect()
        return connection

    async def test_connect_ensures_constraints(
        self, connection: Neo4jConnection, driver: MagicMock
    ) -> None:
        session = driver.session.return_value.__aenter__.return_value
        statements = [call.args[0] for call in session.run.await_args_list]
        assert statements == list(CONSTRAINTS)
        driver.session.assert_called_with(database="neo4j")

    async def test_run_returns_records(
        self, connection: Neo4jConnection, driver: MagicMock
    ) -> None:
        records = await connection.run("RETURN 1 AS id", {"x": 1})

        assert records == [{"id": 1}]

    async def test_run_translates_server_errors(
        self, connection: Neo4jConnection, driver: MagicMock
    ) -> None:
        session = driver.session.return_value.__aenter__.return_value
        session.run.side_effect = TransientError("deadlock detected")

        with pytest.raises(StoreError):
            await connection.run("MATCH (n) RETURN n")

    @pytest.mark.parametrize(
        "error", [OverflowError("Integer out of range"), ValueError("bad"), TypeError("bad")]
    )
    async def test_run_translates_parameter_errors(
        self, connection: Neo4jConnection, driver: MagicMock, error: Exception
    ) -> None:
        session = driver.session.return_value.__aenter__.return_value
        session.run.side_effect = error

        with pytest.raises(StoreError) as excinfo:
            await connection.run("RETURN $n", {"n": 2**64})

        assert excinfo.value.detail == str(error)

    async def test_run_before_connect(self, settings: Neo4jSettings) -> None:
        with pytest.raises(StoreError):
            await Neo4jConnection(settings).run("RETURN 1")

    async def test_disconnect(self, connection: Neo4jConnection, driver: MagicMock) -> None:
        await connection.disconnect()

        driver.close.assert_awaited_once()
        assert await connection.health_check() is False

    async def test_connect_failure(self, settings: Neo4jSettings, driver: MagicMock) -> None:
        driver.verify_connectivity.side_effect = ServiceUnavailable("no route")

        with patch(
            "recipe_hub.adapters.outbound.neo4j_client.AsyncGraphDatabase.driver",
            return_value=driver,
        ):
            with pytest.raises(Neo4jConnectionError):
                await Neo4jConnection(settings).connect()

        driver.close.assert_awaited_once()

"""Outbound adapters for the backing stores."""

from recipe_hub.adapters.outbound.mongo_client import MongoConnection
from recipe_hub.adapters.outbound.mongo_recipes import MongoRecipeStore
from recipe_hub.adapters.outbound.mongo_users import MongoUserStore
from recipe_hub.adapters.outbound.neo4j_client import Neo4jConnection
from recipe_hub.adapters.outbound.neo4j_recipes import Neo4jRecipeStore
from recipe_hub.adapters.outbound.neo4j_users import Neo4jUserStore

__all__ = [
    # Connections
    "MongoConnection",
    "Neo4jConnection",
    # Document store
    "MongoRecipeStore",
    "MongoUserStore",
    # Graph store
    "Neo4jRecipeStore",
    "Neo4jUserStore",
]

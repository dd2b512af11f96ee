"""
Configuration Management
========================

Pydantic-settings based configuration for both stores and the HTTP layer.
Reads from environment variables with sensible defaults.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal
from urllib.parse import quote_plus

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class MongoSettings(BaseSettings):
    """
    Configuration for the MongoDB document store.

    Uses the ``DB_`` prefix (DB_HOST, DB_NAME, DB_USERNAME, DB_PASSWORD).
    """

    model_config = SettingsConfigDict(env_prefix="DB_", extra="ignore")

    host: str = Field(default="localhost:27017")
    name: str = Field(default="recipes")
    username: str = Field(default="")
    password: SecretStr = Field(default=SecretStr(""))
    use_srv: bool = Field(
        default=False,
        description="Connect with a mongodb+srv:// URI (Atlas clusters)",
    )
    server_selection_timeout_ms: int = Field(default=5000, ge=100)

    @property
    def connection_uri(self) -> str:
        """Build the driver URI from the individual settings."""
        credentials = ""
        if self.username:
            password = quote_plus(self.password.get_secret_value())
            credentials = f"{quote_plus(self.username)}:{password}@"
        if self.use_srv:
            return f"mongodb+srv://{credentials}{self.host}/{self.name}?retryWrites=true&w=majority"
        return f"mongodb://{credentials}{self.host}/{self.name}"


class Neo4jSettings(BaseSettings):
    """Configuration for the Neo4j graph store."""

    model_config = SettingsConfigDict(env_prefix="NEO4J_", extra="ignore")

    uri: str = Field(
        default="bolt://localhost:7687",
        description="Bolt URI for Neo4j connection",
    )
    username: str = Field(default="neo4j")
    password: SecretStr = Field(default=SecretStr("password"))
    database: str = Field(default="neo4j")
    max_connection_pool_size: int = Field(default=50, ge=1)


class APISettings(BaseSettings):
    """Configuration for the FastAPI application."""

    model_config = SettingsConfigDict(env_prefix="API_", extra="ignore")

    title: str = Field(default="Recipe Hub API")
    version: str = Field(default="0.1.0")
    debug: bool = Field(default=False)
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=3000)
    workers: int = Field(default=1, ge=1)
    root_path: str = Field(default="/v1", description="Prefix for versioned routes")
    cors_origins: list[str] = Field(default_factory=lambda: ["http://localhost:3000"])
    secret_code: SecretStr = Field(
        default=SecretStr("secretcode"),
        description="Signing key for the session cookie",
    )


class Settings(BaseSettings):
    """
    Root configuration aggregating all service settings.

    Usage:
        settings = get_settings()
        neo4j_uri = settings.neo4j.uri
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    mongo: MongoSettings = Field(default_factory=MongoSettings)
    neo4j: Neo4jSettings = Field(default_factory=Neo4jSettings)
    api: APISettings = Field(default_factory=APISettings)

    environment: Literal["development", "staging", "production", "test"] = Field(
        default="development"
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(default="INFO")


@lru_cache
def get_settings() -> Settings:
    """
    Get cached application settings.

    Returns singleton instance, reading from environment on first call.
    """
    return Settings()

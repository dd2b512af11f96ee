"""
Recipe Hub API
==============

A hexagonal-architecture backend for managing users and their recipes
against a choice of backing store (MongoDB document store or Neo4j graph).

Layers:
- domain: Core entities and the error taxonomy (User, Recipe, StoreKind)
- ports: Abstract interfaces (UserStore, RecipeStore, StoreConnection)
- application: Store dispatch and use cases (UserService, RecipeService)
- adapters: Concrete implementations for MongoDB and Neo4j
- infrastructure: Config, DI wiring, logging, entrypoint
- api: FastAPI routes and the response envelope
"""

__version__ = "0.1.0"

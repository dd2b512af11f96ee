"""
API Layer
=========

FastAPI routes, the response envelope, and HTTP-specific logic.
This is the primary (driving) adapter in hexagonal architecture.
"""

from recipe_hub.api.app import create_app

__all__ = [
    "create_app",
]

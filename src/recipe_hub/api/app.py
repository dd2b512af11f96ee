"""
FastAPI Application Factory
===========================

Creates and configures the FastAPI application with routers and middleware.
"""

from __future__ import annotations

import yaml
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import ORJSONResponse, Response
from starlette.middleware.sessions import SessionMiddleware

from recipe_hub.api.envelope import install_exception_handlers
from recipe_hub.api.routes import health, recipes, root, users
from recipe_hub.infrastructure.config import get_settings
from recipe_hub.infrastructure.dependencies import lifespan_manager


def create_app(*, enable_lifespan: bool = True) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance.
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.api.title,
        version=settings.api.version,
        description=(
            "Backend for managing users and their recipes. Each request selects "
            "its backing store, MongoDB or Neo4j, through the dataBaseType field."
        ),
        debug=settings.api.debug,
        lifespan=lifespan_manager if enable_lifespan else None,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        default_response_class=ORJSONResponse,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.api.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Signed cookie session, set on login
    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.api.secret_code.get_secret_value(),
        https_only=settings.environment == "production",
    )

    install_exception_handlers(app)

    # Include routers
    prefix = settings.api.root_path.rstrip("/")
    app.include_router(health.router, prefix="/health", tags=["Health"])
    app.include_router(root.router, prefix=prefix, tags=["Root"])
    app.include_router(users.router, prefix=f"{prefix}/user", tags=["Users"])
    app.include_router(recipes.router, prefix=f"{prefix}/recipe", tags=["Recipes"])

    @app.get("/openapi.yaml", include_in_schema=False)
    def openapi_yaml() -> Response:
        schema = app.openapi()
        content = yaml.safe_dump(schema, sort_keys=False, allow_unicode=True)
        return Response(content=content, media_type="application/yaml")

    return app

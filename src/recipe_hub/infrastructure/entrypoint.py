"""
Application Entrypoint
======================

CLI entrypoint for running the API server.
"""

from __future__ import annotations

import logging
import sys

import uvicorn
import uvloop

from recipe_hub.infrastructure.config import get_settings
from recipe_hub.infrastructure.logging import configure_logging


def main() -> None:
    """Run the API server using uvicorn."""
    uvloop.install()

    settings = get_settings()
    configure_logging(settings.log_level)

    logger = logging.getLogger(__name__)
    logger.info(f"Starting {settings.api.title} v{settings.api.version}")
    logger.info(f"Environment: {settings.environment}")

    uvicorn.run(
        "recipe_hub.api.app:create_app",
        factory=True,
        host=settings.api.host,
        port=settings.api.port,
        workers=settings.api.workers,
        reload=settings.api.debug,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    sys.exit(main() or 0)

"""
Logging utilities for API runtime.
"""

from __future__ import annotations

import logging
import time

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Driver loggers that are chatty at INFO. uvicorn.access stays at INFO so
# HealthLiveAccessFilter sees its records.
NOISY_LOGGERS = ("neo4j", "pymongo")


class HealthLiveAccessFilter(logging.Filter):
    """Throttle /health/live access log entries to reduce log noise."""

    def __init__(self, min_interval_seconds: float = 120.0, path: str = "/health/live") -> None:
        super().__init__()
        self._min_interval_seconds = min_interval_seconds
        self._path = path
        self._last_logged: float | None = None

    def filter(self, record: logging.LogRecord) -> bool:
        if self._path not in record.getMessage():
            return True

        now = time.monotonic()
        if self._last_logged is None or (now - self._last_logged) >= self._min_interval_seconds:
            self._last_logged = now
            return True

        return False


def configure_logging(level: str) -> None:
    """Configure the root logger and quiet the store drivers."""
    logging.basicConfig(
        level=getattr(logging, level),
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        force=True,
    )

    access_logger = logging.getLogger("uvicorn.access")
    access_logger.addFilter(HealthLiveAccessFilter(min_interval_seconds=120.0))

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

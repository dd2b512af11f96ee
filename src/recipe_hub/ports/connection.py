"""
StoreConnection Port
====================

Lifecycle contract for an owned database connection handle.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class StoreConnection(ABC):
    """
    Base port for a store connection.

    Opened once at startup, shared by that store's adapters and
    closed on shutdown. No reconnection is attempted.
    """

    name: str

    @abstractmethod
    async def connect(self) -> None:
        """Open the connection and verify the store is reachable."""
        ...

    @abstractmethod
    async def disconnect(self) -> None:
        """Release the connection."""
        ...

    @abstractmethod
    async def health_check(self) -> bool:
        """Check if the store is operational."""
        ...

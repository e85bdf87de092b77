"""
Cache abstraction (port).

Defines the cache interface used by application services so they do
not depend on a particular backend.
"""
from abc import ABC, abstractmethod
from typing import Any, Optional


class CachePort(ABC):
    """Abstract cache port."""

    @abstractmethod
    async def get(self, key: str) -> Optional[Any]:
        """
        Get a value from cache.

        Args:
            key: Cache key

        Returns:
            Cached value or None if not found
        """
        pass

    @abstractmethod
    async def set(self, key: str, value: Any, timeout: Optional[int] = None) -> None:
        """
        Set a value in cache.

        Args:
            key: Cache key
            value: Value to cache
            timeout: Timeout in seconds (None for the backend default)
        """
        pass

    @abstractmethod
    async def delete(self, key: str) -> None:
        """
        Delete a value from cache.

        Args:
            key: Cache key
        """
        pass

"""
Cache adapter implementations.

Provides the Django cache implementation of CachePort. The concrete
backend (Redis in deployed environments, locmem in tests) comes from
the CACHES setting.
"""

import logging
from typing import Any, Optional

from asgiref.sync import sync_to_async
from django.core.cache import cache

from core.infrastructure.cache import CachePort

logger = logging.getLogger(__name__)


class DjangoCacheAdapter(CachePort):
    """
    Django cache adapter implementing CachePort.

    Cache failures are logged and treated as misses; the cache is never
    the source of truth.
    """

    async def get(self, key: str) -> Optional[Any]:
        try:
            value = await sync_to_async(cache.get)(key)
            if value is not None:
                logger.debug("Cache hit: %s", key)
            else:
                logger.debug("Cache miss: %s", key)
            return value
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.error("Error getting from cache: %s", e, exc_info=True)
            return None

    async def set(self, key: str, value: Any, timeout: Optional[int] = None) -> None:
        try:
            await sync_to_async(cache.set)(key, value, timeout=timeout)
            logger.debug("Cache set: %s (timeout=%s)", key, timeout)
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.error("Error setting cache: %s", e, exc_info=True)

    async def delete(self, key: str) -> None:
        try:
            await sync_to_async(cache.delete)(key)
            logger.debug("Cache delete: %s", key)
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.error("Error deleting from cache: %s", e, exc_info=True)


cache_adapter = DjangoCacheAdapter()

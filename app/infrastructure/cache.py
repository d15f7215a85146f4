# app/infrastructure/cache.py
"""
Cache Adapter for the flight proxy
Provides a clean get/set(ttl) interface over an in-process store.
"""

import logging
import time
from typing import Any, Callable, Dict, Optional, Tuple

logger = logging.getLogger(__name__)


class CacheAdapter:
    """
    Abstract interface for cache operations.
    Allows easy swapping of cache backends.
    """

    default_ttl: int = 3600

    async def get(self, key: str) -> Optional[Any]:
        """Get value by key"""
        raise NotImplementedError

    async def set(self, key: str, value: Any, ttl: Optional[int] = None) -> bool:
        """Set value with TTL"""
        raise NotImplementedError

    async def delete(self, key: str) -> bool:
        """Delete key"""
        raise NotImplementedError

    async def clear(self) -> None:
        """Drop every entry"""
        raise NotImplementedError


class InMemoryCache(CacheAdapter):
    """
    In-memory TTL cache.

    Entries live until their TTL runs out; there is no size bound and no
    LRU eviction. Stored values are handed back as-is, so callers must treat
    them as read-only and copy before annotating.

    Neither get nor set awaits anything, so on a single event loop each call
    runs to completion without interleaving: concurrent writers to the same
    key resolve as last-write-wins.
    """

    def __init__(self, default_ttl: int = 3600, clock: Callable[[], float] = time.monotonic):
        self._store: Dict[str, Tuple[float, Any]] = {}
        self.default_ttl = default_ttl
        self._clock = clock

    @property
    def size(self) -> int:
        return len(self._store)

    async def get(self, key: str) -> Optional[Any]:
        """
        Get value by key.

        Args:
            key: Cache key

        Returns:
            Cached value, or None if missing or expired
        """
        item = self._store.get(key)
        if item is None:
            logger.debug(f"Cache MISS: {key}")
            return None

        expires_at, value = item
        if self._clock() >= expires_at:
            self._store.pop(key, None)
            logger.debug(f"Cache EXPIRED: {key}")
            return None

        logger.debug(f"Cache HIT: {key}")
        return value

    async def set(self, key: str, value: Any, ttl: Optional[int] = None) -> bool:
        """
        Set value with TTL.

        Args:
            key: Cache key
            value: Value to cache, replaces any previous entry wholesale
            ttl: Time-to-live in seconds (defaults to ``default_ttl``)

        Returns:
            True if successful
        """
        ttl = self.default_ttl if ttl is None else ttl
        self._store[key] = (self._clock() + ttl, value)
        logger.debug(f"Cache SET: {key} (TTL={ttl}s)")
        return True

    async def delete(self, key: str) -> bool:
        """Delete key"""
        return self._store.pop(key, None) is not None

    async def clear(self) -> None:
        self._store.clear()


__all__ = [
    'CacheAdapter',
    'InMemoryCache',
]

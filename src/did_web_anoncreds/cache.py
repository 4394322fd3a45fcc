"""Caching of resolved resources."""

import asyncio
import heapq
import logging
import time
from typing import Any, Dict, List, Protocol, Tuple

from did_web_anoncreds.config import CacheSettings
from did_web_anoncreds.models.results import CacheEntry


LOGGER = logging.getLogger(__name__)


class Cache(Protocol):
    """Cache Protocol."""

    async def get(self, key: str) -> Any:
        """Get a value, or None if absent or expired."""
        ...

    async def set(self, key: str, value: Any, ttl: float):
        """Set a value with TTL in seconds."""
        ...


class BasicCache(Cache):
    """In-memory KV cache with TTL expiry on access."""

    def __init__(self):
        """Initialize the store."""
        self.cache: Dict[str, Tuple[float, Any]] = {}
        self.expiry_heap: List[Tuple[float, str]] = []
        self.lock = asyncio.Lock()

    def _expire_keys(self):
        """Expire keys that have passed their TTL."""
        now = time.time()
        while self.expiry_heap and self.expiry_heap[0][0] <= now:
            expires_at, key = heapq.heappop(self.expiry_heap)
            entry = self.cache.get(key)
            # A later set of the same key leaves a stale heap item behind
            if entry is not None and entry[0] == expires_at:
                LOGGER.debug("Expiring key: %s", key)
                del self.cache[key]

    async def set(self, key: str, value: Any, ttl: float):
        """Set a value with TTL in seconds."""
        async with self.lock:
            LOGGER.debug("Set: %s", key)
            self._expire_keys()
            expires_at = time.time() + ttl
            self.cache[key] = (expires_at, value)
            heapq.heappush(self.expiry_heap, (expires_at, key))

    async def get(self, key: str) -> Any:
        """Get a value, expiring any stale keys."""
        async with self.lock:
            LOGGER.debug("Get: %s", key)
            self._expire_keys()
            entry = self.cache.get(key)
            return entry[1] if entry else None

    async def clear(self, key: str):
        """Clear a key."""
        async with self.lock:
            LOGGER.debug("Delete: %s", key)
            self.cache.pop(key, None)

    async def flush(self):
        """Remove all items from the cache."""
        async with self.lock:
            self.cache = {}
            self.expiry_heap = []


def cache_key(kind: str, resource_id: str) -> str:
    """Make the cache key for a resource."""
    return f"anoncreds:{kind}:{resource_id}"


class ResourceCache:
    """Get-before-fetch and set-after-fetch access to a cache.

    Both operations do nothing when caching is disabled in settings.
    """

    def __init__(self, cache: Cache, settings: CacheSettings):
        """Init the resource cache."""
        self.cache = cache
        self.settings = settings

    async def lookup(self, kind: str, resource_id: str) -> CacheEntry | None:
        """Retrieve a cached entry."""
        if not self.settings.allow_caching:
            return None

        value = await self.cache.get(cache_key(kind, resource_id))
        if not value:
            return None

        LOGGER.debug("Cache hit for %s %s", kind, resource_id)
        return CacheEntry.model_validate(value)

    async def store(self, kind: str, resource_id: str, entry: CacheEntry):
        """Store an entry for the configured duration."""
        if not self.settings.allow_caching:
            return

        await self.cache.set(
            cache_key(kind, resource_id),
            entry.serialize(),
            self.settings.cache_duration_in_seconds,
        )

from abc import ABC, abstractmethod
from datetime import timedelta
from typing import Any

from core.models.cache import CacheEntry, CacheKey
from core.utils.clock import Clock, utc_now


class BaseCacheClient(ABC):
    """
    Abstract interface for the time-keyed cache

    Maps a CacheKey to a CacheEntry (value + stored_at). Writes are
    unconditional overwrites; there is no eviction beyond that. TTLs are
    owned by the caller and passed to is_stale().

    Implementations:
    - InMemoryCache (per-process dict, unbounded)
    - RedisCache (shared across processes)
    """

    def __init__(self, clock: Clock | None = None):
        """
        Args:
            clock: Returns "now" as an aware datetime (default: UTC wall clock)
        """
        self.clock = clock or utc_now

    async def connect(self) -> None:
        """Establish connection to cache service (no-op by default)"""

    async def close(self) -> None:
        """Close connection (no-op by default)"""

    @abstractmethod
    async def get(self, key: CacheKey) -> CacheEntry | None:
        """
        Get entry by key

        Args:
            key: Cache key

        Returns:
            CacheEntry, or None if not found
        """

    @abstractmethod
    async def set(self, key: CacheKey, value: Any) -> CacheEntry:
        """
        Store value with stored_at = now, replacing any previous entry

        Args:
            key: Cache key
            value: Value to store

        Returns:
            The entry written
        """

    @abstractmethod
    async def delete(self, key: CacheKey) -> bool:
        """
        Remove an entry

        Returns:
            True if an entry was removed
        """

    async def is_stale(self, key: CacheKey, ttl: timedelta) -> bool:
        """
        True if the entry is absent or older than ttl

        Args:
            key: Cache key
            ttl: Maximum age before the entry needs a refresh

        Example:
            >>> await cache.set(key, snapshot)
            >>> await cache.is_stale(key, timedelta(minutes=5))
            False
        """
        return self.is_expired(await self.get(key), ttl)

    def is_expired(self, entry: CacheEntry | None, ttl: timedelta) -> bool:
        """Staleness rule shared by is_stale() and callers that already hold an entry"""
        if entry is None:
            return True
        return self.clock() - entry.stored_at > ttl

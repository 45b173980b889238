"""
In-memory implementation of cache client

Reference design: a plain dict per process, no eviction
"""

import logging
from typing import Any

from core.interfaces.cache import BaseCacheClient
from core.models.cache import CacheEntry, CacheKey
from core.utils.clock import Clock

logger = logging.getLogger(__name__)


class InMemoryCache(BaseCacheClient):
    """
    Dict-backed cache

    Features:
    - Zero setup, one instance per process (or per test)
    - Entries live until overwritten or deleted (unbounded)
    - Values are stored by reference, not copied
    """

    def __init__(self, clock: Clock | None = None):
        super().__init__(clock=clock)
        self._entries: dict[str, CacheEntry] = {}

    async def get(self, key: CacheKey) -> CacheEntry | None:
        """Get entry by key"""
        return self._entries.get(str(key))

    async def set(self, key: CacheKey, value: Any) -> CacheEntry:
        """Store value, replacing any previous entry"""
        entry = CacheEntry(value=value, stored_at=self.clock())
        self._entries[str(key)] = entry
        logger.debug(f"✓ Cached {key}")
        return entry

    async def delete(self, key: CacheKey) -> bool:
        """Remove an entry"""
        return self._entries.pop(str(key), None) is not None

    def __len__(self) -> int:
        return len(self._entries)

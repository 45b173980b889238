"""
Redis implementation of cache client

Shares cached quotes, bars and indicator snapshots across processes
"""

import json
import logging
from datetime import datetime
from typing import Any

from pydantic_core import to_jsonable_python
from redis.asyncio import Redis

from config.settings import get_settings
from core.interfaces.cache import BaseCacheClient
from core.models.cache import CacheEntry, CacheKey
from core.utils.clock import Clock

logger = logging.getLogger(__name__)


class RedisCache(BaseCacheClient):
    """
    Redis implementation

    Storage format:
        Key: str(CacheKey), e.g. "indicators:TCS"
        Value: JSON {"stored_at": ISO-8601, "value": <JSON value>}

    Values come back as plain JSON (dicts/lists); callers re-validate
    them into models. Staleness is computed from stored_at, not from the
    Redis TTL. CACHE_REDIS_EXPIRY_SECONDS optionally adds a hard expiry
    so abandoned keys don't accumulate.
    """

    def __init__(self, clock: Clock | None = None):
        super().__init__(clock=clock)
        self.settings = get_settings()
        self.client: Redis | None = None

    async def connect(self) -> None:
        """Connect to Redis"""
        try:
            self.client = Redis.from_url(self.settings.redis_url, decode_responses=True)
            # Test connection
            await self.client.ping()
            logger.info(
                f"✓ Connected to Redis: {self.settings.REDIS_HOST}:{self.settings.REDIS_PORT}"
            )
        except Exception as e:
            logger.error(f"✗ Failed to connect to Redis: {e}")
            raise

    async def get(self, key: CacheKey) -> CacheEntry | None:
        """Get entry by key"""
        if not self.client:
            raise RuntimeError("Redis client not connected")

        try:
            raw = await self.client.get(str(key))
        except Exception as e:
            logger.error(f"✗ Redis GET error: {e}")
            raise

        if raw is None:
            return None

        data = json.loads(raw)
        return CacheEntry(
            value=data["value"],
            stored_at=datetime.fromisoformat(data["stored_at"]),
        )

    async def set(self, key: CacheKey, value: Any) -> CacheEntry:
        """Store value as a JSON envelope, replacing any previous entry"""
        if not self.client:
            raise RuntimeError("Redis client not connected")

        entry = CacheEntry(value=value, stored_at=self.clock())
        payload = json.dumps(
            {
                "stored_at": entry.stored_at.isoformat(),
                "value": to_jsonable_python(value),
            }
        )

        try:
            await self.client.set(
                str(key), payload, ex=self.settings.CACHE_REDIS_EXPIRY_SECONDS
            )
        except Exception as e:
            logger.error(f"✗ Redis SET error: {e}")
            raise

        return entry

    async def delete(self, key: CacheKey) -> bool:
        """Remove an entry"""
        if not self.client:
            raise RuntimeError("Redis client not connected")

        try:
            return await self.client.delete(str(key)) > 0
        except Exception as e:
            logger.error(f"✗ Redis DELETE error: {e}")
            raise

    async def close(self) -> None:
        """Close connection"""
        if self.client:
            await self.client.aclose()
            self.client = None
            logger.info("✓ Redis connection closed")

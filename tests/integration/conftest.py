"""
Pytest configuration for integration tests

cache.yaml points at the Docker hostname "redis"; tests running on the
host machine talk to localhost instead. Tests skip when the service is
not reachable.
"""

from unittest.mock import MagicMock

import pytest

from providers.opensource.redis_client import RedisCache


@pytest.fixture
async def redis_cache(fake_clock):
    """RedisCache on localhost (db 15), skipped if Redis is down"""
    cache = RedisCache(clock=fake_clock)
    cache.settings = MagicMock(
        redis_url="redis://localhost:6379/15",
        REDIS_HOST="localhost",
        REDIS_PORT=6379,
        CACHE_REDIS_EXPIRY_SECONDS=None,
    )

    try:
        await cache.connect()
    except Exception as e:
        pytest.skip(f"Redis not available: {e}")

    try:
        yield cache
    finally:
        await cache.client.flushdb()
        await cache.close()

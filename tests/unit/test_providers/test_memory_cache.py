"""
Unit tests for InMemoryCache and the shared staleness rule
"""

from datetime import timedelta

import pytest

from core.models.cache import CacheKey, EntityKind
from providers.opensource.memory_cache import InMemoryCache

KEY = CacheKey(kind=EntityKind.INDICATORS, symbol="TCS")
TTL = timedelta(seconds=300)


@pytest.fixture
def cache(fake_clock):
    return InMemoryCache(clock=fake_clock)


@pytest.mark.unit
class TestInMemoryCache:
    """Test get/set/delete and staleness with a fake clock"""

    @pytest.mark.asyncio
    async def test_get_missing_returns_none(self, cache):
        assert await cache.get(KEY) is None

    @pytest.mark.asyncio
    async def test_set_then_get(self, cache, fake_clock):
        entry = await cache.set(KEY, {"rsi": 55.0})

        stored = await cache.get(KEY)
        assert stored == entry
        assert stored.value == {"rsi": 55.0}
        assert stored.stored_at == fake_clock.now

    @pytest.mark.asyncio
    async def test_set_overwrites(self, cache, fake_clock):
        await cache.set(KEY, "old")
        fake_clock.advance(10)
        await cache.set(KEY, "new")

        stored = await cache.get(KEY)
        assert stored.value == "new"
        assert stored.stored_at == fake_clock.now
        assert len(cache) == 1

    @pytest.mark.asyncio
    async def test_keys_are_independent(self, cache):
        await cache.set(KEY, 1)
        await cache.set(CacheKey(kind=EntityKind.QUOTE, symbol="TCS"), 2)
        await cache.set(CacheKey(kind=EntityKind.HISTORY, symbol="TCS", sub_key="1M"), 3)

        assert (await cache.get(KEY)).value == 1
        assert len(cache) == 3

    @pytest.mark.asyncio
    async def test_delete(self, cache):
        await cache.set(KEY, 1)

        assert await cache.delete(KEY) is True
        assert await cache.delete(KEY) is False
        assert await cache.get(KEY) is None

    @pytest.mark.asyncio
    async def test_missing_entry_is_stale(self, cache):
        assert await cache.is_stale(KEY, TTL) is True

    @pytest.mark.asyncio
    async def test_not_stale_right_after_set(self, cache):
        await cache.set(KEY, 1)

        assert await cache.is_stale(KEY, TTL) is False

    @pytest.mark.asyncio
    async def test_stale_only_after_ttl_elapses(self, cache, fake_clock):
        await cache.set(KEY, 1)

        fake_clock.advance(300)
        assert await cache.is_stale(KEY, TTL) is False

        fake_clock.advance(1)
        assert await cache.is_stale(KEY, TTL) is True

    @pytest.mark.asyncio
    async def test_zero_ttl_goes_stale_as_soon_as_time_moves(self, cache, fake_clock):
        await cache.set(KEY, 1)

        assert await cache.is_stale(KEY, timedelta(0)) is False
        fake_clock.advance(0.001)
        assert await cache.is_stale(KEY, timedelta(0)) is True

    @pytest.mark.asyncio
    async def test_connect_and_close_are_noops(self, cache):
        await cache.connect()
        await cache.set(KEY, 1)
        await cache.close()

        assert (await cache.get(KEY)).value == 1

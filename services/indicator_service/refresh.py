"""
Indicator Refresher - Lazy, TTL-driven refresh of cached market data

Flow for get_indicators(symbol):
1. Read (indicators, SYMBOL) from the cache
2. Fresh → return it (no recompute, no network)
3. Stale/absent → load bars via get_history() (itself cached), recompute
   with IndicatorCalculator, write back, return

Concurrency:
    By default there is no request coalescing: N concurrent stale reads
    for one key make N upstream fetches and the last write wins. Values
    are pure functions of the same upstream data, so this only wastes
    work. coalesce=True shares one in-flight refresh per key instead.

There is no background refresh; everything is triggered by a read.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from datetime import timedelta
from typing import Any

from pydantic import TypeAdapter

from config.settings import Settings, get_settings
from core.exceptions import InsufficientData
from core.interfaces.cache import BaseCacheClient
from core.interfaces.market_data import BaseMarketDataProvider
from core.models.cache import CacheKey, EntityKind
from core.models.indicators import IndicatorSnapshot
from core.models.market_data import PriceBar, Quote, Timeframe
from core.validators.market_data import normalize_symbol
from services.indicator_service.calculator import IndicatorCalculator

logger = logging.getLogger(__name__)

_SNAPSHOT = TypeAdapter(IndicatorSnapshot)
_BARS = TypeAdapter(list[PriceBar])
_QUOTE = TypeAdapter(Quote | None)


class RefreshPolicy:
    """
    Staleness thresholds per entity kind

    Defaults: quote 60s, history 300s, indicators 300s, news 900s,
    recommendation 3600s.
    """

    DEFAULT_TTLS: dict[EntityKind, timedelta] = {
        EntityKind.QUOTE: timedelta(seconds=60),
        EntityKind.HISTORY: timedelta(seconds=300),
        EntityKind.INDICATORS: timedelta(seconds=300),
        EntityKind.NEWS: timedelta(seconds=900),
        EntityKind.RECOMMENDATION: timedelta(seconds=3600),
    }

    def __init__(self, ttls: dict[EntityKind, timedelta] | None = None):
        self.ttls = {**self.DEFAULT_TTLS, **(ttls or {})}

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "RefreshPolicy":
        """Build the policy from CACHE_TTL_* settings"""
        settings = settings or get_settings()
        return cls(
            {
                EntityKind.QUOTE: timedelta(seconds=settings.CACHE_TTL_QUOTE_SECONDS),
                EntityKind.HISTORY: timedelta(seconds=settings.CACHE_TTL_HISTORY_SECONDS),
                EntityKind.INDICATORS: timedelta(seconds=settings.CACHE_TTL_INDICATORS_SECONDS),
                EntityKind.NEWS: timedelta(seconds=settings.CACHE_TTL_NEWS_SECONDS),
                EntityKind.RECOMMENDATION: timedelta(
                    seconds=settings.CACHE_TTL_RECOMMENDATION_SECONDS
                ),
            }
        )

    def ttl_for(self, kind: EntityKind) -> timedelta:
        return self.ttls[kind]


class IndicatorRefresher:
    """
    Serve indicators, bars and quotes from the cache, refreshing lazily

    Example:
        >>> refresher = IndicatorRefresher(cache=InMemoryCache(), provider=provider)
        >>> snapshot = await refresher.get_indicators("TCS")
        >>> snapshot.rsi
        57.3
    """

    def __init__(
        self,
        cache: BaseCacheClient,
        provider: BaseMarketDataProvider,
        calculator: IndicatorCalculator | None = None,
        policy: RefreshPolicy | None = None,
        lookback: Timeframe = Timeframe.ONE_MONTH,
        coalesce: bool = False,
    ):
        """
        Args:
            cache: Time-keyed cache shared by all requests
            provider: Market data collaborator
            calculator: Indicator aggregator (default: configured indicator set)
            policy: TTL per entity kind (default: RefreshPolicy())
            lookback: History window used to compute indicators
            coalesce: Share one in-flight refresh per key between callers
        """
        self.cache = cache
        self.provider = provider
        self.calculator = calculator or IndicatorCalculator()
        self.policy = policy or RefreshPolicy()
        self.lookback = lookback
        self.coalesce = coalesce
        self._in_flight: dict[str, asyncio.Future] = {}

    async def get_indicators(self, symbol: str) -> IndicatorSnapshot:
        """
        Get the indicator snapshot for a symbol, recomputing if stale

        Raises:
            ValueError: If symbol is invalid
            InsufficientData: If no bars could be obtained
        """
        symbol = normalize_symbol(symbol)
        key = CacheKey(kind=EntityKind.INDICATORS, symbol=symbol)
        value = await self.get_or_refresh(key, lambda: self._recompute_indicators(symbol))
        return _SNAPSHOT.validate_python(value)

    async def get_history(
        self, symbol: str, timeframe: Timeframe | str = Timeframe.ONE_MONTH
    ) -> list[PriceBar]:
        """
        Get daily bars for a symbol, fetching if stale

        Returns:
            Bars ordered oldest first ([] if the provider has none)
        """
        symbol = normalize_symbol(symbol)
        timeframe = Timeframe(timeframe)
        key = CacheKey(kind=EntityKind.HISTORY, symbol=symbol, sub_key=timeframe.value)
        value = await self.get_or_refresh(
            key, lambda: self.provider.fetch_historical_bars(symbol, timeframe)
        )
        return _BARS.validate_python(value)

    async def get_quote(self, symbol: str) -> Quote | None:
        """Get the latest quote, fetching if older than the quote TTL"""
        symbol = normalize_symbol(symbol)
        key = CacheKey(kind=EntityKind.QUOTE, symbol=symbol)
        value = await self.get_or_refresh(key, lambda: self.provider.fetch_quote(symbol))
        return _QUOTE.validate_python(value)

    async def get_or_refresh(
        self,
        key: CacheKey,
        loader: Callable[[], Awaitable[Any]],
        ttl: timedelta | None = None,
    ) -> Any:
        """
        Return the cached value for key, or load and cache a fresh one

        Empty results (None or an empty list) are returned but not cached,
        so the next read tries upstream again. Also used by the route
        layer for news and recommendations with their own loaders.

        Args:
            key: Cache key
            loader: Coroutine factory producing a fresh value
            ttl: Override for the policy TTL of key.kind

        Returns:
            Cached or freshly loaded value (cached values may be plain
            JSON when the backend is Redis)
        """
        ttl = ttl if ttl is not None else self.policy.ttl_for(key.kind)

        entry = await self.cache.get(key)
        if not self.cache.is_expired(entry, ttl):
            logger.debug(f"Cache hit for {key}")
            return entry.value

        if self.coalesce:
            return await self._refresh_coalesced(key, loader)
        return await self._refresh(key, loader)

    async def _refresh(self, key: CacheKey, loader: Callable[[], Awaitable[Any]]) -> Any:
        logger.debug(f"Refreshing {key}")
        value = await loader()

        if value is None or (isinstance(value, list) and not value):
            logger.warning(f"No data returned for {key}; not caching")
            return value

        await self.cache.set(key, value)
        return value

    async def _refresh_coalesced(
        self, key: CacheKey, loader: Callable[[], Awaitable[Any]]
    ) -> Any:
        name = str(key)
        pending = self._in_flight.get(name)
        if pending is not None:
            logger.debug(f"Joining in-flight refresh for {key}")
            return await asyncio.shield(pending)

        task = asyncio.ensure_future(self._refresh(key, loader))
        self._in_flight[name] = task
        task.add_done_callback(lambda done: self._refresh_done(name, done))
        return await asyncio.shield(task)

    def _refresh_done(self, name: str, task: asyncio.Future) -> None:
        # The task outlives a cancelled caller; drop it only once it finishes
        if self._in_flight.get(name) is task:
            del self._in_flight[name]
        if not task.cancelled() and task.exception() is not None:
            logger.debug(f"Refresh for {name} failed: {task.exception()!r}")

    async def _recompute_indicators(self, symbol: str) -> IndicatorSnapshot:
        bars = await self.get_history(symbol, self.lookback)
        if not bars:
            logger.warning(f"✗ No bars for {symbol}; cannot compute indicators")
            raise InsufficientData(symbol)

        snapshot = self.calculator.compute_indicators(symbol, bars)
        logger.info(f"✓ Recomputed indicators for {symbol} from {len(bars)} bars")
        return snapshot

    async def close(self) -> None:
        """Close the provider and cache"""
        await self.provider.close()
        await self.cache.close()

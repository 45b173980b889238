"""
Client factory - Auto-create clients based on configuration

Dependency injection pattern: services depend on the core interfaces and
the backend is picked from settings
"""

import logging

from config.settings import get_settings
from core.interfaces.cache import BaseCacheClient
from core.interfaces.market_data import BaseMarketDataProvider
from core.models.market_data import Timeframe
from core.utils.clock import Clock

logger = logging.getLogger(__name__)


def create_cache_client(clock: Clock | None = None) -> BaseCacheClient:
    """
    Create cache client based on CACHE_BACKEND config

    Args:
        clock: Optional clock override (tests pass a fake clock)

    Returns:
        BaseCacheClient: InMemoryCache (memory) or RedisCache (redis)

    Examples:
        >>> # .env: CACHE_BACKEND=memory
        >>> cache = create_cache_client()  # Returns InMemoryCache
        >>>
        >>> # .env: CACHE_BACKEND=redis
        >>> cache = create_cache_client()  # Returns RedisCache
        >>> await cache.connect()
    """
    settings = get_settings()
    backend = settings.CACHE_BACKEND.lower()

    if backend == "memory":
        from providers.opensource.memory_cache import InMemoryCache

        logger.info("✓ Creating InMemoryCache")
        return InMemoryCache(clock=clock)

    elif backend == "redis":
        from providers.opensource.redis_client import RedisCache

        logger.info("✓ Creating RedisCache")
        return RedisCache(clock=clock)

    else:
        raise ValueError(f"Unsupported cache backend: {backend}. Supported: memory, redis")


def create_market_data_provider() -> BaseMarketDataProvider:
    """
    Create market data provider based on MARKET_DATA_PROVIDER config

    Returns:
        BaseMarketDataProvider: YahooFinanceProvider (yahoo) or
        SyntheticMarketDataProvider (synthetic)

    Raises:
        ValueError: If the provider name is not supported
    """
    settings = get_settings()
    provider = settings.MARKET_DATA_PROVIDER.lower()

    if provider == "yahoo":
        from providers.yahoo.rest_api import YahooFinanceProvider

        logger.info("✓ Creating YahooFinanceProvider")
        return YahooFinanceProvider()

    elif provider == "synthetic":
        from providers.synthetic.random_walk import SyntheticMarketDataProvider

        logger.info("✓ Creating SyntheticMarketDataProvider")
        return SyntheticMarketDataProvider()

    else:
        raise ValueError(
            f"Unsupported market data provider: {provider}. Supported: yahoo, synthetic"
        )


def create_indicator_refresher(clock: Clock | None = None):
    """
    Wire cache, provider and calculator into an IndicatorRefresher

    TTLs, lookback window and coalescing come from settings. The cache
    still needs connect() before use.

    Returns:
        IndicatorRefresher
    """
    from services.indicator_service.calculator import IndicatorCalculator
    from services.indicator_service.refresh import IndicatorRefresher, RefreshPolicy

    settings = get_settings()
    return IndicatorRefresher(
        cache=create_cache_client(clock=clock),
        provider=create_market_data_provider(),
        calculator=IndicatorCalculator(clock=clock),
        policy=RefreshPolicy.from_settings(settings),
        lookback=Timeframe(settings.INDICATOR_LOOKBACK_TIMEFRAME),
        coalesce=settings.INDICATOR_COALESCE_REFRESHES,
    )

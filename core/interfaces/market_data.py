"""
Abstract base class for market data providers

The indicator refresher consumes this interface; it never talks to an
upstream API directly.
"""

from abc import ABC, abstractmethod

from core.models.market_data import PriceBar, Quote, Timeframe


class BaseMarketDataProvider(ABC):
    """
    Source of daily bars and quotes for equity symbols

    Contract:
    - Failures are absorbed here: after its own retries a provider returns
      an empty list / None instead of raising
    - Bars are ordered ascending by date with no duplicate dates

    Implementations:
    - YahooFinanceProvider (providers/yahoo/rest_api.py)
    - SyntheticMarketDataProvider (providers/synthetic/random_walk.py)
    """

    def __init__(self, provider_name: str):
        """
        Args:
            provider_name: Short name used in logs (yahoo, synthetic)
        """
        self.provider_name = provider_name

    @abstractmethod
    async def fetch_historical_bars(self, symbol: str, timeframe: Timeframe) -> list[PriceBar]:
        """
        Fetch daily bars covering the timeframe

        Args:
            symbol: Normalized symbol (e.g., "RELIANCE")
            timeframe: Lookback window (1D ... 1Y)

        Returns:
            Bars ordered oldest first, or [] if nothing could be fetched
        """

    @abstractmethod
    async def fetch_quote(self, symbol: str) -> Quote | None:
        """
        Fetch the latest quote

        Returns:
            Quote, or None if nothing could be fetched
        """

    async def close(self) -> None:
        """Release client resources (no-op by default)"""

"""
Synthetic market data provider

Offline stand-in for a quote API: a random walk around per-symbol base
prices. Useful for demos and for running the service without network.
"""

import logging
import zlib
from datetime import timedelta

import numpy as np

from config.settings import get_settings
from core.interfaces.market_data import BaseMarketDataProvider
from core.models.market_data import PriceBar, Quote, Timeframe
from core.utils.clock import Clock, utc_now

logger = logging.getLogger(__name__)


class SyntheticMarketDataProvider(BaseMarketDataProvider):
    """
    Random-walk daily bars

    Each bar opens at the previous close and moves by up to
    ±daily_volatility/2 of the price. With a seed, the same symbol on the
    same day always produces the same bars.

    Example:
        >>> provider = SyntheticMarketDataProvider(seed=7)
        >>> bars = await provider.fetch_historical_bars("TCS", Timeframe.ONE_MONTH)
        >>> len(bars)
        31
    """

    def __init__(
        self,
        seed: int | None = None,
        base_prices: dict[str, float] | None = None,
        daily_volatility: float | None = None,
        default_base_price: float | None = None,
        clock: Clock | None = None,
    ):
        super().__init__(provider_name="synthetic")
        settings = get_settings()

        self.seed = seed if seed is not None else settings.SYNTHETIC_SEED
        self.base_prices = base_prices if base_prices is not None else settings.SYNTHETIC_BASE_PRICES
        self.daily_volatility = (
            daily_volatility if daily_volatility is not None else settings.SYNTHETIC_DAILY_VOLATILITY
        )
        self.default_base_price = (
            default_base_price
            if default_base_price is not None
            else settings.SYNTHETIC_DEFAULT_BASE_PRICE
        )
        self.clock = clock or utc_now

    def _rng(self, symbol: str) -> np.random.Generator:
        if self.seed is None:
            return np.random.default_rng()
        return np.random.default_rng([self.seed, zlib.crc32(symbol.encode())])

    async def fetch_historical_bars(self, symbol: str, timeframe: Timeframe) -> list[PriceBar]:
        """Generate timeframe.days + 1 bars ending today"""
        rng = self._rng(symbol)
        today = self.clock().date()
        price = float(self.base_prices.get(symbol, self.default_base_price))

        bars = []
        for offset in range(timeframe.days, -1, -1):
            change = (rng.random() - 0.5) * self.daily_volatility * price
            open_ = price
            close = price + change
            high = max(open_, close) + rng.random() * 2
            low = max(0.0, min(open_, close) - rng.random() * 2)

            bars.append(
                PriceBar(
                    date=today - timedelta(days=offset),
                    open=round(open_, 2),
                    high=round(high, 2),
                    low=round(low, 2),
                    close=round(close, 2),
                    volume=float(rng.integers(20_000_000, 70_000_000)),
                )
            )
            price = close

        logger.debug(
            f"[{self.provider_name}] Generated {len(bars)} bars for {symbol} {timeframe.value}"
        )
        return bars

    async def fetch_quote(self, symbol: str) -> Quote | None:
        """Derive a quote from one year of synthetic bars"""
        bars = await self.fetch_historical_bars(symbol, Timeframe.ONE_YEAR)
        last, previous = bars[-1], bars[-2]
        change = last.close - previous.close

        return Quote(
            symbol=symbol,
            price=last.close,
            change=change,
            change_percent=change / previous.close * 100 if previous.close else 0.0,
            volume=last.volume,
            previous_close=previous.close,
            open_price=last.open,
            high_52w=max(bar.high for bar in bars),
            low_52w=min(bar.low for bar in bars),
            last_updated=self.clock(),
        )

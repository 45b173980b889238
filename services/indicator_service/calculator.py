"""
Indicator Calculator - Core calculation logic

Turns a bar series into one IndicatorSnapshot:
- Validate bars (non-empty, ascending dates)
- Project closes
- Run every loaded indicator (polymorphic get_results)
- Assemble and timestamp the snapshot

No cache or network access; the refresher owns both.

Architecture:
    IndicatorLoader → Load indicators from config
    IndicatorCalculator → Bars in, snapshot out
    IndicatorRefresher → Decide when to recalculate, cache results
"""

import logging
from collections.abc import Sequence

import numpy as np

from core.exceptions import InsufficientData
from core.interfaces.indicators import BaseIndicator
from core.models.indicators import IndicatorSnapshot, MovingAverages
from core.models.market_data import PriceBar
from core.utils.clock import Clock, utc_now
from core.validators.market_data import validate_bar_series
from services.indicator_service.indicator_loader import IndicatorLoader

logger = logging.getLogger(__name__)


class IndicatorCalculator:
    """Calculate an indicator snapshot from daily bars"""

    def __init__(
        self,
        indicators: dict[str, BaseIndicator] | None = None,
        clock: Clock | None = None,
    ):
        """
        Args:
            indicators: Indicators keyed by snapshot field
                        (default: IndicatorLoader.load_from_settings())
            clock: Source of computed_at (default: UTC wall clock)
        """
        self.indicators = (
            indicators if indicators is not None else IndicatorLoader.load_from_settings()
        )
        self.clock = clock or utc_now

    def compute_indicators(self, symbol: str, bars: Sequence[PriceBar]) -> IndicatorSnapshot:
        """
        Compute all indicators for a symbol

        Individual indicators degrade on short input (RSI → 50, SMA and
        Bollinger windows shrink to the series length); only an empty bar
        list is an error.

        Args:
            symbol: Symbol the bars belong to
            bars: Daily bars ordered oldest first

        Returns:
            IndicatorSnapshot stamped with the current time

        Raises:
            InsufficientData: If bars is empty
            ValueError: If bars are not in strictly ascending date order
        """
        if not bars:
            raise InsufficientData(symbol)

        is_valid, error = validate_bar_series(bars)
        if not is_valid:
            raise ValueError(f"{symbol}: {error}")

        closes = np.array([bar.close for bar in bars], dtype=float)
        results = self._calculate_indicators(closes)

        snapshot = IndicatorSnapshot(
            symbol=symbol,
            rsi=results["rsi"],
            macd=results["macd"],
            moving_averages=MovingAverages(
                ma20=results["ma20"],
                ma50=results["ma50"],
                ma200=results["ma200"],
            ),
            bollinger_bands=results["bollinger_bands"],
            computed_at=self.clock(),
        )

        logger.debug(f"✓ Calculated {len(results)} indicators for {symbol} from {len(bars)} bars")
        return snapshot

    def _calculate_indicators(self, closes: np.ndarray) -> dict:
        """
        Calculate all indicators using polymorphism

        Uses indicator.get_results() for clean single/multi-value support

        Returns:
            Dict of all results: {"rsi": 61.2, "macd": MACDResult(...), ...}
        """
        results = {}
        for indicator in self.indicators.values():
            results.update(indicator.get_results(closes))
        return results


def compute_indicators(symbol: str, bars: Sequence[PriceBar]) -> IndicatorSnapshot:
    """
    Compute a snapshot with the configured indicator set

    Convenience wrapper around IndicatorCalculator for one-off use.
    """
    return IndicatorCalculator().compute_indicators(symbol, bars)

"""
Volatility indicators

Implementations:
- bollinger_bands / BollingerBands
"""

from collections.abc import Sequence

import numpy as np

from core.interfaces.indicators import BaseIndicator, as_closes, check_period
from core.models.indicators import BollingerBandsResult
from domain.indicators.moving_averages import sma


def bollinger_bands(
    closes: Sequence[float], period: int = 20, num_std: float = 2.0
) -> BollingerBandsResult:
    """
    Bollinger Bands over the trailing `period` closes

    Formula:
        Middle = SMA(period)
        StdDev = sqrt(SUM((Close - Middle)²) / period)
        Upper/Lower = Middle ± num_std × StdDev

    On a series shorter than `period` the middle band averages what is
    there (like sma()), but the squared deviations are still divided by
    `period`, so short windows give narrower bands.

    Values are not rounded; round to 2 decimals for display.

    Raises:
        EmptySeries: If closes is empty
    """
    check_period(period, "BollingerBands")
    values = as_closes(closes, "BollingerBands")

    middle = sma(values, period)
    window = values[-period:]
    std_dev = float(np.sqrt(np.sum((window - middle) ** 2) / period))

    return BollingerBandsResult(
        upper=middle + num_std * std_dev,
        middle=middle,
        lower=middle - num_std * std_dev,
    )


class BollingerBands(BaseIndicator):
    """
    Bollinger Bands

    Interpretation:
        - Close near upper band: Stretched to the upside
        - Close near lower band: Stretched to the downside
        - Narrow bands: Low volatility (all three equal on a flat window)

    Example:
        >>> bands = BollingerBands(period=20).calculate_full(closes)
        >>> bands.lower <= bands.middle <= bands.upper
        True
    """

    def __init__(self, period: int = 20, num_std: float = 2.0, name: str | None = None):
        if num_std < 0:
            raise ValueError(f"BollingerBands: num_std must be >= 0, got {num_std}")
        super().__init__(period=period, name=name, num_std=num_std)
        self.num_std = num_std

    def calculate(self, closes: Sequence[float]) -> float:
        """Calculate the middle band"""
        return self.calculate_full(closes).middle

    def calculate_full(self, closes: Sequence[float]) -> BollingerBandsResult:
        """Calculate upper, middle and lower bands"""
        return bollinger_bands(closes, self.period, self.num_std)

    def get_results(self, closes: Sequence[float]) -> dict[str, BollingerBandsResult]:
        """Return all three bands under this indicator's name"""
        return {self.name: self.calculate_full(closes)}

"""
Momentum indicators

Implementations:
- rsi / RSI: Relative Strength Index
- macd / MACD: Moving Average Convergence Divergence (simplified)
"""

from collections.abc import Sequence

import numpy as np

from core.interfaces.indicators import BaseIndicator, as_closes, check_period
from core.models.indicators import MACDResult
from domain.indicators.moving_averages import ema

RSI_NEUTRAL = 50.0

# Signal and histogram are fixed fractions of the MACD line,
# not an EMA(9) of it.
MACD_SIGNAL_RATIO = 0.8
MACD_HISTOGRAM_RATIO = 0.2


def rsi(closes: Sequence[float], period: int = 14) -> float:
    """
    Relative Strength Index over the last `period` day-over-day changes

    Formula:
        AvgGain = SUM(gains) / period, AvgLoss = SUM(|losses|) / period
        RSI = 100 - (100 / (1 + AvgGain / AvgLoss))

    Fallbacks:
        - Fewer than period + 1 closes: 50.0 (neutral)
        - AvgLoss == 0: 100.0, including a perfectly flat window

    Never raises for short or empty input.
    """
    check_period(period, "RSI")
    values = np.asarray(closes, dtype=float)
    if values.size < period + 1:
        return RSI_NEUTRAL

    deltas = np.diff(values)[-period:]
    avg_gain = float(deltas[deltas > 0].sum()) / period
    avg_loss = float(-deltas[deltas < 0].sum()) / period

    if avg_loss == 0:
        return 100.0

    rs = avg_gain / avg_loss
    return 100.0 - (100.0 / (1.0 + rs))


def macd(
    closes: Sequence[float], fast_period: int = 12, slow_period: int = 26
) -> MACDResult:
    """
    Simplified MACD

    Components:
        - value = EMA(fast) - EMA(slow)
        - signal = 0.8 × value
        - histogram = 0.2 × value

    Values are not rounded; round to 2 decimals for display.

    Raises:
        EmptySeries: If closes is empty
    """
    values = as_closes(closes, "MACD")
    value = ema(values, fast_period) - ema(values, slow_period)
    return MACDResult(
        value=value,
        signal=value * MACD_SIGNAL_RATIO,
        histogram=value * MACD_HISTOGRAM_RATIO,
    )


class RSI(BaseIndicator):
    """
    Relative Strength Index

    Interpretation:
        - RSI > 70: Overbought
        - RSI < 30: Oversold
        - RSI = 50: Neutral (also the short-series fallback)

    Example:
        >>> rsi = RSI(period=14)
        >>> if rsi.calculate(closes) > 70:
        ...     print("Overbought")
    """

    def __init__(self, period: int = 14, name: str | None = None):
        super().__init__(period=period, name=name)

    def calculate(self, closes: Sequence[float]) -> float:
        """Calculate RSI"""
        return rsi(closes, self.period)


class MACD(BaseIndicator):
    """
    Moving Average Convergence Divergence

    Components:
        - MACD Line = EMA(12) - EMA(26)
        - Signal Line = 0.8 × MACD Line
        - Histogram = 0.2 × MACD Line

    Note:
        Not textbook MACD. The signal line is a fixed fraction of the MACD
        line rather than an EMA(9) of it, so signal and histogram always
        share the line's sign and never cross it.

    Example:
        >>> result = MACD().calculate_full(closes)
        >>> result.value, result.signal, result.histogram
    """

    def __init__(
        self, fast_period: int = 12, slow_period: int = 26, name: str | None = None
    ):
        # Use slow_period as the main period for validation
        check_period(fast_period, "MACD")
        super().__init__(period=slow_period, name=name, fast=fast_period)
        self.fast_period = fast_period
        self.slow_period = slow_period

    def calculate(self, closes: Sequence[float]) -> float:
        """
        Calculate MACD line value

        Returns:
            EMA(fast) - EMA(slow)
        """
        return self.calculate_full(closes).value

    def calculate_full(self, closes: Sequence[float]) -> MACDResult:
        """Calculate all MACD components"""
        return macd(closes, self.fast_period, self.slow_period)

    def get_results(self, closes: Sequence[float]) -> dict[str, MACDResult]:
        """Return all MACD components under this indicator's name"""
        return {self.name: self.calculate_full(closes)}

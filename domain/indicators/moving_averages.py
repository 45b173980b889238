"""
Moving average indicators

Implementations:
- sma / SMA: Simple Moving Average
- ema / EMA: Exponential Moving Average
"""

import logging
from collections.abc import Sequence

import numpy as np

from core.interfaces.indicators import BaseIndicator, as_closes, check_period

logger = logging.getLogger(__name__)


def sma(closes: Sequence[float], period: int) -> float:
    """
    Mean of the last min(period, len(closes)) closes

    Raises:
        EmptySeries: If closes is empty

    Example:
        >>> sma([100, 102, 101, 103], period=3)
        102.0
    """
    check_period(period, "SMA")
    values = as_closes(closes, "SMA")
    return float(np.mean(values[-period:]))


def ema(closes: Sequence[float], period: int) -> float:
    """
    Exponential moving average over the whole series

    Formula: EMA_i = Close_i × k + EMA_{i-1} × (1 - k)
    where k = 2 / (period + 1)

    Seeded with the first close (not an SMA of the first `period` closes)
    and run over every close supplied, so the result depends on the
    entire history and on its order.

    Raises:
        EmptySeries: If closes is empty
    """
    check_period(period, "EMA")
    values = as_closes(closes, "EMA")

    k = 2.0 / (period + 1)
    result = float(values[0])
    for close in values[1:]:
        result = float(close) * k + result * (1 - k)
    return result


class SMA(BaseIndicator):
    """
    Simple Moving Average

    Formula: SMA = SUM(Close) / N, N capped at the series length

    Example:
        >>> sma = SMA(period=20, name="ma20")
        >>> value = sma.calculate(closes)
    """

    def __init__(self, period: int, name: str | None = None):
        super().__init__(period=period, name=name)

    def calculate(self, closes: Sequence[float]) -> float:
        """Calculate SMA"""
        return sma(closes, self.period)


class EMA(BaseIndicator):
    """
    Exponential Moving Average

    Note:
        Seeded from the first close, so short series are dominated by
        that seed. Load several multiples of the period for a value
        close to a conventionally seeded EMA.
    """

    def __init__(self, period: int, name: str | None = None):
        super().__init__(period=period, name=name)

    def calculate(self, closes: Sequence[float]) -> float:
        """Calculate EMA"""
        if len(closes) < self.period * 4:
            logger.debug(
                f"EMA({self.period}): Only {len(closes)} closes, "
                f"recommend {self.period * 4} for convergence"
            )
        return ema(closes, self.period)

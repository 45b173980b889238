"""
Abstract interface for technical indicators

Indicators work on the close-price projection of a bar series
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any

import numpy as np

from core.exceptions import EmptySeries


def check_period(period: int, indicator: str) -> None:
    """
    Validate a look-back period

    Raises:
        ValueError: If period is not a positive integer
    """
    if isinstance(period, bool) or not isinstance(period, int) or period <= 0:
        raise ValueError(f"{indicator}: period must be a positive integer, got {period!r}")


def as_closes(closes: Sequence[float], indicator: str) -> np.ndarray:
    """
    Convert closes to a float array

    Raises:
        EmptySeries: If there are no closes
    """
    values = np.asarray(closes, dtype=float)
    if values.size == 0:
        raise EmptySeries(indicator)
    return values


class BaseIndicator(ABC):
    """
    Indicator interface

    Design principle:
    - Pure calculation logic (no cache or network dependency)
    - Testable with plain lists of closes
    - Thin wrapper around the module-level functions in domain/indicators

    Implementations:
    - SMA, EMA (domain/indicators/moving_averages.py)
    - RSI, MACD (domain/indicators/momentum.py)
    - BollingerBands (domain/indicators/volatility.py)
    """

    def __init__(self, period: int, name: str | None = None, **kwargs):
        """
        Initialize indicator

        Args:
            period: Look-back period for calculation
            name: Result key (e.g., "ma20"). If None, uses class name.
            **kwargs: Additional indicator-specific parameters
        """
        check_period(period, self.__class__.__name__)
        self.period = period
        self.name = name or self.__class__.__name__
        self.params = {"period": period, **kwargs}

    @abstractmethod
    def calculate(self, closes: Sequence[float]) -> float:
        """
        Calculate the indicator's headline value

        Args:
            closes: Closing prices ordered oldest first

        Returns:
            Indicator value

        Raises:
            EmptySeries: If the indicator has no fallback for empty input
        """

    def get_results(self, closes: Sequence[float]) -> dict[str, Any]:
        """
        Get indicator results keyed by name (for polymorphic calculation)

        Default implementation returns single value: {self.name: value}
        Override for multi-value indicators (MACD, Bollinger Bands)

        Example:
            >>> SMA(period=20, name="ma20").get_results(closes)
            {"ma20": 1712.4}
        """
        return {self.name: self.calculate(closes)}

    def __repr__(self) -> str:
        """String representation"""
        params_str = ", ".join(f"{k}={v}" for k, v in self.params.items())
        return f"{self.name}({params_str})"

"""
Indicator registry

Maps the `type` field of an indicators.yaml entry to an indicator class
"""

from typing import Any

from core.interfaces.indicators import BaseIndicator
from domain.indicators.momentum import MACD, RSI
from domain.indicators.moving_averages import EMA, SMA
from domain.indicators.volatility import BollingerBands


class IndicatorRegistry:
    """Type name → indicator class lookup used when loading config"""

    _indicators: dict[str, type[BaseIndicator]] = {
        "sma": SMA,
        "ema": EMA,
        "rsi": RSI,
        "macd": MACD,
        "bollinger": BollingerBands,
    }

    @classmethod
    def create(cls, indicator_type: str, **params) -> BaseIndicator:
        """
        Instantiate an indicator by type name (case-insensitive)

        Args:
            indicator_type: One of list_indicators()
            **params: Constructor arguments, including the optional result `name`

        Raises:
            ValueError: Unknown type, or a parameter the class rejects
            TypeError: Parameter the class does not accept

        Example:
            >>> IndicatorRegistry.create("sma", period=20, name="ma20")
            ma20(period=20)
        """
        indicator_class = cls._indicators.get(indicator_type.lower())
        if indicator_class is None:
            available = ", ".join(cls.list_indicators())
            raise ValueError(f"Unknown indicator: {indicator_type}. Available: {available}")

        return indicator_class(**params)

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> BaseIndicator:
        """
        Build an indicator from one indicators.yaml entry

        Example:
            >>> IndicatorRegistry.from_config(
            ...     {"name": "bollinger_bands", "type": "bollinger", "params": {"period": 20}}
            ... )
            bollinger_bands(period=20, num_std=2.0)
        """
        return cls.create(
            str(config.get("type", "")),
            name=config.get("name"),
            **(config.get("params") or {}),
        )

    @classmethod
    def list_indicators(cls) -> list[str]:
        """Registered type names, sorted"""
        return sorted(cls._indicators)

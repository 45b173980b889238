"""Interfaces module - Abstract base classes for pluggable backends"""

from .cache import BaseCacheClient
from .indicators import BaseIndicator
from .market_data import BaseMarketDataProvider

__all__ = [
    "BaseCacheClient",
    "BaseIndicator",
    "BaseMarketDataProvider",
]

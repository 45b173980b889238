"""Models module - Pydantic data models"""

from .cache import CacheEntry, CacheKey, EntityKind
from .indicators import BollingerBandsResult, IndicatorSnapshot, MACDResult, MovingAverages
from .market_data import PriceBar, Quote, Timeframe

__all__ = [
    "PriceBar",
    "Quote",
    "Timeframe",
    "MACDResult",
    "MovingAverages",
    "BollingerBandsResult",
    "IndicatorSnapshot",
    "EntityKind",
    "CacheKey",
    "CacheEntry",
]

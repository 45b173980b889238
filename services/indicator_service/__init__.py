"""
Indicator Service - Technical indicators for the stock dashboard

1. Loads indicator definitions from config (IndicatorLoader)
2. Computes RSI, MACD, moving averages and Bollinger Bands from daily
   bars (IndicatorCalculator)
3. Serves snapshots from the cache, recomputing lazily once they are
   older than the TTL (IndicatorRefresher)
"""

from services.indicator_service.calculator import IndicatorCalculator, compute_indicators
from services.indicator_service.indicator_loader import IndicatorLoader
from services.indicator_service.refresh import IndicatorRefresher, RefreshPolicy

__all__ = [
    "IndicatorCalculator",
    "IndicatorLoader",
    "IndicatorRefresher",
    "RefreshPolicy",
    "compute_indicators",
]

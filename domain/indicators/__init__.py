"""
Technical indicators module

Exports:
- BaseIndicator (core/interfaces/indicators.py)
- Moving averages: sma, ema, SMA, EMA
- Momentum: rsi, macd, RSI, MACD
- Volatility: bollinger_bands, BollingerBands
- Registry: IndicatorRegistry
"""

from core.interfaces.indicators import BaseIndicator
from domain.indicators.momentum import MACD, RSI, macd, rsi
from domain.indicators.moving_averages import EMA, SMA, ema, sma
from domain.indicators.registry import IndicatorRegistry
from domain.indicators.volatility import BollingerBands, bollinger_bands

__all__ = [
    "BaseIndicator",
    "sma",
    "ema",
    "rsi",
    "macd",
    "bollinger_bands",
    "SMA",
    "EMA",
    "RSI",
    "MACD",
    "BollingerBands",
    "IndicatorRegistry",
]

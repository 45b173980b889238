"""
Validators module

Data quality validators for market data
"""

from core.validators.market_data import normalize_symbol, validate_bar, validate_bar_series

__all__ = ["normalize_symbol", "validate_bar", "validate_bar_series"]

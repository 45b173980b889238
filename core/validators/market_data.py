"""
Data quality checks for market data

Validates:
- Symbol format (normalized to upper case)
- Per-bar OHLC sanity (low <= open/close <= high)
- Bar series ordering (ascending dates, no duplicates)
"""

import re
from collections.abc import Sequence

from core.models.market_data import PriceBar

SYMBOL_PATTERN = re.compile(r"^[A-Z0-9 .\-]{1,20}$")


def normalize_symbol(symbol: str) -> str:
    """
    Normalize and validate an equity symbol

    Args:
        symbol: Raw symbol from the caller (" reliance ", "brk.b")

    Returns:
        Upper-cased, stripped symbol

    Raises:
        ValueError: If symbol is empty, too long or has invalid characters

    Example:
        >>> normalize_symbol(" infy ")
        'INFY'
    """
    normalized = symbol.strip().upper()
    if not SYMBOL_PATTERN.match(normalized):
        raise ValueError(f"Invalid stock symbol: {symbol!r}")
    return normalized


def validate_bar(bar: PriceBar) -> tuple[bool, str | None]:
    """
    Validate a single bar

    Checks low <= min(open, close) and high >= max(open, close).

    Returns:
        (is_valid, error_message)
    """
    if bar.low > min(bar.open, bar.close) or bar.high < max(bar.open, bar.close):
        return False, (
            f"Inconsistent OHLC on {bar.date.isoformat()}: "
            f"o={bar.open} h={bar.high} l={bar.low} c={bar.close}"
        )
    return True, None


def validate_bar_series(bars: Sequence[PriceBar]) -> tuple[bool, str | None]:
    """
    Validate bar ordering before indicator calculation

    Dates must be strictly ascending, which also rules out duplicates.

    Args:
        bars: Bars as returned by a market data provider

    Returns:
        (is_valid, error_message)
        - (True, None) if valid
        - (False, "error reason") if invalid

    Example:
        >>> is_valid, error = validate_bar_series(bars)
        >>> if not is_valid:
        ...     logger.error(f"Invalid bars: {error}")
    """
    for previous, current in zip(bars, bars[1:]):
        if current.date <= previous.date:
            return False, (
                f"Bars not strictly ascending: {current.date.isoformat()} "
                f"follows {previous.date.isoformat()}"
            )
    return True, None

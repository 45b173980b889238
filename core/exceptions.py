"""
Indicator engine errors

Only two conditions are hard failures:
- EmptySeries: an indicator was given zero closes and has no fallback
- InsufficientData: the aggregator (or refresher) has zero bars to work with

Everything else degrades to a documented neutral value.
Both subclass ValueError so callers can treat them as bad input.
"""


class IndicatorError(ValueError):
    """Base class for indicator engine errors"""


class EmptySeries(IndicatorError):
    """Indicator function called with an empty close series"""

    def __init__(self, indicator: str):
        super().__init__(f"{indicator}: Empty close series")
        self.indicator = indicator


class InsufficientData(IndicatorError):
    """No price bars available to compute a snapshot"""

    def __init__(self, symbol: str):
        super().__init__(f"No price bars available for {symbol}")
        self.symbol = symbol

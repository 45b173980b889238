"""
Market data models

Pydantic models for market data structures:
- Timeframe: Supported history windows (1D ... 1Y)
- PriceBar: One daily OHLCV bar
- Quote: Latest price snapshot for a symbol
"""

import datetime as dt
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Timeframe(str, Enum):
    """History window requested from the market data provider"""

    ONE_DAY = "1D"
    ONE_WEEK = "1W"
    ONE_MONTH = "1M"
    THREE_MONTHS = "3M"
    SIX_MONTHS = "6M"
    ONE_YEAR = "1Y"

    @property
    def days(self) -> int:
        """Calendar days of lookback for this window"""
        return _TIMEFRAME_DAYS[self]


_TIMEFRAME_DAYS = {
    Timeframe.ONE_DAY: 1,
    Timeframe.ONE_WEEK: 7,
    Timeframe.ONE_MONTH: 30,
    Timeframe.THREE_MONTHS: 90,
    Timeframe.SIX_MONTHS: 180,
    Timeframe.ONE_YEAR: 365,
}


class PriceBar(BaseModel):
    """
    One trading day of OHLCV data

    Immutable once produced by a market data provider.
    A series of bars is ordered ascending by date with no duplicates
    (see core.validators.market_data.validate_bar_series).
    """

    model_config = ConfigDict(frozen=True)

    date: dt.date = Field(description="Trading day")
    open: float = Field(ge=0, description="Opening price")
    high: float = Field(ge=0, description="Highest price of the day")
    low: float = Field(ge=0, description="Lowest price of the day")
    close: float = Field(ge=0, description="Closing price")
    volume: float = Field(ge=0, description="Shares traded")

    def to_dict(self) -> dict:
        """Convert to JSON-friendly dictionary"""
        return {
            "date": self.date.isoformat(),
            "open": self.open,
            "high": self.high,
            "low": self.low,
            "close": self.close,
            "volume": self.volume,
        }


class Quote(BaseModel):
    """
    Latest price snapshot

    Produced by BaseMarketDataProvider.fetch_quote()
    """

    model_config = ConfigDict(frozen=True)

    symbol: str = Field(description="Equity symbol (RELIANCE, AAPL)")
    price: float = Field(ge=0, description="Last traded price")
    change: float = Field(default=0.0, description="Absolute change vs previous close")
    change_percent: float = Field(default=0.0, description="Percent change vs previous close")
    volume: float = Field(default=0.0, ge=0, description="Session volume")
    previous_close: float | None = Field(default=None, description="Previous session close")
    open_price: float | None = Field(default=None, description="Session open")
    high_52w: float | None = Field(default=None, description="52-week high")
    low_52w: float | None = Field(default=None, description="52-week low")
    market_cap: float | None = Field(default=None, description="Market capitalisation")
    last_updated: dt.datetime = Field(description="When the quote was fetched (UTC)")

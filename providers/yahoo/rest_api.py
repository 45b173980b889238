"""
Yahoo Finance client for daily bars and quotes.

Uses the yfinance library. yfinance is blocking, so every call runs in a
worker thread to keep the event loop free.
"""

import asyncio
import logging
from collections.abc import Callable
from datetime import UTC, date, datetime, timedelta
from typing import Any

import pandas as pd
import yfinance as yf
from pydantic import ValidationError

from config.settings import get_settings
from core.interfaces.market_data import BaseMarketDataProvider
from core.models.market_data import PriceBar, Quote, Timeframe
from core.validators.market_data import validate_bar

logger = logging.getLogger(__name__)


class YahooFinanceProvider(BaseMarketDataProvider):
    """
    Yahoo Finance market data provider

    Features:
    - Exchange suffix (".NS" for NSE) appended from settings
    - Bounded retries with exponential backoff
    - Never raises: returns [] / None once retries are exhausted
    """

    def __init__(self):
        super().__init__(provider_name="yahoo")
        settings = get_settings()

        self.symbol_suffix = settings.MARKET_DATA_SYMBOL_SUFFIX
        self.max_retries = max(1, settings.MARKET_DATA_MAX_RETRIES)
        self.retry_backoff_seconds = settings.MARKET_DATA_RETRY_BACKOFF_SECONDS
        logger.info(f"YahooFinanceProvider initialized (suffix={self.symbol_suffix!r})")

    def to_ticker(self, symbol: str) -> str:
        """Map a dashboard symbol to a Yahoo ticker ("TCS" → "TCS.NS")"""
        if self.symbol_suffix and not symbol.endswith(self.symbol_suffix):
            return f"{symbol}{self.symbol_suffix}"
        return symbol

    async def fetch_historical_bars(self, symbol: str, timeframe: Timeframe) -> list[PriceBar]:
        """
        Fetch daily bars for the timeframe

        Args:
            symbol: Normalized symbol (e.g., "RELIANCE")
            timeframe: Lookback window

        Returns:
            Bars ordered oldest first, [] on failure
        """
        ticker = self.to_ticker(symbol)
        start = (datetime.now(UTC) - timedelta(days=timeframe.days)).date()

        history = await self._with_retries(
            f"history for {ticker}", self._download_history, ticker, start
        )
        if history is None:
            return []

        bars = self._to_bars(history, ticker)
        logger.info(
            f"[{self.provider_name}] Fetched {len(bars)} bars for {ticker} {timeframe.value}"
        )
        return bars

    async def fetch_quote(self, symbol: str) -> Quote | None:
        """Fetch the latest quote, None on failure"""
        ticker = self.to_ticker(symbol)

        info = await self._with_retries(f"quote for {ticker}", self._download_quote, ticker)
        if not info or info.get("last_price") is None:
            return None

        price = float(info["last_price"])
        previous_close = _optional_float(info.get("previous_close"))
        change = price - previous_close if previous_close else 0.0
        change_percent = change / previous_close * 100 if previous_close else 0.0

        return Quote(
            symbol=symbol,
            price=price,
            change=change,
            change_percent=change_percent,
            volume=_optional_float(info.get("last_volume")) or 0.0,
            previous_close=previous_close,
            open_price=_optional_float(info.get("open")),
            high_52w=_optional_float(info.get("year_high")),
            low_52w=_optional_float(info.get("year_low")),
            market_cap=_optional_float(info.get("market_cap")),
            last_updated=datetime.now(UTC),
        )

    @staticmethod
    def _download_history(ticker: str, start: date) -> pd.DataFrame:
        return yf.Ticker(ticker).history(
            start=start.isoformat(),
            interval="1d",
            auto_adjust=False,
            actions=False,
        )

    @staticmethod
    def _download_quote(ticker: str) -> dict[str, Any]:
        info = yf.Ticker(ticker).fast_info
        return {
            "last_price": info.last_price,
            "previous_close": info.previous_close,
            "open": info.open,
            "year_high": info.year_high,
            "year_low": info.year_low,
            "market_cap": info.market_cap,
            "last_volume": info.last_volume,
        }

    async def _with_retries(self, description: str, func: Callable, *args) -> Any | None:
        """Run a blocking yfinance call in a thread, retrying on errors"""
        for attempt in range(1, self.max_retries + 1):
            try:
                return await asyncio.to_thread(func, *args)
            except Exception as e:
                logger.warning(
                    f"✗ [{self.provider_name}] {description} failed "
                    f"(attempt {attempt}/{self.max_retries}): {e}"
                )
                if attempt < self.max_retries:
                    await asyncio.sleep(self.retry_backoff_seconds * 2 ** (attempt - 1))

        logger.error(f"✗ [{self.provider_name}] Giving up on {description}")
        return None

    @staticmethod
    def _to_bars(history: pd.DataFrame, ticker: str) -> list[PriceBar]:
        """
        Convert a yfinance history frame to PriceBars

        Drops rows with missing OHLC, keeps the last row per date and
        skips rows that fail validation.
        """
        if history is None or history.empty:
            return []

        frame = history.sort_index().dropna(subset=["Open", "High", "Low", "Close"])

        bars_by_date: dict[date, PriceBar] = {}
        for timestamp, row in frame.iterrows():
            volume = row.get("Volume", 0.0)
            try:
                bar = PriceBar(
                    date=pd.Timestamp(timestamp).date(),
                    open=float(row["Open"]),
                    high=float(row["High"]),
                    low=float(row["Low"]),
                    close=float(row["Close"]),
                    volume=0.0 if pd.isna(volume) else float(volume),
                )
            except ValidationError as e:
                logger.warning(f"Skipping malformed bar for {ticker} at {timestamp}: {e}")
                continue

            is_valid, error = validate_bar(bar)
            if not is_valid:
                logger.warning(f"Skipping bar for {ticker}: {error}")
                continue

            bars_by_date[bar.date] = bar

        return [bars_by_date[day] for day in sorted(bars_by_date)]


def _optional_float(value: Any) -> float | None:
    if value is None or pd.isna(value):
        return None
    return float(value)

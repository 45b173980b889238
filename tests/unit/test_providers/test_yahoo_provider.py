"""
Unit tests for YahooFinanceProvider

Tests bar conversion, retries and quotes using a mocked yfinance.Ticker.
"""

from datetime import date
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import numpy as np
import pandas as pd
import pytest

from core.models.market_data import Timeframe
from providers.yahoo.rest_api import YahooFinanceProvider


def create_history_frame() -> pd.DataFrame:
    """
    yfinance-style daily history, deliberately messy:
    out of order, one NaN row, one inconsistent row, a repeated date
    """
    index = pd.DatetimeIndex(
        [
            "2024-01-03 00:00",
            "2024-01-02 00:00",
            "2024-01-04 00:00",
            "2024-01-05 00:00",
            "2024-01-05 15:30",
            "2024-01-08 00:00",
        ]
    ).tz_localize("Asia/Kolkata")

    return pd.DataFrame(
        {
            "Open": [101.0, 100.0, np.nan, 103.0, 104.0, 110.0],
            "High": [103.0, 102.0, 105.0, 104.0, 106.0, 109.0],
            "Low": [100.0, 99.0, 100.0, 102.0, 103.0, 108.0],
            "Close": [102.0, 101.0, 104.0, 103.5, 105.0, 110.0],
            "Volume": [1e6, np.nan, 1e6, 2e6, 3e6, 1e6],
        },
        index=index,
    )


@pytest.fixture
def mock_ticker():
    """Mock yfinance.Ticker"""
    with patch("providers.yahoo.rest_api.yf.Ticker") as mock:
        ticker = MagicMock()
        mock.return_value = ticker
        yield mock, ticker


@pytest.fixture
def provider():
    provider = YahooFinanceProvider()
    provider.symbol_suffix = ".NS"
    provider.max_retries = 3
    provider.retry_backoff_seconds = 0
    return provider


@pytest.mark.unit
class TestYahooFinanceProvider:
    """Test YahooFinanceProvider with mocked yfinance responses"""

    def test_to_ticker_appends_suffix_once(self, provider):
        assert provider.to_ticker("TCS") == "TCS.NS"
        assert provider.to_ticker("TCS.NS") == "TCS.NS"

    def test_to_ticker_without_suffix(self, provider):
        provider.symbol_suffix = ""

        assert provider.to_ticker("AAPL") == "AAPL"

    @pytest.mark.asyncio
    async def test_fetch_historical_bars(self, mock_ticker, provider):
        ticker_cls, ticker = mock_ticker
        ticker.history.return_value = create_history_frame()

        bars = await provider.fetch_historical_bars("TCS", Timeframe.ONE_MONTH)

        ticker_cls.assert_called_once_with("TCS.NS")
        assert ticker.history.call_args.kwargs["interval"] == "1d"
        assert [bar.date for bar in bars] == [date(2024, 1, 2), date(2024, 1, 3), date(2024, 1, 5)]
        assert [bar.close for bar in bars] == [101.0, 102.0, 105.0]

    @pytest.mark.asyncio
    async def test_missing_volume_becomes_zero(self, mock_ticker, provider):
        _, ticker = mock_ticker
        ticker.history.return_value = create_history_frame()

        bars = await provider.fetch_historical_bars("TCS", Timeframe.ONE_MONTH)

        assert bars[0].volume == 0.0

    @pytest.mark.asyncio
    async def test_empty_history(self, mock_ticker, provider):
        _, ticker = mock_ticker
        ticker.history.return_value = pd.DataFrame()

        assert await provider.fetch_historical_bars("TCS", Timeframe.ONE_WEEK) == []

    @pytest.mark.asyncio
    async def test_retries_then_succeeds(self, mock_ticker, provider):
        _, ticker = mock_ticker
        ticker.history.side_effect = [ConnectionError("timeout"), create_history_frame()]

        bars = await provider.fetch_historical_bars("TCS", Timeframe.ONE_MONTH)

        assert len(bars) == 3
        assert ticker.history.call_count == 2

    @pytest.mark.asyncio
    async def test_gives_up_after_max_retries(self, mock_ticker, provider):
        _, ticker = mock_ticker
        ticker.history.side_effect = ConnectionError("down")

        bars = await provider.fetch_historical_bars("TCS", Timeframe.ONE_MONTH)

        assert bars == []
        assert ticker.history.call_count == 3

    @pytest.mark.asyncio
    async def test_fetch_quote(self, mock_ticker, provider):
        _, ticker = mock_ticker
        ticker.fast_info = SimpleNamespace(
            last_price=1750.0,
            previous_close=1700.0,
            open=1710.0,
            year_high=1900.0,
            year_low=1400.0,
            market_cap=7.2e12,
            last_volume=5e6,
        )

        quote = await provider.fetch_quote("INFY")

        assert quote.symbol == "INFY"
        assert quote.price == 1750.0
        assert quote.change == pytest.approx(50.0)
        assert quote.change_percent == pytest.approx(50.0 / 1700.0 * 100)
        assert quote.high_52w == 1900.0
        assert quote.volume == 5e6

    @pytest.mark.asyncio
    async def test_fetch_quote_without_price(self, mock_ticker, provider):
        _, ticker = mock_ticker
        ticker.fast_info = SimpleNamespace(
            last_price=None,
            previous_close=None,
            open=None,
            year_high=None,
            year_low=None,
            market_cap=None,
            last_volume=None,
        )

        assert await provider.fetch_quote("INFY") is None

    @pytest.mark.asyncio
    async def test_fetch_quote_failure_returns_none(self, mock_ticker, provider):
        ticker_cls, _ = mock_ticker
        ticker_cls.side_effect = ConnectionError("down")

        assert await provider.fetch_quote("INFY") is None
        assert ticker_cls.call_count == 3

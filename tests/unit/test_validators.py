"""
Unit tests for market data validators
"""

from datetime import date

import pytest

from core.models.market_data import PriceBar
from core.validators import normalize_symbol, validate_bar, validate_bar_series


@pytest.mark.unit
class TestNormalizeSymbol:
    @pytest.mark.parametrize(
        "raw, expected",
        [(" infy ", "INFY"), ("reliance", "RELIANCE"), ("brk.b", "BRK.B"), ("bajaj-auto", "BAJAJ-AUTO")],
    )
    def test_normalizes(self, raw, expected):
        assert normalize_symbol(raw) == expected

    @pytest.mark.parametrize("raw", ["", "   ", "TCS;DROP", "A" * 21, "INFY/NS"])
    def test_invalid_symbols_rejected(self, raw):
        with pytest.raises(ValueError, match="Invalid stock symbol"):
            normalize_symbol(raw)


@pytest.mark.unit
class TestValidateBar:
    def test_valid_bar(self):
        bar = PriceBar(date=date(2024, 1, 2), open=100, high=105, low=99, close=104, volume=0)

        assert validate_bar(bar) == (True, None)

    def test_high_below_close(self):
        bar = PriceBar(date=date(2024, 1, 2), open=100, high=101, low=99, close=104, volume=0)

        is_valid, error = validate_bar(bar)

        assert not is_valid
        assert "Inconsistent OHLC on 2024-01-02" in error

    def test_low_above_open(self):
        bar = PriceBar(date=date(2024, 1, 2), open=100, high=110, low=101, close=104, volume=0)

        assert validate_bar(bar)[0] is False


@pytest.mark.unit
class TestValidateBarSeries:
    def test_ascending_series_valid(self, make_bars):
        assert validate_bar_series(make_bars([1.0, 2.0, 3.0])) == (True, None)

    def test_empty_and_single_valid(self, make_bars):
        assert validate_bar_series([]) == (True, None)
        assert validate_bar_series(make_bars([1.0])) == (True, None)

    def test_descending_series_invalid(self, make_bars):
        bars = list(reversed(make_bars([1.0, 2.0, 3.0])))

        is_valid, error = validate_bar_series(bars)

        assert not is_valid
        assert "not strictly ascending" in error

    def test_duplicate_dates_invalid(self, make_bars):
        bars = make_bars([1.0, 2.0])

        assert validate_bar_series([bars[0], bars[0], bars[1]])[0] is False

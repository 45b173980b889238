"""
Unit tests for core models (Pydantic)

Tests PriceBar, Quote, IndicatorSnapshot and cache models
"""

from datetime import UTC, date, datetime

import pytest
from pydantic import ValidationError

from core.models import (
    BollingerBandsResult,
    CacheEntry,
    CacheKey,
    EntityKind,
    IndicatorSnapshot,
    MACDResult,
    MovingAverages,
    PriceBar,
    Quote,
    Timeframe,
)


def create_snapshot(**overrides) -> IndicatorSnapshot:
    """Helper to create a valid snapshot"""
    fields = {
        "symbol": "TCS",
        "rsi": 61.5,
        "macd": MACDResult(value=12.0, signal=9.6, histogram=2.4),
        "moving_averages": MovingAverages(ma20=4150.0, ma50=4080.0, ma200=3900.0),
        "bollinger_bands": BollingerBandsResult(upper=4300.0, middle=4150.0, lower=4000.0),
        "computed_at": datetime(2024, 1, 2, 9, 15, tzinfo=UTC),
    }
    fields.update(overrides)
    return IndicatorSnapshot(**fields)


@pytest.mark.unit
class TestPriceBarModel:
    """Test PriceBar validation and serialization"""

    def test_valid_bar(self):
        bar = PriceBar(date=date(2024, 1, 2), open=100, high=105, low=99, close=104, volume=1e6)

        assert bar.close == 104.0
        assert bar.to_dict() == {
            "date": "2024-01-02",
            "open": 100.0,
            "high": 105.0,
            "low": 99.0,
            "close": 104.0,
            "volume": 1e6,
        }

    def test_negative_price_rejected(self):
        with pytest.raises(ValidationError):
            PriceBar(date=date(2024, 1, 2), open=100, high=105, low=-1, close=104, volume=0)

    def test_bar_is_immutable(self):
        bar = PriceBar(date=date(2024, 1, 2), open=1, high=1, low=1, close=1, volume=0)

        with pytest.raises(ValidationError):
            bar.close = 2.0


@pytest.mark.unit
class TestTimeframe:
    @pytest.mark.parametrize(
        "value, days",
        [("1D", 1), ("1W", 7), ("1M", 30), ("3M", 90), ("6M", 180), ("1Y", 365)],
    )
    def test_days(self, value, days):
        assert Timeframe(value).days == days

    def test_unknown_timeframe(self):
        with pytest.raises(ValueError):
            Timeframe("5Y")


@pytest.mark.unit
class TestQuoteModel:
    def test_defaults(self):
        quote = Quote(symbol="INFY", price=1750.0, last_updated=datetime(2024, 1, 2, tzinfo=UTC))

        assert quote.change == 0.0
        assert quote.previous_close is None


@pytest.mark.unit
class TestIndicatorSnapshot:
    """Test snapshot validation and wire format"""

    def test_to_dict_uses_camel_case(self):
        data = create_snapshot().to_dict()

        assert set(data) == {
            "symbol",
            "rsi",
            "macd",
            "movingAverages",
            "bollingerBands",
            "computedAt",
        }
        assert data["movingAverages"] == {"ma20": 4150.0, "ma50": 4080.0, "ma200": 3900.0}
        assert data["macd"] == {"value": 12.0, "signal": 9.6, "histogram": 2.4}
        assert data["computedAt"].startswith("2024-01-02T09:15:00")

    def test_round_trip_from_wire_format(self):
        snapshot = create_snapshot()

        assert IndicatorSnapshot.model_validate(snapshot.to_dict()) == snapshot

    def test_accepts_snake_case_names(self):
        snapshot = create_snapshot()

        assert IndicatorSnapshot.model_validate(snapshot.model_dump()) == snapshot

    @pytest.mark.parametrize("rsi", [-0.1, 100.1])
    def test_rsi_out_of_range_rejected(self, rsi):
        with pytest.raises(ValidationError):
            create_snapshot(rsi=rsi)

    def test_bands_out_of_order_rejected(self):
        with pytest.raises(ValidationError, match="out of order"):
            BollingerBandsResult(upper=90.0, middle=100.0, lower=80.0)

    def test_flat_bands_allowed(self):
        bands = BollingerBandsResult(upper=100.0, middle=100.0, lower=100.0)

        assert bands.lower == bands.middle == bands.upper


@pytest.mark.unit
class TestCacheModels:
    """Test CacheKey and CacheEntry"""

    def test_key_string_form(self):
        assert str(CacheKey(kind=EntityKind.INDICATORS, symbol="tcs")) == "indicators:TCS"
        assert (
            str(CacheKey(kind=EntityKind.HISTORY, symbol=" infy ", sub_key="1M"))
            == "history:INFY:1M"
        )

    def test_keys_are_hashable_and_equal_after_normalization(self):
        a = CacheKey(kind=EntityKind.QUOTE, symbol="tcs")
        b = CacheKey(kind="quote", symbol="TCS")

        assert a == b
        assert hash(a) == hash(b)

    def test_entry_holds_any_value(self):
        stored_at = datetime(2024, 1, 2, tzinfo=UTC)
        entry = CacheEntry(value=[1, 2, 3], stored_at=stored_at)

        assert entry.value == [1, 2, 3]
        assert entry.stored_at == stored_at

"""
Pytest configuration for test suite

Markers:
- unit: Fast unit tests (no external dependencies)
- integration: Integration tests (requires Redis)
- network: Tests calling Yahoo Finance (requires internet)

Shared fixtures:
- fake_clock: Controllable clock for cache staleness
- make_bars: Build ascending daily PriceBars from a list of closes
"""

from datetime import UTC, date, datetime, timedelta

import pytest

from core.models.market_data import PriceBar


def pytest_configure(config):
    """Register custom markers"""
    config.addinivalue_line("markers", "unit: Fast unit tests (no dependencies)")
    config.addinivalue_line("markers", "integration: Integration tests (requires Redis)")
    config.addinivalue_line("markers", "network: Tests calling Yahoo Finance (requires internet)")


class FakeClock:
    """Clock that only moves when told to"""

    def __init__(self, start: datetime | None = None):
        self.now = start or datetime(2024, 1, 2, 9, 15, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def make_bars():
    """Factory: closes → ascending daily bars starting 2024-01-01"""

    def _make(closes, start: date = date(2024, 1, 1)) -> list[PriceBar]:
        return [
            PriceBar(
                date=start + timedelta(days=i),
                open=close,
                high=close + 1,
                low=max(0.0, close - 1),
                close=close,
                volume=1_000_000,
            )
            for i, close in enumerate(closes)
        ]

    return _make

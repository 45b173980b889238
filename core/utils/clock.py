"""
Clock helpers

Caches and the aggregator take a `Clock` so tests can drive time.
"""

from collections.abc import Callable
from datetime import UTC, datetime

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Current time as an aware UTC datetime"""
    return datetime.now(UTC)

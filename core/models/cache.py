"""
Cache models

- EntityKind: What a cache entry holds (quote, history, indicators, ...)
- CacheKey: Compound key (kind + symbol + optional sub-key)
- CacheEntry: Stored value plus the time it was stored
"""

from datetime import datetime
from enum import Enum
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, field_validator

T = TypeVar("T")


class EntityKind(str, Enum):
    """Kinds of cached data, each with its own TTL"""

    QUOTE = "quote"
    HISTORY = "history"
    INDICATORS = "indicators"
    NEWS = "news"
    RECOMMENDATION = "recommendation"


class CacheKey(BaseModel):
    """
    Compound cache key

    Renders as "kind:SYMBOL" or "kind:SYMBOL:sub_key" for string-keyed
    backends such as Redis.

    Example:
        >>> str(CacheKey(kind=EntityKind.HISTORY, symbol="tcs", sub_key="1M"))
        'history:TCS:1M'
    """

    model_config = ConfigDict(frozen=True)

    kind: EntityKind
    symbol: str
    sub_key: str | None = None

    @field_validator("symbol")
    @classmethod
    def normalize_symbol(cls, v: str) -> str:
        return v.strip().upper()

    def __str__(self) -> str:
        parts = [self.kind.value, self.symbol]
        if self.sub_key:
            parts.append(self.sub_key)
        return ":".join(parts)


class CacheEntry(BaseModel, Generic[T]):
    """
    Cached value with its storage timestamp

    Owned by the cache; replaced on every write, never mutated in place.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    value: T
    stored_at: datetime

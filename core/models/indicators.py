"""
Indicator snapshot models

IndicatorSnapshot is what the refresher caches per symbol and what the
route layer serves. Field names are snake_case in Python and camelCase
on the wire (movingAverages, bollingerBands, computedAt).
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

_SNAPSHOT_CONFIG = ConfigDict(
    frozen=True,
    alias_generator=to_camel,
    populate_by_name=True,
)


class MACDResult(BaseModel):
    """MACD line with its (simplified) signal and histogram"""

    model_config = _SNAPSHOT_CONFIG

    value: float
    signal: float
    histogram: float


class MovingAverages(BaseModel):
    """Simple moving averages over the trailing 20/50/200 closes"""

    model_config = _SNAPSHOT_CONFIG

    ma20: float
    ma50: float
    ma200: float


class BollingerBandsResult(BaseModel):
    """Volatility envelope around the 20-period SMA"""

    model_config = _SNAPSHOT_CONFIG

    upper: float
    middle: float
    lower: float

    @model_validator(mode="after")
    def bands_ordered(self):
        if not self.lower <= self.middle <= self.upper:
            raise ValueError(
                f"Bollinger bands out of order: "
                f"lower={self.lower}, middle={self.middle}, upper={self.upper}"
            )
        return self


class IndicatorSnapshot(BaseModel):
    """
    All indicators for one symbol at one point in time

    Derived entirely from a PriceBar series. Superseded, never merged,
    by the next refresh.
    """

    model_config = _SNAPSHOT_CONFIG

    symbol: str
    rsi: float = Field(ge=0, le=100)
    macd: MACDResult
    moving_averages: MovingAverages
    bollinger_bands: BollingerBandsResult
    computed_at: datetime

    def to_dict(self) -> dict:
        """Serialize with wire (camelCase) field names"""
        return self.model_dump(mode="json", by_alias=True)

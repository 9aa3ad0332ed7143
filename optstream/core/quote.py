# optstream/core/quote.py
from dataclasses import dataclass
from datetime import datetime, timezone
from numbers import Real
from typing import Any, Mapping, Protocol, Union

from dateutil import parser as date_parser


class Priced(Protocol):
    """Anything exposing a price can drive the price streams."""
    price: float


PriceLike = Union[float, Priced]


def price_of(item: PriceLike) -> float:
    """Price of a raw number or of a Priced record."""
    if isinstance(item, Real):
        return float(item)
    return float(item.price)


def to_epoch_seconds(value: Any) -> float:
    """Numbers pass through; datetimes and ISO-8601 strings are converted."""
    if isinstance(value, Real):
        return float(value)
    if isinstance(value, str):
        value = date_parser.isoparse(value)
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.timestamp()
    raise TypeError(f"Unsupported timestamp type: {type(value).__name__}")


@dataclass
class Candle:
    open: float = 0.0
    high: float = 0.0
    low: float = 0.0
    close: float = 0.0
    volume: float = 0.0


@dataclass(frozen=True)
class Quote:
    timestamp: float  # seconds since the Unix epoch
    price: float
    volume: float = 0.0

    @classmethod
    def from_mapping(cls, record: Mapping[str, Any]) -> "Quote":
        """Builds a quote from a feed record (timestamp, price, optional volume)."""
        return cls(
            timestamp=to_epoch_seconds(record["timestamp"]),
            price=float(record["price"]),
            volume=float(record.get("volume") or 0.0),
        )

    def new_candle(self) -> Candle:
        """Opens a candle at this quote; close stays unset (0.0)."""
        return Candle(open=self.price, high=self.price, low=self.price, volume=self.volume)

    def update_candle(self, candle: Candle) -> None:
        candle.high = max(candle.high, self.price)
        candle.low = min(candle.low, self.price)
        candle.volume += self.volume

    def close_candle(self, candle: Candle) -> None:
        candle.close = self.price

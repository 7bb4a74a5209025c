from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


@dataclass(frozen=True)
class Instrument:
    """
    Instrument = a tradable thing we track quotes for.

    isin: instrument identifier (e.g., DE000BASF111)
    description: free text from the instrument stream
    """
    isin: str
    description: str


class InstrumentEventType(str, Enum):
    ADD = "ADD"
    DELETE = "DELETE"


@dataclass(frozen=True)
class InstrumentEvent:
    type: InstrumentEventType
    data: Instrument


@dataclass(frozen=True)
class Quote:
    """A single price update for one instrument."""
    isin: str
    price: float


@dataclass(frozen=True)
class TimestampedQuote:
    """
    Quote plus the instant we received it.

    ts is assigned by the store's clock on insert, not by the producer.
    """
    quote: Quote
    ts: datetime

    @property
    def price(self) -> float:
        return self.quote.price


@dataclass(frozen=True)
class Candlestick:
    """
    OHLC summary for one bucket [open_timestamp, close_timestamp).

    Prices are -1.0 when no quote has been seen yet (see NO_DATA_PRICE).
    """
    open_timestamp: datetime
    close_timestamp: datetime
    open_price: float
    high_price: float
    low_price: float
    closing_price: float

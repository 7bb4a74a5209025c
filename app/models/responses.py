from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel

from app.models.market import Candlestick


class CandlestickOut(BaseModel):
    """
    Wire shape of one candlestick in GET /candlesticks.

    Keys are camelCase because that is what existing chart clients read.
    Prices are -1.0 for buckets before the first quote.
    """

    openTimestamp: datetime
    closeTimestamp: datetime
    openPrice: float
    highPrice: float
    lowPrice: float
    closingPrice: float

    @classmethod
    def from_candlestick(cls, c: Candlestick) -> "CandlestickOut":
        return cls(
            openTimestamp=c.open_timestamp,
            closeTimestamp=c.close_timestamp,
            openPrice=c.open_price,
            highPrice=c.high_price,
            lowPrice=c.low_price,
            closingPrice=c.closing_price,
        )

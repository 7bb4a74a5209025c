from __future__ import annotations

from bisect import bisect_right
from datetime import datetime, timedelta
from typing import Iterable, List

from app.models.market import Candlestick, TimestampedQuote

# Price reported for every OHLC field while no quote has been seen yet.
NO_DATA_PRICE = -1.0


def bucket_boundaries(now: datetime, window: timedelta, interval: timedelta) -> List[datetime]:
    """
    Boundaries for [now - window, now], stepping by `interval`.

    The last boundary is always `now`, even if the steps do not land on it.
    N boundaries define N-1 buckets.
    """
    boundaries: List[datetime] = []
    ts = now - window
    while ts <= now:
        boundaries.append(ts)
        ts += interval

    if not boundaries or boundaries[-1] != now:
        boundaries.append(now)
    return boundaries


def assign_to_buckets(
    quotes: Iterable[TimestampedQuote],
    boundaries: List[datetime],
) -> List[List[TimestampedQuote]]:
    """
    Put each quote into the bucket starting at the greatest boundary <= quote.ts.

    Quotes before the first boundary, or at/after the last one, are dropped.
    Input order is kept inside each bucket.
    """
    buckets: List[List[TimestampedQuote]] = [[] for _ in range(len(boundaries) - 1)]

    for q in quotes:
        idx = bisect_right(boundaries, q.ts) - 1
        if 0 <= idx < len(buckets):
            buckets[idx].append(q)

    return buckets


def _candle_from_quotes(
    quotes: List[TimestampedQuote],
    open_ts: datetime,
    close_ts: datetime,
) -> Candlestick:
    prices = [q.price for q in quotes]
    return Candlestick(
        open_timestamp=open_ts,
        close_timestamp=close_ts,
        open_price=prices[0],
        high_price=max(prices),
        low_price=min(prices),
        closing_price=prices[-1],
    )


def build_candlesticks(
    quotes: Iterable[TimestampedQuote],
    now: datetime,
    window: timedelta,
    interval: timedelta,
) -> List[Candlestick]:
    """
    Summarize quotes into one candlestick per bucket of [now - window, now].

    - no quotes at all -> []
    - empty first bucket -> NO_DATA_PRICE for all prices
    - empty later bucket -> prices carried forward from the previous candlestick
    """
    quotes = list(quotes)
    if not quotes:
        return []

    boundaries = bucket_boundaries(now, window, interval)
    buckets = assign_to_buckets(quotes, boundaries)

    result: List[Candlestick] = []
    for i, bucket in enumerate(buckets):
        open_ts = boundaries[i]
        close_ts = boundaries[i + 1]

        if bucket:
            result.append(_candle_from_quotes(bucket, open_ts, close_ts))
            continue

        if i == 0:
            result.append(
                Candlestick(
                    open_timestamp=open_ts,
                    close_timestamp=close_ts,
                    open_price=NO_DATA_PRICE,
                    high_price=NO_DATA_PRICE,
                    low_price=NO_DATA_PRICE,
                    closing_price=NO_DATA_PRICE,
                )
            )
            continue

        prev = result[-1]
        result.append(
            Candlestick(
                open_timestamp=open_ts,
                close_timestamp=close_ts,
                open_price=prev.open_price,
                high_price=prev.high_price,
                low_price=prev.low_price,
                closing_price=prev.closing_price,
            )
        )

    return result

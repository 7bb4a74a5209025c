from __future__ import annotations

import os
import random
import sys
from datetime import datetime, timedelta, timezone

# Add repo root to Python import path so `import app...` works
sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))

from app.candles.clock import Clock
from app.candles.store import CandlestickStore
from app.models.market import Instrument, Quote


class SteppingClock(Clock):
    """Fake clock we move forward by hand."""

    def __init__(self, start: datetime):
        self.current = start

    def now(self) -> datetime:
        return self.current


def run(isin: str = "DE000BASF111", seconds: int = 600) -> None:
    """
    Generates fake quotes for `seconds` simulated seconds and prints the
    resulting candlesticks (10 minute window, 1 minute candles).

    - We simulate roughly one quote every 1-5 seconds.
    - Price does a random walk (moves up/down a bit each quote).
    """
    clock = SteppingClock(datetime.now(timezone.utc).replace(second=0, microsecond=0))
    store = CandlestickStore(
        window=timedelta(minutes=10),
        interval=timedelta(minutes=1),
        clock=clock,
    )
    store.add_instrument(Instrument(isin=isin, description="simulated"))

    price = 100.0
    elapsed = 0

    print(f"Simulating quotes for {isin} for {seconds} seconds...\n")

    while elapsed < seconds:
        price += random.uniform(-0.2, 0.2)
        store.add_quote(Quote(isin=isin, price=round(price, 2)))

        step = random.randint(1, 5)
        clock.current += timedelta(seconds=step)
        elapsed += step

    for c in store.get_candlesticks(isin):
        print(
            f"{c.open_timestamp.isoformat()} -> {c.close_timestamp.isoformat()} "
            f"O={c.open_price} H={c.high_price} L={c.low_price} C={c.closing_price}"
        )


if __name__ == "__main__":
    run()

from __future__ import annotations

import threading
from datetime import timedelta
from typing import Dict, List, Optional

from app.candles.aggregator import build_candlesticks
from app.candles.clock import Clock, SystemClock
from app.candles.window import QuoteWindow
from app.models.market import Candlestick, Instrument, Quote, TimestampedQuote


class CandlestickStore:
    """
    In-memory quote windows per instrument + candlestick queries.

    windows[isin] -> QuoteWindow (quotes within `window` of the newest one)

    - add_instrument / delete_instrument: create (or reset) / drop a window
    - add_quote: stamps the quote with clock.now() and appends it
      (unknown ISINs get a window lazily)
    - get_candlesticks: buckets the window against clock.now()

    Every public method holds one lock, so the ingest loops (event loop) and
    the API routes (threadpool) never see a half-updated map.
    """

    def __init__(
        self,
        window: timedelta,
        interval: timedelta,
        clock: Optional[Clock] = None,
    ):
        if window <= timedelta(0):
            raise ValueError(f"window must be positive, got {window}")
        if interval <= timedelta(0):
            raise ValueError(f"interval must be positive, got {interval}")
        if interval > window:
            raise ValueError(f"interval ({interval}) must not exceed window ({window})")

        self.window = window
        self.interval = interval
        self.clock = clock or SystemClock()
        self._windows: Dict[str, QuoteWindow] = {}
        self._lock = threading.Lock()

    def _new_window(self) -> QuoteWindow:
        return QuoteWindow(self.window)

    def add_instrument(self, instrument: Instrument) -> None:
        """Start tracking an instrument. Re-adding resets its quote history."""
        with self._lock:
            self._windows[instrument.isin] = self._new_window()

    def delete_instrument(self, instrument: Instrument) -> None:
        with self._lock:
            self._windows.pop(instrument.isin, None)

    def add_quote(self, quote: Quote) -> None:
        with self._lock:
            window = self._windows.get(quote.isin)
            if window is None:
                window = self._new_window()
                self._windows[quote.isin] = window

            window.append(TimestampedQuote(quote=quote, ts=self.clock.now()))

    def get_candlesticks(self, isin: str) -> List[Candlestick]:
        """
        Candlesticks for the last `window`, one per `interval`.

        Unknown or quote-less ISINs return [] (not an error).
        """
        with self._lock:
            window = self._windows.get(isin)
            if not window:
                return []

            # One "now" per pass: boundaries and bucket assignment must agree.
            now = self.clock.now()
            return build_candlesticks(window, now, self.window, self.interval)

    def instruments(self) -> List[str]:
        """ISINs that currently own a quote window."""
        with self._lock:
            return sorted(self._windows)

import asyncio
import unittest
from datetime import datetime, timedelta, timezone

from clocks import ScriptedClock

from app.candles.store import CandlestickStore
from app.jobs.ws_ingest import (
    instrument_ingest_loop,
    parse_instrument_event,
    parse_quote,
    quote_ingest_loop,
)
from app.models.market import InstrumentEventType
from app.providers.base import EventStreamProvider
from app.providers.partner import decode_frame

NOW = datetime(2024, 1, 2, 12, 0, 0, tzinfo=timezone.utc)


class FakeProvider(EventStreamProvider):
    """Replays canned messages, then the stream ends."""

    def __init__(self, instruments=None, quotes=None):
        self.instruments = instruments or []
        self.quotes = quotes or []

    async def stream_instruments(self):
        for msg in self.instruments:
            yield msg

    async def stream_quotes(self):
        for msg in self.quotes:
            yield msg


def make_store() -> CandlestickStore:
    return CandlestickStore(
        window=timedelta(seconds=9),
        interval=timedelta(seconds=3),
        clock=ScriptedClock([NOW - timedelta(seconds=2)] * 3 + [NOW]),
    )


class TestParsing(unittest.TestCase):
    def test_parse_instrument_event(self):
        event = parse_instrument_event(
            {"type": "ADD", "data": {"isin": "DE1", "description": "something"}}
        )

        self.assertEqual(event.type, InstrumentEventType.ADD)
        self.assertEqual(event.data.isin, "DE1")
        self.assertEqual(event.data.description, "something")

    def test_parse_instrument_event_rejects_garbage(self):
        with self.assertRaises(ValueError):
            parse_instrument_event({"type": "ADD"})
        with self.assertRaises(ValueError):
            parse_instrument_event({"type": "RENAME", "data": {"isin": "DE1"}})

    def test_parse_quote(self):
        quote = parse_quote({"type": "QUOTE", "data": {"isin": "DE1", "price": "12.5"}})

        self.assertEqual(quote.isin, "DE1")
        self.assertEqual(quote.price, 12.5)

    def test_parse_quote_rejects_garbage(self):
        with self.assertRaises(ValueError):
            parse_quote({"data": {"isin": "DE1"}})
        with self.assertRaises(ValueError):
            parse_quote({"data": {"isin": "DE1", "price": "abc"}})

    def test_parse_quote_rejects_price_too_large_for_float(self):
        with self.assertRaises(ValueError):
            parse_quote({"data": {"isin": "DE1", "price": 10 ** 400}})


class TestIngestLoops(unittest.TestCase):
    def test_instrument_events_add_and_delete(self):
        store = make_store()
        provider = FakeProvider(
            instruments=[
                {"type": "ADD", "data": {"isin": "A", "description": "a"}},
                {"type": "ADD", "data": {"isin": "B", "description": "b"}},
                {"type": "DELETE", "data": {"isin": "A", "description": "a"}},
                {"type": "UNKNOWN", "data": {"isin": "C", "description": "c"}},
                {"nonsense": True},
            ]
        )

        asyncio.run(instrument_ingest_loop(provider, store))

        self.assertEqual(store.instruments(), ["B"])

    def test_quotes_go_into_store(self):
        store = make_store()
        provider = FakeProvider(
            quotes=[
                {"type": "QUOTE", "data": {"isin": "A", "price": 1.0}},
                {"type": "QUOTE", "data": {"isin": "A", "price": 3.0}},
                {"type": "QUOTE", "data": {"isin": "A"}},
                {"type": "QUOTE", "data": {"isin": "A", "price": 2.0}},
            ]
        )

        asyncio.run(quote_ingest_loop(provider, store))

        last = store.get_candlesticks("A")[-1]
        self.assertEqual(
            (last.open_price, last.high_price, last.low_price, last.closing_price),
            (1.0, 3.0, 1.0, 2.0),
        )

    def test_oversized_price_is_skipped_and_loop_keeps_going(self):
        store = make_store()
        huge = decode_frame('{"data": {"isin": "A", "price": 1' + "0" * 400 + "}}")
        provider = FakeProvider(
            quotes=[
                huge,
                {"type": "QUOTE", "data": {"isin": "A", "price": 1.0}},
                {"type": "QUOTE", "data": {"isin": "A", "price": 3.0}},
                {"type": "QUOTE", "data": {"isin": "A", "price": 2.0}},
            ]
        )

        with self.assertLogs("ws_ingest", level="WARNING"):
            asyncio.run(quote_ingest_loop(provider, store))

        last = store.get_candlesticks("A")[-1]
        self.assertEqual(
            (last.open_price, last.high_price, last.low_price, last.closing_price),
            (1.0, 3.0, 1.0, 2.0),
        )

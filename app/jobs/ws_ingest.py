from __future__ import annotations

import logging

from app.candles.store import CandlestickStore
from app.models.market import Instrument, InstrumentEvent, InstrumentEventType, Quote
from app.providers.base import EventStreamProvider

log = logging.getLogger("ws_ingest")


def parse_instrument_event(msg: dict) -> InstrumentEvent:
    """
    {"type": "ADD", "data": {"isin": ..., "description": ...}} -> InstrumentEvent

    Raises ValueError for malformed payloads and unknown event types.
    """
    try:
        data = msg["data"]
        instrument = Instrument(isin=str(data["isin"]), description=str(data.get("description", "")))
        event_type = InstrumentEventType(str(msg["type"]).upper())
    except (KeyError, TypeError, AttributeError, OverflowError) as e:
        raise ValueError(f"malformed instrument event: {msg!r}") from e

    return InstrumentEvent(type=event_type, data=instrument)


def parse_quote(msg: dict) -> Quote:
    """{"data": {"isin": ..., "price": ...}} -> Quote. Raises ValueError if malformed."""
    try:
        data = msg["data"]
        return Quote(isin=str(data["isin"]), price=float(data["price"]))
    except (KeyError, TypeError, AttributeError, OverflowError) as e:
        raise ValueError(f"malformed quote: {msg!r}") from e


async def instrument_ingest_loop(provider: EventStreamProvider, store: CandlestickStore) -> None:
    """
    Background loop:
    - reads instrument event dicts from provider.stream_instruments()
    - ADD -> store.add_instrument, DELETE -> store.delete_instrument
    """
    async for msg in provider.stream_instruments():
        try:
            event = parse_instrument_event(msg)
        except ValueError as e:
            log.warning("Skipping instrument event: %s", e)
            continue

        log.debug("Instrument event %s isin=%s", event.type.value, event.data.isin)

        if event.type == InstrumentEventType.ADD:
            store.add_instrument(event.data)
        elif event.type == InstrumentEventType.DELETE:
            store.delete_instrument(event.data)


async def quote_ingest_loop(provider: EventStreamProvider, store: CandlestickStore) -> None:
    """
    Background loop:
    - reads quote dicts from provider.stream_quotes()
    - every well-formed quote goes into the store
    """
    async for msg in provider.stream_quotes():
        try:
            quote = parse_quote(msg)
        except ValueError as e:
            log.warning("Skipping quote: %s", e)
            continue

        log.debug("Quote isin=%s price=%s", quote.isin, quote.price)
        store.add_quote(quote)

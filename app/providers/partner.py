from __future__ import annotations

import asyncio
import json
import logging
from typing import AsyncIterator, Optional

import websockets

log = logging.getLogger("partner_provider")

MAX_BACKOFF_SECONDS = 30.0


def decode_frame(raw) -> Optional[dict]:
    """JSON text frame -> dict, or None if it is not a JSON object."""
    try:
        data = json.loads(raw)
    except (TypeError, ValueError):
        return None
    if not isinstance(data, dict):
        return None
    return data


class PartnerStreamProvider:
    """
    Partner stream provider (WS only).

    {base_url}/instruments:
      {"type": "ADD" | "DELETE", "data": {"isin": "...", "description": "..."}}

    {base_url}/quotes:
      {"type": "QUOTE", "data": {"isin": "...", "price": 12.34}}

    Both streams reconnect forever with exponential backoff.
    """

    def __init__(self, base_url: str = "ws://localhost:8032") -> None:
        self.base_url = base_url.rstrip("/")

    # -------------------------
    # Public interface used by the app
    # -------------------------
    def stream_instruments(self) -> AsyncIterator[dict]:
        return self._stream(f"{self.base_url}/instruments")

    def stream_quotes(self) -> AsyncIterator[dict]:
        return self._stream(f"{self.base_url}/quotes")

    # -------------------------
    # WS loop
    # -------------------------
    async def _stream(self, url: str) -> AsyncIterator[dict]:
        backoff = 1.0

        while True:
            try:
                async with websockets.connect(url, ping_interval=20, ping_timeout=20) as ws:
                    log.warning("Partner WS connected url=%s", url)
                    backoff = 1.0

                    async for raw in ws:
                        data = decode_frame(raw)
                        if data is None:
                            log.debug("Partner WS skipped frame url=%s raw=%r", url, raw)
                            continue
                        yield data

                log.warning("Partner WS closed url=%s (reconnecting)", url)
                await asyncio.sleep(backoff)

            except Exception as e:
                log.warning("Partner WS error url=%s: %s", url, e)
                await asyncio.sleep(backoff)
                backoff = min(backoff * 2, MAX_BACKOFF_SECONDS)

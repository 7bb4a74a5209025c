from __future__ import annotations

from abc import ABC, abstractmethod
from typing import AsyncIterator, Dict


class EventStreamProvider(ABC):
    """
    Provider contract (interface).

    Any provider must implement:
    - stream_instruments(): instrument ADD/DELETE events (async iterator of dicts)
    - stream_quotes(): quote events (async iterator of dicts)
    """

    @abstractmethod
    def stream_instruments(self) -> AsyncIterator[Dict]:
        raise NotImplementedError

    @abstractmethod
    def stream_quotes(self) -> AsyncIterator[Dict]:
        raise NotImplementedError

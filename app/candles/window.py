from __future__ import annotations

from collections import deque
from datetime import timedelta
from typing import Deque, Iterator

from app.models.market import TimestampedQuote


class QuoteWindow:
    """
    Oldest-first quotes for one instrument, bounded by `span`.

    Eviction happens only on append and is relative to the item being appended,
    not to wall-clock now:
    - empty window -> append
    - head within span of the new item -> append
    - otherwise drop heads until the head is within span, then append

    So a window whose instrument stops quoting keeps its stale quotes until the
    next quote arrives.
    """

    def __init__(self, span: timedelta):
        self.span = span
        self._items: Deque[TimestampedQuote] = deque()

    def _within_span(self, item: TimestampedQuote) -> bool:
        return abs(item.ts - self._items[0].ts) <= self.span

    def append(self, item: TimestampedQuote) -> None:
        while self._items and not self._within_span(item):
            self._items.popleft()
        self._items.append(item)

    def __iter__(self) -> Iterator[TimestampedQuote]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime, timezone


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Clock(ABC):
    """
    Time source contract (interface).

    The store asks the clock for "now" when stamping quotes and when computing
    bucket boundaries. Tests inject a scripted clock instead of wall-clock time.
    """

    @abstractmethod
    def now(self) -> datetime:
        raise NotImplementedError


class SystemClock(Clock):
    def now(self) -> datetime:
        return utcnow()

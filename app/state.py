from app.candles.clock import SystemClock
from app.candles.store import CandlestickStore
from app.config import get_settings

_settings = get_settings()

# Global in-memory store for the running API process
store = CandlestickStore(
    window=_settings.window,
    interval=_settings.interval,
    clock=SystemClock(),
)


def get_store() -> CandlestickStore:
    """FastAPI dependency (overridden in tests)."""
    return store

# app/config.py
import os
from dataclasses import dataclass
from datetime import timedelta

from dotenv import load_dotenv

# Loads variables from a local .env file into environment variables (dev only).
load_dotenv()

# CANDLE_TIME_UNIT -> timedelta keyword
TIME_UNITS = {
    "milliseconds": "milliseconds",
    "seconds": "seconds",
    "minutes": "minutes",
    "hours": "hours",
}


@dataclass(frozen=True)
class Settings:
    # App config
    app_env: str
    log_level: str
    provider: str
    http_host: str
    http_port: int

    # Upstream streams
    partner_ws_url: str

    # Candlestick config (window and interval are in candle_time_unit)
    candle_window: int
    candle_interval: int
    candle_time_unit: str

    @property
    def window(self) -> timedelta:
        return timedelta(**{TIME_UNITS[self.candle_time_unit]: self.candle_window})

    @property
    def interval(self) -> timedelta:
        return timedelta(**{TIME_UNITS[self.candle_time_unit]: self.candle_interval})


def _int_env(name: str, default: str) -> int:
    raw = os.getenv(name, default).strip()
    try:
        return int(raw)
    except ValueError:
        raise RuntimeError(f"{name} must be an integer, got {raw!r}") from None


def get_settings() -> Settings:
    """
    Reads env vars and returns a Settings object.
    """
    unit = os.getenv("CANDLE_TIME_UNIT", "minutes").strip().lower()
    if unit not in TIME_UNITS:
        raise RuntimeError(
            f"CANDLE_TIME_UNIT={unit!r} is not supported. Expected one of: {', '.join(TIME_UNITS)}"
        )

    return Settings(
        app_env=os.getenv("APP_ENV", "local"),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        provider=os.getenv("PROVIDER", "PARTNER"),
        http_host=os.getenv("HTTP_HOST", "0.0.0.0"),
        http_port=_int_env("HTTP_PORT", "9000"),
        partner_ws_url=os.getenv("PARTNER_WS_URL", "ws://localhost:8032").rstrip("/"),
        candle_window=_int_env("CANDLE_WINDOW", "30"),
        candle_interval=_int_env("CANDLE_INTERVAL", "1"),
        candle_time_unit=unit,
    )

import asyncio
import logging

import uvicorn
from fastapi import FastAPI

from app.api.routes import router as api_router
from app.config import get_settings
from app.jobs.ws_ingest import instrument_ingest_loop, quote_ingest_loop
from app.providers.loader import get_provider
from app.state import store

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
log = logging.getLogger("main")

provider = get_provider()

app = FastAPI(title="Candlestick API", version="0.1.0")
app.include_router(api_router)


def _log_task_exit(task: asyncio.Task) -> None:
    """Ingest tasks should run forever; log loudly if one stops."""
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        log.error("Ingest task %s stopped", task.get_name(), exc_info=exc)
    else:
        log.warning("Ingest task %s finished", task.get_name())


@app.on_event("startup")
async def _startup():
    log.info(
        "Starting ingest window=%s interval=%s provider=%s",
        store.window,
        store.interval,
        provider.__class__.__name__,
    )

    # Instrument stream (ADD/DELETE) and quote stream both feed the same store.
    tasks = [
        asyncio.create_task(instrument_ingest_loop(provider, store), name="instrument_ingest"),
        asyncio.create_task(quote_ingest_loop(provider, store), name="quote_ingest"),
    ]
    for task in tasks:
        task.add_done_callback(_log_task_exit)
    app.state.ingest_tasks = tasks


@app.on_event("shutdown")
async def _shutdown():
    tasks = getattr(app.state, "ingest_tasks", [])
    for task in tasks:
        task.cancel()
    await asyncio.gather(*tasks, return_exceptions=True)


@app.get("/health")
def health():
    return {
        "status": "ok",
        "app_env": settings.app_env,
        "provider_config": settings.provider,
        "provider_loaded": provider.__class__.__name__,
        "candles": {
            "window": settings.candle_window,
            "interval": settings.candle_interval,
            "time_unit": settings.candle_time_unit,
        },
        "instruments_tracked": len(store.instruments()),
    }


if __name__ == "__main__":
    uvicorn.run(app, host=settings.http_host, port=settings.http_port)

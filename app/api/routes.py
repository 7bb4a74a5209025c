from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from app.candles.store import CandlestickStore
from app.models.market import Quote
from app.models.responses import CandlestickOut
from app.state import get_store

router = APIRouter()


@router.get("/candlesticks", response_model=List[CandlestickOut])
def candlesticks(
    isin: Optional[str] = Query(None, description="Instrument ISIN, e.g., DE000BASF111"),
    store: CandlestickStore = Depends(get_store),
):
    """
    Candlesticks for the configured window, oldest first.

    - missing isin -> 400 {"reason": "missing_isin"}
    - unknown (or blank) isin, or no quotes yet -> []
    """
    if isin is None:
        return JSONResponse(status_code=400, content={"reason": "missing_isin"})

    return [CandlestickOut.from_candlestick(c) for c in store.get_candlesticks(isin)]


@router.post("/dev/simulate_quote")
def dev_simulate_quote(
    isin: str = Query(..., description="Instrument ISIN"),
    price: float = Query(..., description="Quote price"),
    store: CandlestickStore = Depends(get_store),
):
    """
    Dev-only helper:
    Feeds ONE quote into the store inside the running API process.
    """
    store.add_quote(Quote(isin=isin.strip(), price=price))
    return {"ok": True, "isin": isin.strip()}

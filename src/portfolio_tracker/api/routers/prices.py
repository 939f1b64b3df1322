"""Price endpoints: refresh, cached records, chart history."""

from fastapi import APIRouter, Depends, Query

from portfolio_tracker.api.deps import get_app_settings, get_orchestrator, get_store
from portfolio_tracker.api.schemas import (
    ChartPointResponse,
    ChartResponse,
    FetchResultResponse,
    HistoryPointResponse,
    PriceRecordResponse,
    RefreshSummaryResponse,
)
from portfolio_tracker.config.settings import Settings
from portfolio_tracker.core.exceptions import NotFoundError
from portfolio_tracker.domain.models import normalize_symbol
from portfolio_tracker.services import FetchOrchestrator, PortfolioStore, chart_points, chart_title

router = APIRouter(prefix="/prices", tags=["prices"])


@router.post("/refresh", response_model=RefreshSummaryResponse)
def refresh_prices(
    stale_only: bool = Query(False, description="Only refetch symbols older than the cache TTL"),
    store: PortfolioStore = Depends(get_store),
    orchestrator: FetchOrchestrator = Depends(get_orchestrator),
    settings: Settings = Depends(get_app_settings),
) -> RefreshSummaryResponse:
    """Refresh every held symbol, one request at a time."""
    symbols = store.symbols()
    if stale_only:
        summary = orchestrator.refresh_stale(symbols, settings.market_data_cache_ttl_seconds)
    else:
        summary = orchestrator.fetch_all(symbols)
    return RefreshSummaryResponse.model_validate(summary)


@router.post("/{symbol}/refresh", response_model=FetchResultResponse)
def refresh_symbol(
    symbol: str,
    orchestrator: FetchOrchestrator = Depends(get_orchestrator),
) -> FetchResultResponse:
    return FetchResultResponse.model_validate(orchestrator.fetch_one(symbol))


@router.get("/{symbol}", response_model=PriceRecordResponse)
def get_price(
    symbol: str,
    store: PortfolioStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
) -> PriceRecordResponse:
    """Last cached price for a symbol; 404 if it was never fetched."""
    sym = normalize_symbol(symbol)
    record = store.cache.get(sym)
    if record is None:
        raise NotFoundError("Price data", sym)

    return PriceRecordResponse(
        symbol=sym,
        price=record.usable_price,
        change=record.change,
        fetched_at=record.fetched_at,
        stale=store.cache.is_stale(sym, settings.market_data_cache_ttl_seconds),
        history=[HistoryPointResponse.model_validate(p) for p in record.history or []],
    )


@router.get("/{symbol}/history", response_model=ChartResponse)
def get_history(
    symbol: str,
    store: PortfolioStore = Depends(get_store),
    orchestrator: FetchOrchestrator = Depends(get_orchestrator),
) -> ChartResponse:
    """
    Chart-ready closes for a symbol.

    Fetches first when nothing is cached. Points with no close are dropped;
    an empty list means no history is available.
    """
    sym = normalize_symbol(symbol)
    record = store.cache.get(sym)
    if record is None:
        orchestrator.fetch_one(sym)
        record = store.cache.get(sym)

    history = record.history if record is not None else None
    return ChartResponse(
        symbol=sym,
        title=chart_title(sym),
        points=[ChartPointResponse.model_validate(p) for p in chart_points(history)],
    )

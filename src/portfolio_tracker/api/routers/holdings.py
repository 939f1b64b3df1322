"""Holdings endpoints: list, merge a buy, remove."""

from fastapi import APIRouter, BackgroundTasks, Depends, Response

from portfolio_tracker.api.deps import get_orchestrator, get_store
from portfolio_tracker.api.schemas import (
    HoldingMergeRequest,
    HoldingRowResponse,
    HoldingsResponse,
    PositionResponse,
    SummaryResponse,
)
from portfolio_tracker.services import FetchOrchestrator, PortfolioStore

router = APIRouter(prefix="/holdings", tags=["holdings"])


@router.get("", response_model=HoldingsResponse)
def list_holdings(store: PortfolioStore = Depends(get_store)) -> HoldingsResponse:
    """Holdings in display order with valuation and portfolio totals."""
    return HoldingsResponse(
        rows=[HoldingRowResponse.model_validate(r) for r in store.rows()],
        summary=SummaryResponse.model_validate(store.summary()),
    )


@router.post("", response_model=PositionResponse, status_code=201)
def merge_holding(
    data: HoldingMergeRequest,
    background_tasks: BackgroundTasks,
    store: PortfolioStore = Depends(get_store),
    orchestrator: FetchOrchestrator = Depends(get_orchestrator),
) -> PositionResponse:
    """
    Merge a buy into the holdings at weighted-average cost.

    The price for the symbol is fetched after the response is sent.
    """
    position = store.merge(data.symbol, data.quantity, data.cost)
    if data.refresh:
        background_tasks.add_task(orchestrator.fetch_one, position.symbol)
    return PositionResponse.model_validate(position)


@router.delete("/{symbol}", status_code=204)
def remove_holding(symbol: str, store: PortfolioStore = Depends(get_store)) -> Response:
    """Remove a holding; removing an absent symbol is a no-op."""
    store.remove(symbol)
    return Response(status_code=204)

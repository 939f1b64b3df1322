"""Portfolio summary endpoint."""

from fastapi import APIRouter, Depends

from portfolio_tracker.api.deps import get_store
from portfolio_tracker.api.schemas import SummaryResponse
from portfolio_tracker.services import PortfolioStore

router = APIRouter(prefix="/summary", tags=["summary"])


@router.get("", response_model=SummaryResponse)
def get_summary(store: PortfolioStore = Depends(get_store)) -> SummaryResponse:
    """Total invested, current value and P/L recomputed from holdings and cached prices."""
    return SummaryResponse.model_validate(store.summary())

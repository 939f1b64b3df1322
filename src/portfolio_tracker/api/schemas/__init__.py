"""Pydantic schemas for API request/response."""

from portfolio_tracker.api.schemas.holdings import (
    HoldingMergeRequest,
    PositionResponse,
    HoldingRowResponse,
    SummaryResponse,
    HoldingsResponse,
)
from portfolio_tracker.api.schemas.prices import (
    HistoryPointResponse,
    PriceRecordResponse,
    ChartPointResponse,
    ChartResponse,
    FetchResultResponse,
    RefreshSummaryResponse,
)
from portfolio_tracker.api.schemas.snapshot import (
    SnapshotPreviewResponse,
    ImportSummaryResponse,
)

__all__ = [
    "HoldingMergeRequest",
    "PositionResponse",
    "HoldingRowResponse",
    "SummaryResponse",
    "HoldingsResponse",
    "HistoryPointResponse",
    "PriceRecordResponse",
    "ChartPointResponse",
    "ChartResponse",
    "FetchResultResponse",
    "RefreshSummaryResponse",
    "SnapshotPreviewResponse",
    "ImportSummaryResponse",
]

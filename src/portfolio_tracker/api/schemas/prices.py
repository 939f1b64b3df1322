"""Pydantic schemas for price endpoints."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class HistoryPointResponse(BaseModel):
    model_config = {"from_attributes": True}

    timestamp: int
    close: Optional[float] = None


class PriceRecordResponse(BaseModel):
    """Response schema for a cached price record."""

    symbol: str
    price: Optional[float] = None
    change: Optional[float] = None
    fetched_at: datetime
    stale: bool
    history: list[HistoryPointResponse] = []


class ChartPointResponse(BaseModel):
    model_config = {"from_attributes": True}

    timestamp: int
    label: str
    close: float


class ChartResponse(BaseModel):
    """Response schema for chart-ready history."""

    symbol: str
    title: str
    points: list[ChartPointResponse]


class FetchResultResponse(BaseModel):
    model_config = {"from_attributes": True}

    symbol: str
    ok: bool
    error: Optional[str] = None


class RefreshSummaryResponse(BaseModel):
    """Response schema for a batch refresh."""

    model_config = {"from_attributes": True}

    requested: int
    succeeded: int
    failed: int
    errors: list[str]
    results: list[FetchResultResponse]

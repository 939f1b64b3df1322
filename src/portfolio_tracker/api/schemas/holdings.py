"""Pydantic schemas for holdings and valuation endpoints."""

from typing import Optional

from pydantic import BaseModel, Field, field_validator

from portfolio_tracker.domain.models import PlClass


class HoldingMergeRequest(BaseModel):
    """Request schema for merging a buy into the holdings."""

    symbol: str = Field(..., min_length=1, max_length=20, description="Ticker symbol")
    quantity: float = Field(..., description="Shares bought (> 0)")
    cost: float = Field(..., description="Price per share (>= 0)")
    refresh: bool = Field(default=True, description="Fetch a price for the symbol after merging")

    @field_validator("symbol")
    @classmethod
    def uppercase_symbol(cls, v: str) -> str:
        return v.strip().upper()


class PositionResponse(BaseModel):
    """Response schema for a stored position."""

    model_config = {"from_attributes": True}

    symbol: str
    quantity: float
    average_cost: float
    cost_basis: float


class HoldingRowResponse(BaseModel):
    """Response schema for a valued holding row."""

    model_config = {"from_attributes": True}

    symbol: str
    quantity: float
    average_cost: float
    cost_basis: float
    price: Optional[float] = None
    change: Optional[float] = None
    market_value: Optional[float] = None
    pl: Optional[float] = None
    pl_class: PlClass


class SummaryResponse(BaseModel):
    """Response schema for portfolio totals."""

    model_config = {"from_attributes": True}

    total_invested: float
    total_current_value: float
    has_any_price_data: bool
    total_pl: Optional[float] = None
    total_pl_percent: Optional[float] = None
    priced_count: int
    pending_symbols: list[str]


class HoldingsResponse(BaseModel):
    """Response schema for the holdings table."""

    rows: list[HoldingRowResponse]
    summary: SummaryResponse

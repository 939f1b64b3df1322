"""View models for service outputs."""

from portfolio_tracker.domain.views.portfolio import (
    RowValuation,
    ValuationSummary,
    ChartPoint,
    FetchResult,
    RefreshSummary,
    ImportSummary,
)

__all__ = [
    "RowValuation",
    "ValuationSummary",
    "ChartPoint",
    "FetchResult",
    "RefreshSummary",
    "ImportSummary",
]

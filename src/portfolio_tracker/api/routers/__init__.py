"""API routers package."""

from portfolio_tracker.api.routers.holdings import router as holdings_router
from portfolio_tracker.api.routers.summary import router as summary_router
from portfolio_tracker.api.routers.prices import router as prices_router
from portfolio_tracker.api.routers.snapshot import router as snapshot_router

__all__ = [
    "holdings_router",
    "summary_router",
    "prices_router",
    "snapshot_router",
]

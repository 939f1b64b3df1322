"""Service layer - business logic orchestration."""

from portfolio_tracker.services.ledger_service import LedgerService
from portfolio_tracker.services.price_cache import PriceCache
from portfolio_tracker.services.fetch_scheduler import PacedTaskQueue
from portfolio_tracker.services.fetch_orchestrator import FetchOrchestrator
from portfolio_tracker.services.valuation_service import ValuationService
from portfolio_tracker.services.portfolio_store import PortfolioStore
from portfolio_tracker.services.chart_data import chart_points, chart_title

__all__ = [
    "LedgerService",
    "PriceCache",
    "PacedTaskQueue",
    "FetchOrchestrator",
    "ValuationService",
    "PortfolioStore",
    "chart_points",
    "chart_title",
]

"""Domain models package."""

from portfolio_tracker.domain.models.enums import PlClass, ProviderKind
from portfolio_tracker.domain.models.position import Position, PositionInput, normalize_symbol
from portfolio_tracker.domain.models.price import HistoryPoint, PriceSnapshot, PriceRecord

__all__ = [
    "PlClass",
    "ProviderKind",
    "Position",
    "PositionInput",
    "normalize_symbol",
    "HistoryPoint",
    "PriceSnapshot",
    "PriceRecord",
]

"""Domain layer - pure business models and view types."""

from portfolio_tracker.domain.models import (
    PlClass,
    ProviderKind,
    Position,
    PositionInput,
    normalize_symbol,
    HistoryPoint,
    PriceSnapshot,
    PriceRecord,
)

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

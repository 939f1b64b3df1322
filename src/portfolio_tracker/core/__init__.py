"""Core utilities and shared functionality."""

from portfolio_tracker.core.timezone import (
    now_eastern,
    today_eastern,
    from_epoch_eastern,
    EASTERN_TZ,
)
from portfolio_tracker.core.exceptions import (
    AppError,
    ValidationError,
    InvalidInputError,
    NotFoundError,
    FetchError,
    NoDataError,
    SnapshotError,
    MalformedFileError,
    NotAListError,
    SchemaError,
)
from portfolio_tracker.core.events import EventBus, EventType, RefreshEvent

__all__ = [
    "now_eastern",
    "today_eastern",
    "from_epoch_eastern",
    "EASTERN_TZ",
    "AppError",
    "ValidationError",
    "InvalidInputError",
    "NotFoundError",
    "FetchError",
    "NoDataError",
    "SnapshotError",
    "MalformedFileError",
    "NotAListError",
    "SchemaError",
    "EventBus",
    "EventType",
    "RefreshEvent",
]

"""Price cache domain models."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from portfolio_tracker.core.timezone import now_eastern


@dataclass(frozen=True)
class HistoryPoint:
    """One daily bar: epoch-seconds timestamp and close (None when upstream had a gap)."""

    timestamp: int
    close: Optional[float] = None


@dataclass
class PriceSnapshot:
    """Provider response for one symbol."""

    symbol: str
    current_price: float
    previous_close: float
    history: list[HistoryPoint] = field(default_factory=list)

    @property
    def change(self) -> float:
        return self.current_price - self.previous_close


@dataclass
class PriceRecord:
    """
    Last-known price data for a symbol.

    A record is always a full replacement of the previous one. A price of
    None (or <= 0) means the symbol has no usable price.
    """

    price: Optional[float] = None
    change: Optional[float] = None
    history: Optional[list[HistoryPoint]] = None
    fetched_at: datetime = field(default_factory=now_eastern)

    @property
    def usable_price(self) -> Optional[float]:
        """The price if it can be used for valuation, else None."""
        if self.price is not None and self.price > 0:
            return self.price
        return None

    @classmethod
    def from_snapshot(cls, snapshot: PriceSnapshot, fetched_at: Optional[datetime] = None) -> "PriceRecord":
        return cls(
            price=snapshot.current_price,
            change=snapshot.change,
            history=list(snapshot.history),
            fetched_at=fetched_at or now_eastern(),
        )

"""View models for portfolio, valuation and refresh outputs."""

from dataclasses import dataclass, field
from typing import Optional

from portfolio_tracker.domain.models import PlClass


@dataclass
class RowValuation:
    """Valuation of a single holding for display."""

    symbol: str
    quantity: float
    average_cost: float
    cost_basis: float
    price: Optional[float] = None
    change: Optional[float] = None
    market_value: Optional[float] = None
    pl: Optional[float] = None
    pl_class: PlClass = PlClass.NEUTRAL

    @property
    def has_price(self) -> bool:
        return self.price is not None


@dataclass
class ValuationSummary:
    """
    Portfolio-level totals derived from ledger and cache.

    total_pl and total_pl_percent stay None until at least one holding has a
    usable price; display collaborators show a loading state meanwhile.
    """

    total_invested: float = 0.0
    total_current_value: float = 0.0
    has_any_price_data: bool = False
    total_pl: Optional[float] = None
    total_pl_percent: Optional[float] = None
    priced_count: int = 0
    pending_symbols: list[str] = field(default_factory=list)


@dataclass
class ChartPoint:
    """A history point that survived null filtering, labelled M/D."""

    timestamp: int
    label: str
    close: float


@dataclass
class FetchResult:
    """Outcome of fetching one symbol."""

    symbol: str
    ok: bool
    error: Optional[str] = None


@dataclass
class RefreshSummary:
    """Summary of a sequential batch refresh."""

    requested: int = 0
    succeeded: int = 0
    failed: int = 0
    errors: list[str] = field(default_factory=list)
    results: list[FetchResult] = field(default_factory=list)


@dataclass
class ImportSummary:
    """Summary of a snapshot restore."""

    imported_count: int = 0
    symbols: list[str] = field(default_factory=list)
    refresh: Optional[RefreshSummary] = None

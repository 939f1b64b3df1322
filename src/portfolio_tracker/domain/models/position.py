"""Position domain model."""

from dataclasses import dataclass
from typing import Optional


def normalize_symbol(symbol: Optional[str]) -> str:
    """Strip whitespace and uppercase; None becomes an empty string."""
    return (symbol or "").strip().upper()


@dataclass
class Position:
    """
    A single holding tracked at weighted-average cost.

    One Position per symbol. Quantity is always > 0; average_cost >= 0.
    Arithmetic is plain float; rounding happens only at display time.
    """

    symbol: str
    quantity: float
    average_cost: float

    @property
    def cost_basis(self) -> float:
        """Total amount invested in this position."""
        return self.quantity * self.average_cost

    def merged_with(self, quantity: float, cost: float) -> "Position":
        """Return a new Position combining this one with an additional buy."""
        total_qty = self.quantity + quantity
        total_cost = self.quantity * self.average_cost + quantity * cost
        return Position(
            symbol=self.symbol,
            quantity=total_qty,
            average_cost=total_cost / total_qty,
        )


@dataclass
class PositionInput:
    """Unvalidated input for one holding in a bulk replace (restore)."""

    symbol: Optional[str]
    quantity: Optional[float]
    cost: Optional[float]

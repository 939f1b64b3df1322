"""Ledger service for holdings management."""

import math
from typing import Iterable, Iterator, Optional

from portfolio_tracker.core.exceptions import InvalidInputError, ValidationError
from portfolio_tracker.domain.models import Position, PositionInput, normalize_symbol


class LedgerService:
    """
    Service for managing the set of holdings.

    The ledger is the single source of truth for holdings. It is mutated only
    through merge (additive buys at weighted-average cost), remove, and
    replace_all (restore). Insertion order is preserved for display.
    """

    def __init__(self, positions: Optional[Iterable[Position]] = None):
        self._positions: dict[str, Position] = {}
        if positions:
            self.replace_all(positions)

    def merge(self, symbol: str, quantity: float, cost: float) -> Position:
        """
        Merge a buy into the ledger.

        An existing position's average cost becomes
        (q0*c0 + q*c) / (q0 + q) and its quantity q0 + q.

        Args:
            symbol: Ticker; trimmed and uppercased
            quantity: Shares bought, must be > 0
            cost: Price per share, must be >= 0

        Returns:
            The updated or newly inserted Position
        """
        sym = normalize_symbol(symbol)
        self._validate_merge(sym, quantity, cost)

        existing = self._positions.get(sym)
        if existing:
            updated = existing.merged_with(float(quantity), float(cost))
        else:
            updated = Position(symbol=sym, quantity=float(quantity), average_cost=float(cost))

        self._positions[sym] = updated
        return updated

    def remove(self, symbol: str) -> bool:
        """Delete a position; returns False (not an error) if it was absent."""
        return self._positions.pop(normalize_symbol(symbol), None) is not None

    def replace_all(self, positions: Iterable["Position | PositionInput"]) -> list[Position]:
        """
        Replace every holding at once (restore from backup).

        All elements are validated before the ledger is touched. Duplicate
        symbols are combined with the weighted-average merge rule.
        """
        items = list(positions)
        replacement: dict[str, Position] = {}

        for index, item in enumerate(items):
            sym, quantity, cost = self._unpack(item)
            if not sym:
                raise ValidationError(f"Position {index}: symbol is required")
            if not _is_number(quantity) or quantity <= 0:
                raise ValidationError(f"Position {index} ({sym}): quantity must be > 0")
            if not _is_number(cost) or cost < 0:
                raise ValidationError(f"Position {index} ({sym}): cost must be >= 0")

            existing = replacement.get(sym)
            if existing:
                replacement[sym] = existing.merged_with(float(quantity), float(cost))
            else:
                replacement[sym] = Position(symbol=sym, quantity=float(quantity), average_cost=float(cost))

        self._positions = replacement
        return self.list_positions()

    def list_positions(self) -> list[Position]:
        """Positions in insertion/display order."""
        return list(self._positions.values())

    def get(self, symbol: str) -> Optional[Position]:
        """Get the position for symbol, or None."""
        return self._positions.get(normalize_symbol(symbol))

    def symbols(self) -> list[str]:
        """Symbols in display order."""
        return list(self._positions.keys())

    def __len__(self) -> int:
        return len(self._positions)

    def __contains__(self, symbol: object) -> bool:
        return isinstance(symbol, str) and normalize_symbol(symbol) in self._positions

    def __iter__(self) -> Iterator[Position]:
        return iter(self.list_positions())

    @staticmethod
    def _validate_merge(symbol: str, quantity: float, cost: float) -> None:
        """Validate merge input; nothing reaches the ledger on failure."""
        if not symbol:
            raise InvalidInputError("Symbol is required")
        if not _is_number(quantity) or quantity <= 0:
            raise InvalidInputError(f"{symbol}: quantity must be > 0")
        if not _is_number(cost) or cost < 0:
            raise InvalidInputError(f"{symbol}: cost must be >= 0")

    @staticmethod
    def _unpack(item: "Position | PositionInput") -> tuple[str, Optional[float], Optional[float]]:
        if isinstance(item, Position):
            return normalize_symbol(item.symbol), item.quantity, item.average_cost
        return normalize_symbol(item.symbol), item.quantity, item.cost


def _is_number(value: object) -> bool:
    """True for finite ints/floats (bools excluded)."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)

"""Valuation service for portfolio totals and per-row P/L."""

from typing import Iterable, Optional

from portfolio_tracker.domain.models import PlClass, Position, PriceRecord
from portfolio_tracker.domain.views import RowValuation, ValuationSummary
from portfolio_tracker.services.price_cache import PriceCache


class ValuationService:
    """
    Derives valuation from holdings and cached prices.

    Everything here is recomputed from scratch on each call; nothing is
    maintained incrementally. A position without a usable price counts
    toward total invested but not toward current value, and its P/L is
    unknown rather than zero.
    """

    def summarize(self, positions: Iterable[Position], cache: PriceCache) -> ValuationSummary:
        """
        Compute portfolio totals.

        Formula: invested = Σ(qty × cost); current = Σ(qty × price) over priced
        positions; P/L = current - invested; P/L % = P/L / invested × 100.
        P/L and P/L % are None while no position has a usable price.
        """
        summary = ValuationSummary()

        for position in positions:
            summary.total_invested += position.quantity * position.average_cost
            price = _usable_price(cache.get(position.symbol))
            if price is not None:
                summary.total_current_value += position.quantity * price
                summary.has_any_price_data = True
                summary.priced_count += 1
            else:
                summary.pending_symbols.append(position.symbol)

        if not summary.has_any_price_data:
            return summary

        summary.total_pl = summary.total_current_value - summary.total_invested
        summary.total_pl_percent = 0.0
        if summary.total_invested > 0:
            summary.total_pl_percent = summary.total_pl / summary.total_invested * 100
        return summary

    def row(self, position: Position, record: Optional[PriceRecord]) -> RowValuation:
        """Valuation of one holding; neutral with no price/value/P&L when unpriced."""
        row = RowValuation(
            symbol=position.symbol,
            quantity=position.quantity,
            average_cost=position.average_cost,
            cost_basis=position.cost_basis,
        )

        price = _usable_price(record)
        if price is None:
            return row

        row.price = price
        row.change = record.change
        row.market_value = position.quantity * price
        row.pl = row.market_value - position.quantity * position.average_cost
        row.pl_class = PlClass.POSITIVE if row.pl >= 0 else PlClass.NEGATIVE
        return row

    def rows(self, positions: Iterable[Position], cache: PriceCache) -> list[RowValuation]:
        """Row valuations in ledger order."""
        return [self.row(p, cache.get(p.symbol)) for p in positions]


def _usable_price(record: Optional[PriceRecord]) -> Optional[float]:
    return record.usable_price if record is not None else None

"""Stub market data provider for offline/testing use."""

import random
from datetime import timedelta

from portfolio_tracker.core.exceptions import FetchError
from portfolio_tracker.core.timezone import now_eastern
from portfolio_tracker.domain.models import HistoryPoint, PriceSnapshot, normalize_symbol


# Deterministic fake prices for common symbols
_STUB_PRICES: dict[str, tuple[float, float]] = {
    "AAPL": (185.50, 184.25),
    "GOOGL": (142.75, 141.50),
    "MSFT": (378.25, 376.80),
    "AMZN": (178.50, 177.25),
    "TSLA": (248.75, 250.10),
    "NVDA": (485.25, 482.50),
    "META": (505.50, 502.75),
    "SPY": (485.25, 484.10),
    "QQQ": (418.75, 417.50),
    "VTI": (252.30, 251.80),
}

_HISTORY_DAYS = 21


class StubMarketDataProvider:
    """
    Stub provider with deterministic fake data for offline operation.

    Uses predefined prices for common symbols; generates seeded random prices
    for unknown symbols. History is a random walk ending at the previous close.
    """

    def __init__(self, seed: int = 42, history_days: int = _HISTORY_DAYS):
        self._seed = seed
        self._history_days = history_days

    def get_price_data(self, symbol: str) -> PriceSnapshot:
        """Return a stub snapshot for symbol."""
        upper_symbol = normalize_symbol(symbol)
        if not upper_symbol:
            raise FetchError(symbol, "empty symbol")

        # Per-symbol RNG so results do not depend on call order
        rng = random.Random(f"{self._seed}:{upper_symbol}")

        if upper_symbol in _STUB_PRICES:
            last_price, prev_close = _STUB_PRICES[upper_symbol]
        else:
            last_price = round(50 + rng.random() * 200, 2)
            change_pct = (rng.random() - 0.5) * 0.04
            prev_close = round(last_price / (1 + change_pct), 2)

        return PriceSnapshot(
            symbol=upper_symbol,
            current_price=last_price,
            previous_close=prev_close,
            history=self._history(rng, prev_close),
        )

    def _history(self, rng: random.Random, end_close: float) -> list[HistoryPoint]:
        today = now_eastern().replace(hour=9, minute=30, second=0, microsecond=0)
        closes = [end_close]
        for _ in range(self._history_days - 1):
            closes.append(round(closes[-1] * (1 + (rng.random() - 0.5) * 0.03), 2))
        closes.reverse()

        points = []
        for offset, close in enumerate(closes):
            day = today - timedelta(days=self._history_days - offset)
            points.append(HistoryPoint(timestamp=int(day.timestamp()), close=close))
        return points

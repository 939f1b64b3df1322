"""Market data provider protocol."""

from typing import Protocol

from portfolio_tracker.domain.models import PriceSnapshot


class MarketDataProvider(Protocol):
    """
    Protocol for market data providers.

    Implementations fetch current price, previous close and a short daily
    history for one symbol per call. Any failure (network, non-2xx, missing
    fields) is raised as FetchError or another exception; callers isolate it.
    """

    def get_price_data(self, symbol: str) -> PriceSnapshot:
        """Fetch current price, previous close and daily history for symbol."""
        ...

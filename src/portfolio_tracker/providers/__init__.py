"""Market data providers module."""

from portfolio_tracker.domain.models import ProviderKind
from portfolio_tracker.providers.market_data_provider import MarketDataProvider
from portfolio_tracker.providers.stub_provider import StubMarketDataProvider
from portfolio_tracker.providers.yfinance_provider import YFinanceMarketDataProvider


def build_provider(kind: ProviderKind, period: str = "1mo", interval: str = "1d") -> MarketDataProvider:
    """Create the provider named in settings."""
    if kind == ProviderKind.STUB:
        return StubMarketDataProvider()
    return YFinanceMarketDataProvider(period=period, interval=interval)


__all__ = [
    "MarketDataProvider",
    "StubMarketDataProvider",
    "YFinanceMarketDataProvider",
    "build_provider",
]

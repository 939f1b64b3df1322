"""
Pytest configuration and fixtures for portfolio tracker tests.

This module provides:
- In-memory SQLite database fixtures
- Deterministic, failing and flaky market data providers
- A recording sleep/clock pair for pacing tests
- Store, orchestrator and snapshot fixtures
- A FastAPI test client bound to an isolated AppContext
"""

from datetime import datetime
from typing import Optional

import pytest
from sqlalchemy import create_engine, StaticPool
from sqlalchemy.orm import sessionmaker, Session
from fastapi.testclient import TestClient

from portfolio_tracker.main import app
from portfolio_tracker.api.deps import get_context
from portfolio_tracker.app_context import AppContext, set_app_context
from portfolio_tracker.repositories.sqlalchemy.database import Base
# Import ORM models to register them with Base before creating tables
from portfolio_tracker.repositories.sqlalchemy import orm_models  # noqa: F401
from portfolio_tracker.repositories.sqlalchemy import SqlAlchemyBlobRepository
from portfolio_tracker.config.settings import Settings, reset_settings
from portfolio_tracker.core.events import EventBus, RefreshEvent
from portfolio_tracker.core.exceptions import FetchError
from portfolio_tracker.core.timezone import EASTERN_TZ
from portfolio_tracker.domain.models import HistoryPoint, PriceSnapshot, ProviderKind, normalize_symbol
from portfolio_tracker.services import (
    FetchOrchestrator,
    PacedTaskQueue,
    PortfolioStore,
    PriceCache,
)
from portfolio_tracker.snapshot import SnapshotExporter, SnapshotImporter


# =============================================================================
# TIMEZONE HELPERS
# =============================================================================


def eastern_datetime(
    year: int,
    month: int,
    day: int,
    hour: int = 10,
    minute: int = 0,
    second: int = 0,
) -> datetime:
    """Create a localized datetime in US/Eastern timezone."""
    return EASTERN_TZ.localize(datetime(year, month, day, hour, minute, second))


def epoch(dt: datetime) -> int:
    return int(dt.timestamp())


@pytest.fixture
def fixed_now() -> datetime:
    """Fixed 'now' timestamp for deterministic tests."""
    return eastern_datetime(2024, 6, 15, 14, 30, 0)


# =============================================================================
# DATABASE FIXTURES
# =============================================================================


@pytest.fixture(scope="function")
def test_engine():
    """Create test database engine with shared in-memory SQLite."""
    # Reset settings for clean state
    reset_settings()

    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    reset_settings()


@pytest.fixture(scope="function")
def test_session(test_engine) -> Session:
    """Create test database session."""
    TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def blob_repo(test_session) -> SqlAlchemyBlobRepository:
    """Provide test BlobRepository."""
    return SqlAlchemyBlobRepository(test_session)


# =============================================================================
# MARKET DATA FIXTURES
# =============================================================================


class DeterministicMarketProvider:
    """
    Deterministic market data provider for testing.

    Provides fixed prices and a short history with one gap (None close).
    Records every symbol it was asked for, in order.
    """

    FIXED_PRICES = {
        "AAPL": (180.00, 175.00),  # +5.00
        "GOOGL": (142.75, 141.50),  # +1.25
        "MSFT": (378.25, 376.80),  # +1.45
        "TSLA": (248.75, 250.10),  # -1.35 (down)
        "SPY": (485.25, 484.10),  # +1.15
    }

    HISTORY_DAYS = [
        eastern_datetime(2024, 6, 12, 9, 30),
        eastern_datetime(2024, 6, 13, 9, 30),
        eastern_datetime(2024, 6, 14, 9, 30),
    ]

    def __init__(self, prices: Optional[dict[str, tuple[float, float]]] = None):
        self._prices = dict(self.FIXED_PRICES if prices is None else prices)
        self.calls: list[str] = []

    def get_price_data(self, symbol: str) -> PriceSnapshot:
        sym = normalize_symbol(symbol)
        self.calls.append(sym)
        if sym not in self._prices:
            raise FetchError(sym, "unknown symbol")
        price, prev_close = self._prices[sym]
        closes = [prev_close - 2, None, prev_close]
        return PriceSnapshot(
            symbol=sym,
            current_price=price,
            previous_close=prev_close,
            history=[
                HistoryPoint(timestamp=epoch(day), close=close)
                for day, close in zip(self.HISTORY_DAYS, closes)
            ],
        )


class FailingMarketProvider:
    """Market provider that always raises an exception."""

    def __init__(self):
        self.calls: list[str] = []

    def get_price_data(self, symbol: str) -> PriceSnapshot:
        self.calls.append(symbol)
        raise ConnectionError("Network unavailable")


class FlakyMarketProvider(DeterministicMarketProvider):
    """Deterministic provider that raises for a chosen set of symbols."""

    def __init__(self, failing: set[str], prices: Optional[dict[str, tuple[float, float]]] = None):
        super().__init__(prices)
        self._failing = {normalize_symbol(s) for s in failing}

    def get_price_data(self, symbol: str) -> PriceSnapshot:
        sym = normalize_symbol(symbol)
        if sym in self._failing:
            self.calls.append(sym)
            raise TimeoutError(f"timed out fetching {sym}")
        return super().get_price_data(sym)


@pytest.fixture
def deterministic_provider() -> DeterministicMarketProvider:
    """Provide deterministic market data provider."""
    return DeterministicMarketProvider()


@pytest.fixture
def failing_provider() -> FailingMarketProvider:
    """Provide a market provider that always fails."""
    return FailingMarketProvider()


# =============================================================================
# PACING FIXTURES
# =============================================================================


class FakeClock:
    """Manually advanced monotonic clock; sleeping advances it."""

    def __init__(self, start: float = 1000.0):
        self.now = start
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def paced_queue(fake_clock) -> PacedTaskQueue:
    """Queue with the production 0.5s gap driven by a fake clock."""
    return PacedTaskQueue(0.5, sleep=fake_clock.sleep, clock=fake_clock)


@pytest.fixture
def instant_queue() -> PacedTaskQueue:
    """Queue with no pacing gap."""
    return PacedTaskQueue(0)


# =============================================================================
# EVENT FIXTURES
# =============================================================================


class EventRecorder:
    """Listener that records every event it receives."""

    def __init__(self):
        self.events: list[RefreshEvent] = []

    def __call__(self, event: RefreshEvent) -> None:
        self.events.append(event)

    @property
    def kinds(self) -> list[tuple[str, Optional[str]]]:
        return [(e.event_type.value, e.symbol) for e in self.events]


@pytest.fixture
def event_bus() -> EventBus:
    return EventBus()


@pytest.fixture
def recorder(event_bus) -> EventRecorder:
    """EventRecorder subscribed to every event type on event_bus."""
    rec = EventRecorder()
    event_bus.subscribe_all(rec)
    return rec


# =============================================================================
# SERVICE FIXTURES
# =============================================================================


@pytest.fixture
def price_cache() -> PriceCache:
    return PriceCache()


@pytest.fixture
def store(blob_repo, event_bus, price_cache) -> PortfolioStore:
    """Provide a loaded PortfolioStore backed by in-memory SQLite."""
    s = PortfolioStore(blob_repo=blob_repo, events=event_bus, cache=price_cache)
    s.load()
    return s


@pytest.fixture
def orchestrator(deterministic_provider, price_cache, event_bus, instant_queue) -> FetchOrchestrator:
    """Provide FetchOrchestrator over the deterministic provider."""
    return FetchOrchestrator(
        provider=deterministic_provider,
        cache=price_cache,
        events=event_bus,
        queue=instant_queue,
    )


@pytest.fixture
def snapshot_importer(store, orchestrator) -> SnapshotImporter:
    return SnapshotImporter(store=store, orchestrator=orchestrator)


@pytest.fixture
def snapshot_exporter() -> SnapshotExporter:
    return SnapshotExporter()


# =============================================================================
# APP CONTEXT / API FIXTURES
# =============================================================================


@pytest.fixture
def test_settings(tmp_path) -> Settings:
    """Settings isolated to a temp data dir, no startup refresh."""
    return Settings(
        data_dir=tmp_path / "data",
        market_data_provider=ProviderKind.STUB,
        fetch_delay_seconds=0,
        refresh_on_startup=False,
    )


@pytest.fixture
def app_context(test_settings, blob_repo, deterministic_provider, instant_queue) -> AppContext:
    """Provide an initialized AppContext over in-memory SQLite."""
    ctx = AppContext(
        settings=test_settings,
        provider=deterministic_provider,
        blob_repo=blob_repo,
        queue=instant_queue,
    )
    ctx.initialize()
    yield ctx
    ctx.close()


@pytest.fixture
def client(app_context) -> TestClient:
    """Provide FastAPI test client bound to the test AppContext."""
    set_app_context(app_context)
    app.dependency_overrides[get_context] = lambda: app_context
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
    set_app_context(None)


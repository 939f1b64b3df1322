"""Application context for in-process service management.

Provides a centralized way to access the store, orchestrator and snapshot
utilities. Used by the FastAPI dependencies and by tests.
"""

import logging
from pathlib import Path
from typing import Optional

from portfolio_tracker.config.settings import Settings, set_settings, get_settings
from portfolio_tracker.core.events import EventBus
from portfolio_tracker.domain.views import RefreshSummary
from portfolio_tracker.providers import MarketDataProvider, build_provider
from portfolio_tracker.repositories.sqlalchemy.database import (
    init_db_with_path,
    init_db,
    reset_database,
    get_session,
)
from portfolio_tracker.repositories.sqlalchemy import SqlAlchemyBlobRepository
from portfolio_tracker.services import (
    FetchOrchestrator,
    PacedTaskQueue,
    PortfolioStore,
    PriceCache,
)
from portfolio_tracker.snapshot import SnapshotExporter, SnapshotImporter

logger = logging.getLogger(__name__)


class AppContext:
    """
    Application context providing in-process access to all services.

    One context owns exactly one PortfolioStore, so ledger and cache state
    live here rather than in module globals.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        provider: Optional[MarketDataProvider] = None,
        blob_repo=None,
        queue: Optional[PacedTaskQueue] = None,
    ):
        """
        Args:
            settings: Settings to use; defaults to the global settings
            provider: Market data provider; defaults to the one named in settings
            blob_repo: Blob repository; defaults to SQLAlchemy on the settings DB
            queue: Fetch pacing queue; defaults to settings.fetch_delay_seconds
        """
        self._settings = settings
        self._provider = provider
        self._blob_repo = blob_repo
        self._queue = queue
        self._session = None
        self._initialized = False

        self.events = EventBus()
        self._cache = PriceCache()
        self._store: Optional[PortfolioStore] = None
        self._orchestrator: Optional[FetchOrchestrator] = None
        self._importer: Optional[SnapshotImporter] = None
        self._exporter: Optional[SnapshotExporter] = None

    def initialize(self, data_dir: Optional[Path] = None) -> None:
        """
        Initialize storage and load holdings.

        Args:
            data_dir: Data directory path. Uses settings if not provided.
        """
        if data_dir:
            base = self._settings or get_settings()
            self._settings = base.model_copy(update={"data_dir": Path(data_dir)})
        if self._settings is not None:
            set_settings(self._settings)
        settings = self.settings

        if self._blob_repo is None:
            if data_dir:
                reset_database()
                init_db_with_path(settings.get_data_dir() / "portfolio.db")
            else:
                init_db()
            self._session = get_session()
            self._blob_repo = SqlAlchemyBlobRepository(self._session)

        self._store = None
        self._orchestrator = None
        self._importer = None
        positions = self.store.load()
        self._initialized = True
        logger.info("Context initialized with %d position(s)", len(positions))

    @property
    def is_initialized(self) -> bool:
        """Check if context is initialized."""
        return self._initialized

    @property
    def settings(self) -> Settings:
        return self._settings or get_settings()

    @property
    def provider(self) -> MarketDataProvider:
        if self._provider is None:
            settings = self.settings
            self._provider = build_provider(
                settings.market_data_provider,
                period=settings.history_period,
                interval=settings.history_interval,
            )
        return self._provider

    @property
    def store(self) -> PortfolioStore:
        """Get the PortfolioStore instance."""
        if self._store is None:
            if self._blob_repo is None:
                raise RuntimeError("AppContext.initialize() must be called before use")
            self._store = PortfolioStore(
                blob_repo=self._blob_repo,
                events=self.events,
                cache=self._cache,
                storage_key=self.settings.storage_key,
            )
        return self._store

    @property
    def orchestrator(self) -> FetchOrchestrator:
        """Get the FetchOrchestrator instance."""
        if self._orchestrator is None:
            if self._queue is None:
                self._queue = PacedTaskQueue(self.settings.fetch_delay_seconds)
            self._orchestrator = FetchOrchestrator(
                provider=self.provider,
                cache=self._cache,
                events=self.events,
                queue=self._queue,
            )
        return self._orchestrator

    @property
    def snapshot_importer(self) -> SnapshotImporter:
        if self._importer is None:
            self._importer = SnapshotImporter(store=self.store, orchestrator=self.orchestrator)
        return self._importer

    @property
    def snapshot_exporter(self) -> SnapshotExporter:
        if self._exporter is None:
            self._exporter = SnapshotExporter()
        return self._exporter

    def refresh_all(self) -> RefreshSummary:
        """Refresh prices for every held symbol."""
        return self.orchestrator.fetch_all(self.store.symbols())

    def close(self) -> None:
        """Clean up resources."""
        if self._session:
            self._session.close()
            self._session = None


# Global application context (singleton for the API process)
_app_context: Optional[AppContext] = None


def get_app_context() -> AppContext:
    """Get or create the global application context."""
    global _app_context
    if _app_context is None:
        _app_context = AppContext()
    return _app_context


def set_app_context(context: Optional[AppContext]) -> None:
    """Set (or clear) the global application context."""
    global _app_context
    _app_context = context

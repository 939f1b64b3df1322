"""Portfolio store: owns the ledger and price cache and persists holdings."""

import logging
import threading
from typing import Iterable, Optional

from portfolio_tracker.core.events import EventBus, EventType
from portfolio_tracker.core.exceptions import SnapshotError, ValidationError
from portfolio_tracker.domain.models import Position, PositionInput, normalize_symbol
from portfolio_tracker.domain.views import RowValuation, ValuationSummary
from portfolio_tracker.repositories.protocols import BlobRepository
from portfolio_tracker.services.ledger_service import LedgerService
from portfolio_tracker.services.price_cache import PriceCache
from portfolio_tracker.services.valuation_service import ValuationService
from portfolio_tracker.snapshot import export_json, parse_snapshot

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "portfolio"


class PortfolioStore:
    """
    Explicit owner of the in-memory ledger and price cache.

    Lifecycle: load() from the blob store at startup, flush after every
    ledger mutation. Each mutation emits LEDGER_CHANGED once it is persisted.
    Ledger mutations are serialized with a lock.
    """

    def __init__(
        self,
        blob_repo: BlobRepository,
        events: Optional[EventBus] = None,
        cache: Optional[PriceCache] = None,
        storage_key: str = DEFAULT_STORAGE_KEY,
        valuation: Optional[ValuationService] = None,
    ):
        self._blob_repo = blob_repo
        self._events = events or EventBus()
        self._cache = cache or PriceCache()
        self._storage_key = storage_key
        self._valuation = valuation or ValuationService()
        self._ledger = LedgerService()
        self._lock = threading.RLock()

    @property
    def ledger(self) -> LedgerService:
        return self._ledger

    @property
    def cache(self) -> PriceCache:
        return self._cache

    @property
    def events(self) -> EventBus:
        return self._events

    def load(self) -> list[Position]:
        """
        Load holdings from storage.

        A missing blob means an empty portfolio. A blob that cannot be parsed
        is logged and also treated as empty; it is left in place until the
        next flush overwrites it.
        """
        raw = self._blob_repo.get(self._storage_key)
        with self._lock:
            if raw is None:
                self._ledger = LedgerService()
                return []
            try:
                self._ledger = LedgerService(parse_snapshot(raw, strict=False))
            except (SnapshotError, ValidationError) as e:
                logger.error("Stored portfolio %r is unreadable, starting empty: %s", self._storage_key, e)
                self._ledger = LedgerService()
            logger.info("Loaded %d position(s) from storage", len(self._ledger))
            return self._ledger.list_positions()

    def merge(self, symbol: str, quantity: float, cost: float) -> Position:
        """Merge a buy into the ledger, persist, and notify."""
        with self._lock:
            candidate = self._copy_ledger()
            position = candidate.merge(symbol, quantity, cost)
            self._commit(candidate)
        self._events.emit(EventType.LEDGER_CHANGED, position.symbol)
        return position

    def remove(self, symbol: str) -> bool:
        """Remove a holding and its cached prices; no-op if absent."""
        with self._lock:
            candidate = self._copy_ledger()
            if not candidate.remove(symbol):
                return False
            self._commit(candidate)
            self._cache.evict(symbol)
        self._events.emit(EventType.LEDGER_CHANGED, normalize_symbol(symbol))
        return True

    def replace_all(self, positions: Iterable["Position | PositionInput"]) -> list[Position]:
        """Replace every holding (restore), persist, and notify."""
        with self._lock:
            candidate = LedgerService()
            replaced = candidate.replace_all(positions)
            self._commit(candidate)
        self._events.emit(EventType.LEDGER_CHANGED)
        return replaced

    def positions(self) -> list[Position]:
        return self._ledger.list_positions()

    def symbols(self) -> list[str]:
        return self._ledger.symbols()

    def summary(self) -> ValuationSummary:
        """Fresh portfolio totals from the current ledger and cache."""
        return self._valuation.summarize(self.positions(), self._cache)

    def rows(self) -> list[RowValuation]:
        """Fresh per-row valuations in display order."""
        return self._valuation.rows(self.positions(), self._cache)

    def _copy_ledger(self) -> LedgerService:
        return LedgerService(self._ledger.list_positions())

    def _commit(self, ledger: LedgerService) -> None:
        """Persist ledger, then make it current; a failed write leaves the old state in place."""
        self._blob_repo.put(self._storage_key, export_json(ledger.list_positions(), indent=None))
        self._ledger = ledger

"""Fetch orchestrator: paced, failure-isolated price retrieval."""

import logging
from typing import Iterable, Optional

from portfolio_tracker.core.events import EventBus, EventType
from portfolio_tracker.core.timezone import now_eastern
from portfolio_tracker.domain.models import PriceRecord, normalize_symbol
from portfolio_tracker.domain.views import FetchResult, RefreshSummary
from portfolio_tracker.providers.market_data_provider import MarketDataProvider
from portfolio_tracker.services.fetch_scheduler import PacedTaskQueue
from portfolio_tracker.services.price_cache import PriceCache

logger = logging.getLogger(__name__)

DEFAULT_FETCH_DELAY_SECONDS = 0.5


class FetchOrchestrator:
    """
    Retrieves price data per symbol and writes it into the PriceCache.

    Every request goes through one PacedTaskQueue, so fetches never overlap
    and consecutive requests are separated by the configured delay. A failing
    symbol is logged and reported in the result; it never raises to the
    caller and never aborts a batch.
    """

    def __init__(
        self,
        provider: MarketDataProvider,
        cache: PriceCache,
        events: Optional[EventBus] = None,
        queue: Optional[PacedTaskQueue] = None,
    ):
        self._provider = provider
        self._cache = cache
        self._events = events or EventBus()
        self._queue = queue or PacedTaskQueue(DEFAULT_FETCH_DELAY_SECONDS)

    @property
    def cache(self) -> PriceCache:
        return self._cache

    def fetch_one(self, symbol: str) -> FetchResult:
        """Fetch one symbol (waiting for the pacing slot) and store the result."""
        result = self._queue.submit(normalize_symbol(symbol), self._fetch)
        self._notify(result)
        return result

    def fetch_all(self, symbols: Iterable[str]) -> RefreshSummary:
        """
        Fetch symbols strictly in order, one at a time, with the pacing delay
        between requests.

        Blank and duplicate symbols are dropped. Returns a summary of
        successes and failures; never raises for a per-symbol failure.
        """
        ordered = _dedupe(symbols)
        summary = RefreshSummary(requested=len(ordered))
        if not ordered:
            return summary

        logger.info("Refreshing prices for %d symbol(s)", len(ordered))
        for result in self._queue.run(ordered, self._fetch, on_result=self._notify):
            summary.results.append(result)
            if result.ok:
                summary.succeeded += 1
            else:
                summary.failed += 1
                summary.errors.append(f"{result.symbol}: {result.error}")

        logger.info(
            "Price refresh finished: %d ok, %d failed",
            summary.succeeded,
            summary.failed,
        )
        return summary

    def refresh_stale(self, symbols: Iterable[str], ttl_seconds: float) -> RefreshSummary:
        """Fetch only the symbols whose cached record is missing or older than ttl."""
        return self.fetch_all(self._cache.stale_symbols(_dedupe(symbols), ttl_seconds))

    def _fetch(self, symbol: str) -> FetchResult:
        if not symbol:
            return FetchResult(symbol=symbol, ok=False, error="Symbol is required")

        try:
            snapshot = self._provider.get_price_data(symbol)
            record = PriceRecord.from_snapshot(snapshot, fetched_at=now_eastern())
        except Exception as e:
            logger.warning("Error fetching data for %s: %s", symbol, e)
            return FetchResult(symbol=symbol, ok=False, error=str(e) or e.__class__.__name__)

        self._cache.put(symbol, record)
        return FetchResult(symbol=symbol, ok=True)

    def _notify(self, result: FetchResult) -> None:
        # Runs outside the queue lock; listeners may fetch again.
        if result.ok:
            self._events.emit(EventType.PRICES_UPDATED, result.symbol)


def _dedupe(symbols: Iterable[str]) -> list[str]:
    seen: set[str] = set()
    ordered = []
    for s in symbols:
        sym = normalize_symbol(s)
        if sym and sym not in seen:
            seen.add(sym)
            ordered.append(sym)
    return ordered

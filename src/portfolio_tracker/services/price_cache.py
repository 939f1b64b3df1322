"""Per-symbol price cache with staleness tracking."""

import threading
from datetime import datetime
from typing import Iterable, Optional

from portfolio_tracker.core.timezone import now_eastern
from portfolio_tracker.domain.models import PriceRecord, normalize_symbol


class PriceCache:
    """
    In-memory store of the last-known PriceRecord per symbol.

    A symbol that was never fetched has no entry and get() returns None;
    callers must render that as "loading", never as a zero price. Writes are
    full-record replacements guarded by a lock (last write wins).
    """

    def __init__(self) -> None:
        self._records: dict[str, PriceRecord] = {}
        self._lock = threading.Lock()

    def get(self, symbol: str) -> Optional[PriceRecord]:
        """Return the record for symbol, or None if never fetched."""
        return self._records.get(normalize_symbol(symbol))

    def put(self, symbol: str, record: PriceRecord) -> None:
        """Overwrite the full record for symbol."""
        with self._lock:
            self._records[normalize_symbol(symbol)] = record

    def evict(self, symbol: str) -> bool:
        """Drop the record for symbol; returns whether one existed."""
        with self._lock:
            return self._records.pop(normalize_symbol(symbol), None) is not None

    def clear(self) -> None:
        with self._lock:
            self._records.clear()

    def is_stale(
        self,
        symbol: str,
        ttl_seconds: float,
        now: Optional[datetime] = None,
    ) -> bool:
        """Missing records are stale; otherwise stale once ttl_seconds have elapsed."""
        record = self.get(symbol)
        if record is None:
            return True
        elapsed = ((now or now_eastern()) - record.fetched_at).total_seconds()
        return elapsed >= ttl_seconds

    def stale_symbols(
        self,
        symbols: Iterable[str],
        ttl_seconds: float,
        now: Optional[datetime] = None,
    ) -> list[str]:
        """Subset of symbols needing a refresh, in input order."""
        now = now or now_eastern()
        return [s for s in symbols if self.is_stale(s, ttl_seconds, now=now)]

    def symbols(self) -> list[str]:
        return list(self._records.keys())

    def __contains__(self, symbol: object) -> bool:
        return isinstance(symbol, str) and normalize_symbol(symbol) in self._records

    def __len__(self) -> int:
        return len(self._records)

"""Snapshot import: parse, validate and restore holdings from JSON."""

import json
import logging
from typing import TYPE_CHECKING, Any, Optional

from portfolio_tracker.core.exceptions import MalformedFileError, NotAListError, SchemaError
from portfolio_tracker.domain.views import ImportSummary
from portfolio_tracker.snapshot.exporter import SNAPSHOT_FIELDS
from portfolio_tracker.domain.models import PositionInput

if TYPE_CHECKING:
    from portfolio_tracker.services.fetch_orchestrator import FetchOrchestrator
    from portfolio_tracker.services.portfolio_store import PortfolioStore

logger = logging.getLogger(__name__)


def parse_snapshot(data: bytes | str, strict: bool = True) -> list[PositionInput]:
    """
    Parse a snapshot into position inputs.

    strict applies the import rule that symbol, qty and cost must all be
    truthy. The store reads its own blob with strict=False so that a
    zero-cost holding survives a reload; range checks are left to the ledger.

    Raises:
        MalformedFileError: data is not valid UTF-8 JSON
        NotAListError: the top-level value is not a list
        SchemaError: an element lacks a truthy symbol, qty or cost, or has
            non-numeric qty/cost
    """
    try:
        text = data.decode("utf-8-sig") if isinstance(data, (bytes, bytearray)) else data
        loaded = json.loads(text)
    except (UnicodeDecodeError, ValueError) as e:
        raise MalformedFileError(f"Error parsing JSON file: {e}") from e

    if not isinstance(loaded, list):
        raise NotAListError()

    return [_parse_record(index, item, strict) for index, item in enumerate(loaded)]


def _parse_record(index: int, item: Any, strict: bool = True) -> PositionInput:
    if not isinstance(item, dict):
        raise SchemaError(f"Invalid file format: item {index} is not an object.")

    if strict:
        # Every field must be truthy, so a cost of 0 is rejected here
        missing = [key for key in SNAPSHOT_FIELDS if not item.get(key)]
    else:
        missing = [key for key in SNAPSHOT_FIELDS if item.get(key) is None]
    if missing:
        raise SchemaError(
            f"Invalid file format: Missing required fields {missing} in item {index}."
        )

    symbol = item["symbol"]
    if not isinstance(symbol, str):
        raise SchemaError(f"Invalid file format: symbol in item {index} is not text.")

    return PositionInput(
        symbol=symbol,
        quantity=_parse_number(index, "qty", item["qty"]),
        cost=_parse_number(index, "cost", item["cost"]),
    )


def _parse_number(index: int, key: str, value: Any) -> float:
    if isinstance(value, bool):
        raise SchemaError(f"Invalid file format: {key} in item {index} is not a number.")
    try:
        return float(value)
    except (TypeError, ValueError):
        raise SchemaError(f"Invalid file format: {key} in item {index} is not a number.")


class SnapshotImporter:
    """
    Restores holdings from a snapshot.

    Parsing and validation complete before the ledger is touched; a bad file
    never partially applies. After a successful replace every symbol in the
    new ledger is refreshed.
    """

    def __init__(
        self,
        store: "PortfolioStore",
        orchestrator: Optional["FetchOrchestrator"] = None,
    ):
        self._store = store
        self._orchestrator = orchestrator

    def parse(self, data: bytes | str) -> list[PositionInput]:
        return parse_snapshot(data)

    def preview(self, data: bytes | str) -> int:
        """Number of records a restore would apply (for the confirm prompt)."""
        return len(self.parse(data))

    def restore(self, data: bytes | str, refresh: bool = True) -> ImportSummary:
        """
        Replace all holdings with the snapshot contents.

        Args:
            data: Snapshot bytes or text
            refresh: Fetch prices for the new symbol set after replacing

        Returns:
            Summary with imported count, symbols and refresh outcome
        """
        inputs = self.parse(data)
        positions = self._store.replace_all(inputs)
        summary = ImportSummary(
            imported_count=len(inputs),
            symbols=[p.symbol for p in positions],
        )
        logger.info("Restored %d position(s) from snapshot", len(positions))

        if refresh and self._orchestrator is not None:
            summary.refresh = self._orchestrator.fetch_all(summary.symbols)
        return summary

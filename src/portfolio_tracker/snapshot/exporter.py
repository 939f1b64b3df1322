"""Snapshot export: holdings to a portable JSON list."""

import json
from datetime import date
from pathlib import Path
from typing import Iterable, Optional

from portfolio_tracker.core.exceptions import NoDataError
from portfolio_tracker.core.timezone import today_eastern
from portfolio_tracker.domain.models import Position

# Record keys shared with the importer
SNAPSHOT_FIELDS = ["symbol", "qty", "cost"]

FILENAME_PREFIX = "portfolio_backup_"


def positions_to_records(positions: Iterable[Position]) -> list[dict]:
    """Convert positions to {symbol, qty, cost} records in display order."""
    return [
        {"symbol": p.symbol, "qty": p.quantity, "cost": p.average_cost}
        for p in positions
    ]


def export_json(positions: Iterable[Position], indent: Optional[int] = 2) -> str:
    """Serialize positions as a JSON list (pretty-printed by default)."""
    return json.dumps(positions_to_records(positions), indent=indent)


def default_filename(today: Optional[date] = None) -> str:
    """Backup filename embedding the date, e.g. portfolio_backup_2024-06-15.json."""
    return f"{FILENAME_PREFIX}{(today or today_eastern()).isoformat()}.json"


class SnapshotExporter:
    """
    Exporter for holdings backups.

    Only holdings are written; cached prices are never part of a snapshot.
    Exporting an empty ledger raises NoDataError instead of writing "[]".
    """

    def export_json(self, positions: Iterable[Position]) -> str:
        """Return the pretty-printed JSON snapshot."""
        items = list(positions)
        if not items:
            raise NoDataError()
        return export_json(items)

    def export_bytes(self, positions: Iterable[Position]) -> bytes:
        return self.export_json(positions).encode("utf-8")

    def export_file(
        self,
        positions: Iterable[Position],
        directory: str | Path,
        today: Optional[date] = None,
    ) -> Path:
        """
        Write a dated snapshot file into directory.

        Args:
            positions: Holdings to export
            directory: Output directory (created if missing)
            today: Date used in the filename (defaults to today, US/Eastern)

        Returns:
            Path of the written file

        Raises:
            NoDataError: there are no positions to write
        """
        content = self.export_json(positions)
        out_dir = Path(directory)
        out_dir.mkdir(parents=True, exist_ok=True)
        file_path = out_dir / default_filename(today)
        file_path.write_text(content, encoding="utf-8")
        return file_path

"""Snapshot (backup/restore) utilities."""

from portfolio_tracker.snapshot.exporter import (
    SnapshotExporter,
    default_filename,
    export_json,
    positions_to_records,
)
from portfolio_tracker.snapshot.importer import SnapshotImporter, parse_snapshot

__all__ = [
    "SnapshotExporter",
    "SnapshotImporter",
    "default_filename",
    "export_json",
    "parse_snapshot",
    "positions_to_records",
]

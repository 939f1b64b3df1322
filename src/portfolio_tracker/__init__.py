"""Portfolio tracker: holdings ledger, price cache and JSON snapshots."""

__version__ = "0.1.0"

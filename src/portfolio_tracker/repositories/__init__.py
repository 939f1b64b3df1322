"""Repository layer - data access abstractions and implementations."""

from portfolio_tracker.repositories.protocols import BlobRepository

__all__ = [
    "BlobRepository",
]

"""Repository protocol definitions (interfaces)."""

from portfolio_tracker.repositories.protocols.blob_repo import BlobRepository

__all__ = [
    "BlobRepository",
]

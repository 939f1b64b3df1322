"""Blob repository protocol for opaque keyed storage."""

from typing import Protocol, Optional


class BlobRepository(Protocol):
    """Interface for a key -> text blob store."""

    def get(self, key: str) -> Optional[str]:
        """Return the blob stored under key, or None if absent."""
        ...

    def put(self, key: str, value: str) -> None:
        """Insert or overwrite the blob stored under key."""
        ...

    def delete(self, key: str) -> None:
        """Delete the blob stored under key (no-op if absent)."""
        ...

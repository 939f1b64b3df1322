"""SQLAlchemy implementation of BlobRepository."""

from typing import Optional

from sqlalchemy.orm import Session

from portfolio_tracker.core.timezone import now_eastern
from portfolio_tracker.repositories.sqlalchemy.orm_models import BlobORM


class SqlAlchemyBlobRepository:
    """SQLAlchemy-backed blob repository."""

    def __init__(self, db: Session):
        self._db = db

    def get(self, key: str) -> Optional[str]:
        """Return the blob stored under key, or None if absent."""
        orm_blob = self._db.query(BlobORM).filter(BlobORM.key == key).first()
        return orm_blob.value if orm_blob else None

    def put(self, key: str, value: str) -> None:
        """Insert or overwrite the blob stored under key."""
        orm_blob = self._db.query(BlobORM).filter(BlobORM.key == key).first()
        updated_at = now_eastern().replace(tzinfo=None)

        if orm_blob:
            orm_blob.value = value
            orm_blob.updated_at_est = updated_at
        else:
            orm_blob = BlobORM(key=key, value=value, updated_at_est=updated_at)
            self._db.add(orm_blob)

        self._db.commit()

    def delete(self, key: str) -> None:
        """Delete the blob stored under key (no-op if absent)."""
        self._db.query(BlobORM).filter(BlobORM.key == key).delete()
        self._db.commit()

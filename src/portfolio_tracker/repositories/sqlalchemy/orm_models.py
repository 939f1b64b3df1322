"""SQLAlchemy ORM model definitions."""

from sqlalchemy import Column, String, DateTime, Text

from portfolio_tracker.core.timezone import now_eastern
from portfolio_tracker.repositories.sqlalchemy.database import Base


class BlobORM(Base):
    """SQLAlchemy model for a keyed text blob."""

    __tablename__ = "blobs"

    key = Column(String(255), primary_key=True)
    value = Column(Text, nullable=False)
    updated_at_est = Column(DateTime, nullable=False, default=lambda: now_eastern().replace(tzinfo=None))

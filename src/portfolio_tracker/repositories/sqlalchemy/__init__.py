"""SQLAlchemy repository implementations."""

from portfolio_tracker.repositories.sqlalchemy.database import (
    get_engine,
    get_session_factory,
    get_session,
    init_db,
    init_db_with_path,
    reset_database,
    Base,
)
from portfolio_tracker.repositories.sqlalchemy.blob_repo import SqlAlchemyBlobRepository

__all__ = [
    "get_engine",
    "get_session_factory",
    "get_session",
    "init_db",
    "init_db_with_path",
    "reset_database",
    "Base",
    "SqlAlchemyBlobRepository",
]

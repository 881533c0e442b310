"""SQLAlchemy repository implementations."""

from paper_dashboard.repositories.sqlalchemy.database import (
    Base,
    get_db,
    get_engine,
    init_db,
    reset_database,
)
from paper_dashboard.repositories.sqlalchemy.sync_repo import SqlAlchemySyncRepository

__all__ = [
    "Base",
    "get_db",
    "get_engine",
    "init_db",
    "reset_database",
    "SqlAlchemySyncRepository",
]

"""
Sync engine used by every domain service (clients, expenses, projects,
payment history).

Each request gets its own Session on a NullPool engine, so a connection lives
exactly as long as one logical request.
"""
import os
from typing import Generator

from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.pool import NullPool
from sqlmodel import Session, SQLModel, create_engine

from ..core.config import get_settings

settings = get_settings()
DATABASE_URL = settings.database_url

if settings.is_sqlite:
    _db_file = make_url(DATABASE_URL).database
    if _db_file and _db_file != ":memory:":
        os.makedirs(os.path.dirname(os.path.abspath(_db_file)), exist_ok=True)

_connect_args = {"check_same_thread": False} if settings.is_sqlite else {}
sync_engine = create_engine(
    DATABASE_URL, echo=False, connect_args=_connect_args, poolclass=NullPool
)


def set_sqlite_pragma(dbapi_connection, connection_record):
    # foreign_keys is off by default in SQLite; payment history relies on it
    # for ON DELETE CASCADE.
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON;")
    cursor.execute("PRAGMA journal_mode=WAL;")
    cursor.close()


if settings.is_sqlite:
    event.listen(sync_engine, "connect", set_sqlite_pragma)


def get_sync_session() -> Generator[Session, None, None]:
    """
    Dependency for SYNC SQLModel session injection.
    Usage: session: Session = Depends(get_sync_session)
    """
    with Session(sync_engine) as session:
        yield session


def create_sync_db_and_tables():
    """Create all tables registered in SQLModel.metadata."""
    from .. import models  # noqa: F401  (registers tables)

    SQLModel.metadata.create_all(sync_engine)

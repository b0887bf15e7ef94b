"""
Async SQLModel engine and session management for FastAPI Users.
Uses AsyncSession for compatibility with fastapi-users-db-sqlalchemy.
Reads the same DATABASE_URL as the sync engine; SQLite URLs are switched to
the aiosqlite driver.
"""

from collections.abc import AsyncGenerator

from sqlalchemy import event
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool
from sqlmodel.ext.asyncio.session import AsyncSession

from ..core.config import get_settings
from .engine_sync import set_sqlite_pragma


def to_async_url(url: str) -> str:
    if url.startswith("sqlite:"):
        return url.replace("sqlite:", "sqlite+aiosqlite:", 1)
    if url.startswith("postgresql:"):
        return url.replace("postgresql:", "postgresql+psycopg:", 1)
    return url


settings = get_settings()
ASYNC_DATABASE_URL = to_async_url(settings.database_url)

_connect_args = {"check_same_thread": False} if settings.is_sqlite else {}
# One connection per request, no pool
engine = create_async_engine(
    ASYNC_DATABASE_URL, echo=False, connect_args=_connect_args, poolclass=NullPool
)

if settings.is_sqlite:
    event.listen(engine.sync_engine, "connect", set_sqlite_pragma)

async_session_maker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency for async SQLModel session injection.
    Usage: session: AsyncSession = Depends(get_session)
    """
    async with async_session_maker() as session:
        yield session

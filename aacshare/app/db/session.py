# aacshare/app/db/session.py
"""
Async database session management for SQLAlchemy.

- Uses asyncpg for PostgreSQL
- Uses aiosqlite for SQLite (local development and tests)
- Pool settings differ for SQLite (no pooling) vs PostgreSQL
- SQLite connections get PRAGMA foreign_keys=ON so share/user
  references are enforced like on PostgreSQL
"""
from typing import AsyncGenerator

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool, AsyncAdaptedQueuePool

from aacshare.app.core.config import settings


def _create_async_engine() -> AsyncEngine:
    """
    Create and configure the async SQLAlchemy engine.

    SQLite:
    - NullPool, one connection per session
    - check_same_thread=False for async compatibility

    PostgreSQL:
    - AsyncAdaptedQueuePool, pool_size=5, max_overflow=10
    - pool_pre_ping=True to drop stale connections
    - pool_recycle=300
    """
    if settings.is_sqlite:
        sqlite_engine = create_async_engine(
            settings.DATABASE_URL,
            echo=settings.DATABASE_ECHO,
            poolclass=NullPool,
            connect_args={"check_same_thread": False},
        )

        @event.listens_for(sqlite_engine.sync_engine, "connect")
        def _enable_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        return sqlite_engine

    return create_async_engine(
        settings.DATABASE_URL,
        echo=settings.DATABASE_ECHO,
        poolclass=AsyncAdaptedQueuePool,
        pool_size=5,
        max_overflow=10,
        pool_pre_ping=True,
        pool_recycle=300,
    )


# ─────────────────────────────────────────────────────────────────────────────
# Global async engine instance
# Created once at module load, reused across all requests
# ─────────────────────────────────────────────────────────────────────────────
engine: AsyncEngine = _create_async_engine()


# ─────────────────────────────────────────────────────────────────────────────
# Async session factory
#
# expire_on_commit=False: Prevents attribute access errors after commit
# autoflush=False: Explicit flush control
# ─────────────────────────────────────────────────────────────────────────────
AsyncSessionLocal: async_sessionmaker[AsyncSession] = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency generator for database sessions.

    One session per request, closed when the request completes.
    Repositories commit their own writes; nothing is auto-committed.
    """
    async with AsyncSessionLocal() as session:
        yield session

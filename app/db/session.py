"""
Database Session Management with Connection Pooling

This module builds the async engine and session factory used by the record
store. Nothing is created at import time: the composition root (see
app.core.lifecycle) owns the engine and passes the session factory down.

Key Features:
- Database abstraction: the adapter is picked from the DATABASE_URL scheme
- Connection pooling: Configured per database type
- Async session management: one short-lived session per store operation
"""

from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession as SQLModelAsyncSession

from app.db.adapters import get_database_adapter


def build_engine(database_url: str, **kwargs) -> AsyncEngine:
    """Create the async engine through the adapter matching the URL."""
    db_adapter = get_database_adapter(database_url)
    return db_adapter.create_engine(database_url, **kwargs)


def build_session_maker(engine: AsyncEngine) -> async_sessionmaker:
    """
    Create the async session factory.

    expire_on_commit=False keeps returned records readable after the
    session that loaded them has closed.
    """
    return async_sessionmaker(
        engine,
        class_=SQLModelAsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


async def create_tables(engine: AsyncEngine) -> None:
    """Create missing tables; used for local SQLite runs and tests."""
    from app.db import models  # noqa: F401  (registers tables on the metadata)

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

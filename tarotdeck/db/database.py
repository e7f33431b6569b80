"""
Database engine and session management.

One async engine per process. Request handlers receive a session through
the get_session dependency; startup code uses session_scope().
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from tarotdeck.config import settings
from tarotdeck.models.db import Base

engine = create_async_engine(
    settings.database_url,
    echo=settings.debug,
    pool_pre_ping=True,
)

async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


@asynccontextmanager
async def session_scope() -> AsyncGenerator[AsyncSession, None]:
    """
    Open a session that commits on success and rolls back on any error.

    Usage:
        async with session_scope() as session:
            await create_deck(session, name="...")
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency providing a request-scoped session.

    Routes that write commit explicitly before building their response;
    the commit on exit only covers reads.
    """
    async with session_scope() as session:
        yield session


async def init_db() -> None:
    """Create all tables that do not exist yet. Called once at startup."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

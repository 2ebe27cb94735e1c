"""Async engine and session factory for PostgreSQL (asyncpg)."""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from newsroom.config import Settings


def create_engine(settings: Settings) -> AsyncEngine:
    """Engine for ``settings.database_url``; echoes SQL when ``debug`` is set."""
    return create_async_engine(
        settings.database_url,
        echo=settings.debug,
        pool_pre_ping=True,
        pool_size=settings.database.pool_size,
        max_overflow=settings.database.max_overflow,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # Domain models are immutable snapshots, so nothing needs refreshing after commit
    return async_sessionmaker(engine, expire_on_commit=False, autoflush=False)

"""Persistence providers: PostgreSQL in production."""

from collections.abc import AsyncIterator

import logfire
from dishka import Scope, provide
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from newsroom.config import Settings
from newsroom.domain.repository import (
    CommentRepository,
    PostRepository,
    TagRepository,
    UserRepository,
)
from newsroom.persistence.database import create_engine, create_session_factory
from newsroom.persistence.repository import (
    PostgresCommentRepository,
    PostgresPostRepository,
    PostgresTagRepository,
    PostgresUserRepository,
)
from newsroom.util.di.base import ProviderBase
from newsroom.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Swappable persistence component (see ``tests/di`` for the mock)."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Repositories backed by one PostgreSQL transaction per request."""

    __is_mock__ = False

    users = provide(
        PostgresUserRepository, provides=UserRepository, scope=Scope.REQUEST
    )
    posts = provide(
        PostgresPostRepository, provides=PostRepository, scope=Scope.REQUEST
    )
    comments = provide(
        PostgresCommentRepository, provides=CommentRepository, scope=Scope.REQUEST
    )
    tags = provide(PostgresTagRepository, provides=TagRepository, scope=Scope.REQUEST)

    @provide(scope=Scope.APP)
    async def get_engine(self, settings: Settings) -> AsyncIterator[AsyncEngine]:
        engine = create_engine(settings)
        instrument_sqlalchemy(engine)
        yield engine
        await engine.dispose()

    @provide(scope=Scope.APP)
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        return create_session_factory(engine)

    @provide(scope=Scope.REQUEST)
    async def get_session(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncIterator[AsyncSession]:
        """Session for one request: committed on success, rolled back on error.

        A post delete and its comment cascade, or a post save and its tag
        links, therefore land together or not at all.
        """
        async with session_factory() as session:
            try:
                yield session
            except Exception as e:
                logfire.warn("Rolling back request transaction", error=str(e))
                await session.rollback()
                raise
            await session.commit()

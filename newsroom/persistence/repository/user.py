"""PostgreSQL implementation of User repository."""

from typing import Optional

import logfire
from sqlalchemy import delete, func, or_, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from newsroom.domain.model import User
from newsroom.domain.query import UserQuery
from newsroom.domain.repository import UserRepository
from newsroom.domain.value import UserId, UserSortField
from newsroom.persistence.mappers import row_to_user, user_to_dict
from newsroom.persistence.repository.common import like_pattern
from newsroom.persistence.tables import users_table


class PostgresUserRepository(UserRepository):
    """PostgreSQL implementation of UserRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    @staticmethod
    def _search_clause(query: Optional[UserQuery]):
        if query is None or not query.search:
            return None
        pattern = like_pattern(query.search)
        return or_(
            users_table.c.name.ilike(pattern, escape="\\"),
            users_table.c.email.ilike(pattern, escape="\\"),
        )

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        stmt = select(users_table).where(users_table.c.id == user_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_user(row._asdict()) if row else None

    async def find_by_email(self, email: str) -> Optional[User]:
        """Find a user by email, ignoring case."""
        stmt = select(users_table).where(
            func.lower(users_table.c.email) == email.lower()
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_user(row._asdict()) if row else None

    async def find_by_ids(self, user_ids: list[UserId]) -> list[User]:
        if not user_ids:
            return []
        stmt = select(users_table).where(users_table.c.id.in_(user_ids))
        result = await self.session.execute(stmt)
        return [row_to_user(row._asdict()) for row in result.fetchall()]

    async def find_page(self, query: UserQuery) -> list[User]:
        """Find one page of users ordered by the requested field."""
        with logfire.span(
            "user_repository.find_page",
            search=query.search,
            sort=query.sort.value,
            page=query.page,
        ):
            if query.page < 1:
                return []

            stmt = select(users_table)
            clause = self._search_clause(query)
            if clause is not None:
                stmt = stmt.where(clause)

            if query.sort == UserSortField.NAME:
                stmt = stmt.order_by(func.lower(users_table.c.name).nulls_first())
            elif query.sort == UserSortField.EMAIL:
                stmt = stmt.order_by(func.lower(users_table.c.email))
            else:
                stmt = stmt.order_by(users_table.c.created_at)

            stmt = stmt.limit(query.limit).offset(query.offset)
            result = await self.session.execute(stmt)
            return [row_to_user(row._asdict()) for row in result.fetchall()]

    async def count(self, query: Optional[UserQuery] = None) -> int:
        stmt = select(func.count()).select_from(users_table)
        clause = self._search_clause(query)
        if clause is not None:
            stmt = stmt.where(clause)
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def save(self, user: User) -> User:
        """Insert the user, or update it if the id already exists."""
        with logfire.span("user_repository.save", user_id=str(user.id)):
            values = user_to_dict(user)
            stmt = insert(users_table).values(**values)
            stmt = stmt.on_conflict_do_update(
                index_elements=[users_table.c.id],
                set_={k: v for k, v in values.items() if k != "id"},
            )
            await self.session.execute(stmt)
            await self.session.flush()
            return user

    async def delete(self, user_id: UserId) -> bool:
        """Delete a user; posts and comments cascade through foreign keys."""
        stmt = (
            delete(users_table)
            .where(users_table.c.id == user_id)
            .returning(users_table.c.id)
        )
        result = await self.session.execute(stmt)
        deleted = result.fetchone() is not None
        await self.session.flush()
        return deleted

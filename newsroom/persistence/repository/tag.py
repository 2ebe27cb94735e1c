"""PostgreSQL implementation of Tag repository."""

import logfire
from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from newsroom.domain.model import Tag
from newsroom.domain.repository import TagRepository
from newsroom.domain.value import TagName
from newsroom.persistence.mappers import row_to_tag, tag_to_dict
from newsroom.persistence.tables import tags_table


class PostgresTagRepository(TagRepository):
    """PostgreSQL implementation of TagRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: Async database session
        """
        self.session = session

    async def find_by_names(self, names: list[TagName]) -> list[Tag]:
        """Find multiple tags by names in a single query."""
        if not names:
            return []

        stmt = select(tags_table).where(
            tags_table.c.name.in_([name.root for name in names])
        )
        result = await self.session.execute(stmt)
        return [row_to_tag(row._asdict()) for row in result.fetchall()]

    async def find_all(self) -> list[Tag]:
        """Find all tags ordered by name."""
        stmt = select(tags_table).order_by(tags_table.c.name)
        result = await self.session.execute(stmt)
        return [row_to_tag(row._asdict()) for row in result.fetchall()]

    async def ensure(self, names: list[TagName]) -> list[Tag]:
        """Insert missing tags, tolerating concurrent inserts of the same name."""
        with logfire.span("tag_repository.ensure", tags=[n.root for n in names]):
            if not names:
                return []

            existing = {tag.name.root for tag in await self.find_by_names(names)}
            missing = [name for name in names if name.root not in existing]
            for name in missing:
                stmt = (
                    insert(tags_table)
                    .values(**tag_to_dict(Tag.new(name)))
                    .on_conflict_do_nothing(index_elements=[tags_table.c.name])
                )
                await self.session.execute(stmt)
            if missing:
                await self.session.flush()
                logfire.info("Tags created", tags=[n.root for n in missing])

            by_name = {tag.name.root: tag for tag in await self.find_by_names(names)}
            ordered: dict[str, Tag] = {}
            for name in names:
                if name.root in by_name:
                    ordered.setdefault(name.root, by_name[name.root])
            return list(ordered.values())

"""PostgreSQL implementation of Post repository."""

from collections import defaultdict
from typing import Optional
from uuid import UUID

import logfire
from sqlalchemy import delete, exists, func, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from newsroom.domain.model import Post
from newsroom.domain.query import PostQuery
from newsroom.domain.repository import PostRepository
from newsroom.domain.value import PostId, PostStatus, Slug
from newsroom.persistence.mappers import post_to_dict, row_to_post
from newsroom.persistence.repository.common import like_pattern
from newsroom.persistence.tables import post_tags_table, posts_table, tags_table


class PostgresPostRepository(PostRepository):
    """PostgreSQL implementation of PostRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def _fetch_tags_for_posts(
        self, post_ids: list[UUID]
    ) -> dict[UUID, list[str]]:
        """Fetch tag names for multiple posts in a single query.

        Args:
            post_ids: List of post IDs

        Returns:
            Dict mapping post_id -> list of tag names, alphabetical
        """
        if not post_ids:
            return {}

        stmt = (
            select(post_tags_table.c.post_id, tags_table.c.name)
            .select_from(post_tags_table)
            .join(tags_table, post_tags_table.c.tag_id == tags_table.c.id)
            .where(post_tags_table.c.post_id.in_(post_ids))
            .order_by(tags_table.c.name)
        )
        result = await self.session.execute(stmt)

        post_tag_map: dict[UUID, list[str]] = defaultdict(list)
        for row in result.fetchall():
            post_tag_map[row.post_id].append(row.name)
        return post_tag_map

    async def _to_posts(self, rows) -> list[Post]:
        post_tag_map = await self._fetch_tags_for_posts([row.id for row in rows])
        return [
            row_to_post(row._asdict(), tag_names=post_tag_map.get(row.id, []))
            for row in rows
        ]

    @staticmethod
    def _filters(query: PostQuery) -> list:
        """Translate the query filters into WHERE clauses."""
        clauses = []
        if query.published_only:
            clauses.append(posts_table.c.status == PostStatus.PUBLISHED.value)
        if query.author_id is not None:
            clauses.append(posts_table.c.author_id == query.author_id)
        if query.search:
            clauses.append(
                posts_table.c.title.ilike(like_pattern(query.search), escape="\\")
            )
        if query.tags:
            # Any requested tag is enough
            clauses.append(
                exists(
                    select(1)
                    .select_from(post_tags_table)
                    .join(tags_table, post_tags_table.c.tag_id == tags_table.c.id)
                    .where(
                        post_tags_table.c.post_id == posts_table.c.id,
                        tags_table.c.name.in_(query.tag_names),
                    )
                )
            )
        return clauses

    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID."""
        with logfire.span("post_repository.find_by_id", post_id=str(post_id)):
            stmt = select(posts_table).where(posts_table.c.id == post_id)
            result = await self.session.execute(stmt)
            row = result.fetchone()
            if not row:
                return None
            return (await self._to_posts([row]))[0]

    async def find_by_slug(self, slug: Slug) -> Optional[Post]:
        """Find a post by slug."""
        with logfire.span("post_repository.find_by_slug", slug=str(slug)):
            stmt = select(posts_table).where(posts_table.c.slug == str(slug))
            result = await self.session.execute(stmt)
            row = result.fetchone()
            if not row:
                return None
            return (await self._to_posts([row]))[0]

    async def slug_exists(
        self, slug: Slug, exclude_post_id: Optional[PostId] = None
    ) -> bool:
        """Check if another post holds the slug."""
        stmt = (
            select(func.count())
            .select_from(posts_table)
            .where(posts_table.c.slug == str(slug))
        )
        if exclude_post_id is not None:
            stmt = stmt.where(posts_table.c.id != exclude_post_id)
        result = await self.session.execute(stmt)
        exists_ = (result.scalar() or 0) > 0
        logfire.debug("Slug existence check", slug=str(slug), exists=exists_)
        return exists_

    async def find_page(self, query: PostQuery) -> list[Post]:
        """Run the listing query and return one page."""
        with logfire.span(
            "post_repository.find_page",
            search=query.search,
            tags=query.tag_names,
            sort=query.sort.value,
            limit=query.limit,
            offset=query.offset,
        ):
            if query.page < 1:
                return []

            order = (
                posts_table.c.created_at.desc()
                if query.descending
                else posts_table.c.created_at.asc()
            )
            stmt = (
                select(posts_table)
                .where(*self._filters(query))
                .order_by(order)
                .limit(query.limit)
                .offset(query.offset)
            )
            result = await self.session.execute(stmt)
            rows = result.fetchall()
            if not rows:
                logfire.info("No posts found")
                return []

            posts = await self._to_posts(rows)
            logfire.info("Found posts", count=len(posts))
            return posts

    async def count(self, query: PostQuery) -> int:
        """Count posts matching the query filters."""
        stmt = (
            select(func.count())
            .select_from(posts_table)
            .where(*self._filters(query))
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def save(self, post: Post) -> Post:
        """Save a post (create or update) and replace its tag links."""
        with logfire.span(
            "post_repository.save",
            post_id=str(post.id),
            title=post.title,
            tags=[t.root for t in post.tag_names],
        ):
            existing = await self.session.execute(
                select(posts_table.c.id).where(posts_table.c.id == post.id)
            )
            post_dict = post_to_dict(post)

            if existing.fetchone():
                logfire.info("Updating existing post", post_id=str(post.id))
                await self.session.execute(
                    posts_table.update()
                    .where(posts_table.c.id == post.id)
                    .values(**post_dict)
                )
                await self.session.execute(
                    delete(post_tags_table).where(post_tags_table.c.post_id == post.id)
                )
            else:
                logfire.info("Inserting new post", post_id=str(post.id))
                await self.session.execute(posts_table.insert().values(**post_dict))

            if post.tag_names:
                tag_rows = await self.session.execute(
                    select(tags_table.c.id, tags_table.c.name).where(
                        tags_table.c.name.in_([tag.root for tag in post.tag_names])
                    )
                )
                tag_id_map = {row.name: row.id for row in tag_rows.fetchall()}
                links = [
                    {"post_id": post.id, "tag_id": tag_id_map[tag.root]}
                    for tag in post.tag_names
                    if tag.root in tag_id_map
                ]
                if links:
                    await self.session.execute(insert(post_tags_table), links)

            await self.session.flush()
            return post

    async def delete(self, post_id: PostId) -> bool:
        """Delete a post (hard delete); comments and tag links cascade."""
        stmt = (
            delete(posts_table)
            .where(posts_table.c.id == post_id)
            .returning(posts_table.c.id)
        )
        result = await self.session.execute(stmt)
        deleted = result.fetchone() is not None
        await self.session.flush()
        return deleted

"""PostgreSQL implementation of Comment repository."""

from typing import Optional

import logfire
from sqlalchemy import delete, func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from newsroom.domain.model import Comment
from newsroom.domain.repository import CommentRepository
from newsroom.domain.value import CommentId, PostId
from newsroom.persistence.mappers import comment_to_dict, row_to_comment
from newsroom.persistence.tables import comments_table


class PostgresCommentRepository(CommentRepository):
    """PostgreSQL implementation of CommentRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        stmt = select(comments_table).where(comments_table.c.id == comment_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_comment(row._asdict()) if row else None

    async def find_by_post(self, post_id: PostId) -> list[Comment]:
        """Find all comments for a post in creation order."""
        stmt = (
            select(comments_table)
            .where(comments_table.c.post_id == post_id)
            .order_by(comments_table.c.created_at, comments_table.c.id)
        )
        result = await self.session.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def count_by_posts(self, post_ids: list[PostId]) -> dict[PostId, int]:
        """Count comments per post with one grouped query."""
        counts = dict.fromkeys(post_ids, 0)
        if not post_ids:
            return counts
        stmt = (
            select(comments_table.c.post_id, func.count())
            .where(comments_table.c.post_id.in_(post_ids))
            .group_by(comments_table.c.post_id)
        )
        result = await self.session.execute(stmt)
        for post_id, count in result.all():
            counts[post_id] = count
        return counts

    async def save(self, comment: Comment) -> Comment:
        """Save a comment (create or update)."""
        with logfire.span("comment_repository.save", comment_id=str(comment.id)):
            values = comment_to_dict(comment)
            existing = await self.find_by_id(comment.id)
            if existing:
                stmt = (
                    update(comments_table)
                    .where(comments_table.c.id == comment.id)
                    .values(**values)
                )
            else:
                stmt = insert(comments_table).values(**values)
            await self.session.execute(stmt)
            await self.session.flush()
            return comment

    async def update_content(
        self, comment_id: CommentId, content: str
    ) -> Optional[Comment]:
        """Replace comment content and bump ``updated_at``."""
        with logfire.span(
            "comment_repository.update_content",
            comment_id=str(comment_id),
            content_length=len(content),
        ):
            stmt = (
                update(comments_table)
                .where(comments_table.c.id == comment_id)
                .values(content=content, updated_at=func.now())
                .returning(comments_table)
            )
            result = await self.session.execute(stmt)
            row = result.fetchone()
            if row is None:
                logfire.warn("Comment not found for update", comment_id=str(comment_id))
                return None

            await self.session.flush()
            return row_to_comment(row._asdict())

    async def delete(self, comment_id: CommentId) -> list[CommentId]:
        """Delete a comment subtree, collected with a recursive CTE."""
        with logfire.span("comment_repository.delete", comment_id=str(comment_id)):
            subtree = (
                select(comments_table.c.id)
                .where(comments_table.c.id == comment_id)
                .cte("subtree", recursive=True)
            )
            subtree = subtree.union_all(
                select(comments_table.c.id).where(
                    comments_table.c.parent_id == subtree.c.id
                )
            )
            result = await self.session.execute(select(subtree.c.id))
            ids = [CommentId(row.id) for row in result.fetchall()]
            if not ids:
                return []

            await self.session.execute(
                delete(comments_table).where(comments_table.c.id.in_(ids))
            )
            await self.session.flush()
            return ids

    async def delete_by_post(self, post_id: PostId) -> int:
        stmt = (
            delete(comments_table)
            .where(comments_table.c.post_id == post_id)
            .returning(comments_table.c.id)
        )
        result = await self.session.execute(stmt)
        count = len(result.fetchall())
        await self.session.flush()
        return count

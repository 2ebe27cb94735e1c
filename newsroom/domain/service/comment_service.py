"""Comment domain service."""

from datetime import datetime
from uuid import uuid4

import logfire

from newsroom.domain.error import NotFoundError, ValidationError
from newsroom.domain.model import Comment
from newsroom.domain.repository import CommentRepository, UserRepository
from newsroom.domain.tree import (
    MAX_DEPTH,
    AuthorSummary,
    CommentNode,
    Forest,
    build_forest,
    can_reply,
)
from newsroom.domain.value import CommentId, PostId, UserId

from .base import Service


class CommentService(Service):
    """Domain service for comment operations."""

    def __init__(
        self,
        comment_repository: CommentRepository,
        user_repository: UserRepository,
        max_depth: int = MAX_DEPTH,
    ) -> None:
        """Initialize comment service.

        Args:
            comment_repository: Comment repository
            user_repository: User repository, for author summaries
            max_depth: Maximum thread depth counting the root as 1
        """
        self.comment_repository = comment_repository
        self.user_repository = user_repository
        self.max_depth = max_depth

    async def create_comment(
        self,
        post_id: PostId,
        author_id: UserId,
        content: str,
        parent_id: CommentId | None = None,
    ) -> Comment:
        """Create a comment on a post or reply to another comment.

        Args:
            post_id: Post ID
            author_id: Author user ID
            content: Comment text
            parent_id: Parent comment ID for replies (None for top-level)

        Returns:
            Created comment

        Raises:
            NotFoundError: If the parent comment does not exist
            ValidationError: If the parent belongs to another post or the
                reply would exceed the maximum depth
        """
        with logfire.span(
            "comment_service.create_comment",
            post_id=str(post_id),
            author_id=str(author_id),
            parent_id=str(parent_id) if parent_id else None,
        ):
            if parent_id:
                parent = await self.comment_repository.find_by_id(parent_id)
                if not parent:
                    logfire.warn(
                        "Parent comment not found",
                        parent_id=str(parent_id),
                        post_id=str(post_id),
                    )
                    raise NotFoundError("Comment", str(parent_id))
                if parent.post_id != post_id:
                    logfire.warn(
                        "Parent comment does not belong to post",
                        parent_id=str(parent_id),
                        parent_post_id=str(parent.post_id),
                        target_post_id=str(post_id),
                    )
                    raise ValidationError("Parent comment does not belong to this post")
                parent_level = await self.comment_level(parent)
                if not can_reply(parent_level, self.max_depth):
                    logfire.warn(
                        "Reply exceeds maximum depth",
                        parent_id=str(parent_id),
                        parent_level=parent_level,
                        max_depth=self.max_depth,
                    )
                    raise ValidationError(
                        f"Replies are limited to a depth of {self.max_depth}"
                    )

            now = datetime.now()
            comment = Comment(
                id=CommentId(uuid4()),
                post_id=post_id,
                author_id=author_id,
                content=content,
                parent_id=parent_id,
                created_at=now,
                updated_at=now,
            )

            saved = await self.comment_repository.save(comment)
            logfire.info(
                "Comment created",
                comment_id=str(saved.id),
                post_id=str(post_id),
                is_reply=parent_id is not None,
            )
            return saved

    async def comment_level(self, comment: Comment) -> int:
        """Count ancestors by following parent links (roots are level 0).

        Raises:
            ValidationError: If the parent chain loops
        """
        level = 0
        seen = {comment.id}
        current = comment
        while current.parent_id is not None:
            parent = await self.comment_repository.find_by_id(current.parent_id)
            if parent is None:
                break
            if parent.id in seen:
                raise ValidationError(f"Comment {comment.id} has a cyclic parent chain")
            seen.add(parent.id)
            level += 1
            current = parent
        return level

    async def get_comment_by_id(self, comment_id: CommentId) -> Comment | None:
        """Get a comment by ID.

        Args:
            comment_id: Comment ID

        Returns:
            Comment if found, None otherwise
        """
        with logfire.span(
            "comment_service.get_comment_by_id", comment_id=str(comment_id)
        ):
            comment = await self.comment_repository.find_by_id(comment_id)
            if comment:
                logfire.info("Comment found", comment_id=str(comment_id))
            else:
                logfire.warn("Comment not found", comment_id=str(comment_id))
            return comment

    async def get_comments_for_post(self, post_id: PostId) -> list[Comment]:
        """Get all comments for a post, oldest first."""
        with logfire.span(
            "comment_service.get_comments_for_post", post_id=str(post_id)
        ):
            comments = await self.comment_repository.find_by_post(post_id)
            logfire.info(
                "Comments retrieved for post",
                post_id=str(post_id),
                count=len(comments),
            )
            return comments

    async def count_comments(self, post_ids: list[PostId]) -> dict[PostId, int]:
        """Comment count per post, zero for posts without comments."""
        with logfire.span("comment_service.count_comments", post_count=len(post_ids)):
            return await self.comment_repository.count_by_posts(post_ids)

    async def get_thread(self, post_id: PostId) -> Forest:
        """Load a post's comments as a nested forest with author summaries.

        Args:
            post_id: Post ID

        Returns:
            Root comments with their replies, oldest first at every level
        """
        comments = await self.get_comments_for_post(post_id)
        authors = await self.get_authors({comment.author_id for comment in comments})
        return build_forest(
            CommentNode.from_comment(comment, authors.get(comment.author_id))
            for comment in comments
        )

    async def to_node(self, comment: Comment) -> CommentNode:
        """Wrap a single comment with its author summary."""
        authors = await self.get_authors({comment.author_id})
        return CommentNode.from_comment(comment, authors.get(comment.author_id))

    async def get_authors(self, user_ids: set[UserId]) -> dict[UserId, AuthorSummary]:
        if not user_ids:
            return {}
        users = await self.user_repository.find_by_ids(list(user_ids))
        return {user.id: AuthorSummary.from_user(user) for user in users}

    async def update_content(self, comment_id: CommentId, content: str) -> Comment | None:
        """Update the content of a comment.

        Args:
            comment_id: Comment ID
            content: New content

        Returns:
            Updated comment, or None if the comment no longer exists
        """
        with logfire.span(
            "comment_service.update_content",
            comment_id=str(comment_id),
            content_length=len(content),
        ):
            updated = await self.comment_repository.update_content(comment_id, content)

            if updated:
                logfire.info(
                    "Comment content updated",
                    comment_id=str(comment_id),
                    post_id=str(updated.post_id),
                )
            else:
                logfire.warn(
                    "Comment vanished before update", comment_id=str(comment_id)
                )

            return updated

    async def delete_comment(self, comment_id: CommentId) -> list[CommentId]:
        """Delete a comment and its replies.

        Args:
            comment_id: Comment ID

        Returns:
            Ids of all deleted comments (empty if it was already gone)
        """
        with logfire.span("comment_service.delete_comment", comment_id=str(comment_id)):
            deleted = await self.comment_repository.delete(comment_id)
            logfire.info(
                "Comment subtree deleted",
                comment_id=str(comment_id),
                deleted_count=len(deleted),
            )
            return deleted

    async def delete_comments_for_post(self, post_id: PostId) -> int:
        with logfire.span(
            "comment_service.delete_comments_for_post", post_id=str(post_id)
        ):
            deleted = await self.comment_repository.delete_by_post(post_id)
            logfire.info("Post comments deleted", post_id=str(post_id), count=deleted)
            return deleted

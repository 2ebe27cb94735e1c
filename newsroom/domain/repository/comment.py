"""Comment repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from newsroom.domain.model import Comment
from newsroom.domain.value import CommentId, PostId


class CommentRepository(ABC):
    """Repository for Comment entity.

    Comments are stored flat; replies reference their parent by id.
    """

    @abstractmethod
    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID.

        Args:
            comment_id: The comment's unique identifier

        Returns:
            The comment if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_post(self, post_id: PostId) -> list[Comment]:
        """Find all comments for a post, oldest first.

        Args:
            post_id: The post ID

        Returns:
            Flat list of comments in creation order
        """
        pass

    @abstractmethod
    async def count_by_posts(self, post_ids: list[PostId]) -> dict[PostId, int]:
        """Count comments on each of several posts.

        Args:
            post_ids: Posts to count for

        Returns:
            Comment count per post id; posts without comments map to 0
        """
        pass

    @abstractmethod
    async def save(self, comment: Comment) -> Comment:
        """Save a comment (create or update).

        Args:
            comment: The comment to save

        Returns:
            The saved comment
        """
        pass

    @abstractmethod
    async def update_content(
        self, comment_id: CommentId, content: str
    ) -> Optional[Comment]:
        """Replace the content of a comment and bump ``updated_at``.

        Args:
            comment_id: Comment to update
            content: New content

        Returns:
            Updated comment, or None if it no longer exists
        """
        pass

    @abstractmethod
    async def delete(self, comment_id: CommentId) -> list[CommentId]:
        """Delete a comment and all replies beneath it.

        Args:
            comment_id: Root of the subtree to delete

        Returns:
            Ids of every deleted comment (empty if the comment was missing)
        """
        pass

    @abstractmethod
    async def delete_by_post(self, post_id: PostId) -> int:
        """Delete every comment on a post.

        Args:
            post_id: The post ID

        Returns:
            Number of comments deleted
        """
        pass

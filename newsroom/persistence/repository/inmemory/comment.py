"""In-memory comment repository for testing."""

from datetime import datetime
from typing import Optional

from newsroom.domain.model import Comment
from newsroom.domain.repository import CommentRepository
from newsroom.domain.value import CommentId, PostId


class InMemoryCommentRepository(CommentRepository):
    """In-memory implementation of CommentRepository for testing."""

    def __init__(self) -> None:
        self._comments: dict[CommentId, Comment] = {}

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        return self._comments.get(comment_id)

    async def find_by_post(self, post_id: PostId) -> list[Comment]:
        """Find all comments for a post in creation order."""
        comments = [c for c in self._comments.values() if c.post_id == post_id]
        return sorted(comments, key=lambda c: c.created_at)

    async def count_by_posts(self, post_ids: list[PostId]) -> dict[PostId, int]:
        counts = dict.fromkeys(post_ids, 0)
        for comment in self._comments.values():
            if comment.post_id in counts:
                counts[comment.post_id] += 1
        return counts

    async def save(self, comment: Comment) -> Comment:
        self._comments[comment.id] = comment
        return comment

    async def update_content(
        self, comment_id: CommentId, content: str
    ) -> Optional[Comment]:
        comment = self._comments.get(comment_id)
        if comment is None:
            return None
        updated = comment.model_copy(
            update={"content": content, "updated_at": datetime.now()}
        )
        self._comments[comment_id] = updated
        return updated

    async def delete(self, comment_id: CommentId) -> list[CommentId]:
        """Delete a comment and, breadth first, every reply beneath it."""
        if comment_id not in self._comments:
            return []

        deleted: list[CommentId] = []
        frontier = [comment_id]
        while frontier:
            current = frontier.pop(0)
            deleted.append(current)
            frontier.extend(
                c.id for c in self._comments.values() if c.parent_id == current
            )
        for cid in deleted:
            del self._comments[cid]
        return deleted

    async def delete_by_post(self, post_id: PostId) -> int:
        ids = [c.id for c in self._comments.values() if c.post_id == post_id]
        for cid in ids:
            del self._comments[cid]
        return len(ids)

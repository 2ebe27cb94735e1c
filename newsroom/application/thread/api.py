"""Remote operations a comment thread depends on."""

from typing import Protocol

from newsroom.domain.tree import CommentNode, Forest
from newsroom.domain.value import CommentId, PostId


class CommentApi(Protocol):
    """Comment endpoints of the Newsroom API.

    Implementations raise ``newsroom.adapter.error.ApiError`` subclasses on
    failure.
    """

    async def get_comments(self, slug: str) -> Forest: ...

    async def create_comment(
        self,
        post_id: PostId,
        content: str,
        parent_id: CommentId | None = None,
    ) -> CommentNode: ...

    async def update_comment(
        self, comment_id: CommentId, content: str
    ) -> CommentNode: ...

    async def delete_comment(self, comment_id: CommentId) -> list[CommentId]: ...

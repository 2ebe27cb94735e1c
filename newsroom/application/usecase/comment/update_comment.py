"""Update comment use case."""

from uuid import UUID

from pydantic import BaseModel

from newsroom.config import CommentSettings
from newsroom.domain.error import NotAuthenticatedError, NotFoundError, ValidationError
from newsroom.domain.permission import Identity, Permission, ensure_permitted
from newsroom.domain.service import CommentService
from newsroom.domain.tree import CommentNode
from newsroom.domain.value import CommentId


class UpdateCommentRequest(BaseModel):
    """Update comment request."""

    identity: Identity
    comment_id: str  # UUID string
    content: str  # New content (required, cannot be empty)


class UpdateCommentUseCase:
    """Use case for editing a comment's content."""

    def __init__(
        self, comment_service: CommentService, comment_settings: CommentSettings
    ) -> None:
        """Initialize update comment use case.

        Args:
            comment_service: Comment service
            comment_settings: Comment length limit
        """
        self.comment_service = comment_service
        self.max_length = comment_settings.max_length

    async def execute(self, request: UpdateCommentRequest) -> CommentNode:
        """Execute update comment flow.

        Ownership is read from the stored comment, never from the request.
        Comments are hard-deleted, so editing one that was deleted in the
        meantime is a not-found error.

        Args:
            request: Update comment request

        Returns:
            Updated comment with author summary (replies are not included)

        Raises:
            NotAuthenticatedError: If the caller is anonymous
            NotAuthorizedError: If the caller may not edit this comment
            NotFoundError: If the comment does not exist
            ValidationError: If the content is empty or too long
        """
        if not request.identity.authenticated:
            raise NotAuthenticatedError("edit comments")

        content = request.content.strip()
        if not content:
            raise ValidationError("Comment cannot be empty")
        if len(content) > self.max_length:
            raise ValidationError(f"Comment exceeds {self.max_length} characters")

        comment_id = CommentId(UUID(request.comment_id))
        comment = await self.comment_service.get_comment_by_id(comment_id)
        if comment is None:
            raise NotFoundError("Comment", request.comment_id)

        ensure_permitted(
            request.identity,
            Permission.EDIT_ALL_COMMENTS,
            Permission.EDIT_OWN_COMMENTS,
            comment.author_id,
            resource="comment",
            resource_id=request.comment_id,
            action="edit",
        )

        updated = await self.comment_service.update_content(comment_id, content)
        if updated is None:
            # Deleted between the read and the write
            raise NotFoundError("Comment", request.comment_id)

        return await self.comment_service.to_node(updated)

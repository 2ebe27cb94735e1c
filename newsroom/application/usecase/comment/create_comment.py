"""Create comment use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from newsroom.config import CommentSettings
from newsroom.domain.error import NotFoundError, ValidationError
from newsroom.domain.permission import Identity, Permission, ensure_can
from newsroom.domain.service import CommentService, PostService
from newsroom.domain.tree import CommentNode
from newsroom.domain.value import CommentId, PostId


class CreateCommentRequest(BaseModel):
    """Create comment request."""

    identity: Identity
    post_id: str  # UUID string
    content: str
    parent_id: str | None = None  # Parent comment ID for replies


class CreateCommentUseCase:
    """Use case for creating a root comment or a reply."""

    def __init__(
        self,
        comment_service: CommentService,
        post_service: PostService,
        comment_settings: CommentSettings,
    ) -> None:
        """Initialize create comment use case.

        Args:
            comment_service: Comment domain service
            post_service: Post domain service
            comment_settings: Comment length limit
        """
        self.comment_service = comment_service
        self.post_service = post_service
        self.max_length = comment_settings.max_length

    async def execute(self, request: CreateCommentRequest) -> CommentNode:
        """Execute create comment flow.

        Steps:
        1. Check the caller may create comments
        2. Verify the post exists and is visible to the caller
        3. Create the comment (parent, post and depth checked by the service)

        Args:
            request: Create comment request

        Returns:
            Created comment with its author summary and no replies

        Raises:
            NotAuthenticatedError: If the caller is anonymous
            NotAuthorizedError: If the role cannot create comments
            NotFoundError: If the post or parent comment does not exist
            ValidationError: If the content is empty, too long or the reply is
                too deep
        """
        ensure_can(request.identity, Permission.CREATE_COMMENTS, "create comments")

        content = request.content.strip()
        if not content:
            raise ValidationError("Comment cannot be empty")
        if len(content) > self.max_length:
            raise ValidationError(f"Comment exceeds {self.max_length} characters")

        post_id = PostId(UUID(request.post_id))
        post = await self.post_service.get_post_by_id(post_id)
        if not post or not PostService.is_visible_to(post, request.identity):
            raise NotFoundError("Post", request.post_id)

        parent_id = CommentId(UUID(request.parent_id)) if request.parent_id else None
        comment = await self.comment_service.create_comment(
            post_id=post_id,
            author_id=request.identity.user_id,
            content=content,
            parent_id=parent_id,
        )

        logfire.info(
            "Comment posted",
            comment_id=str(comment.id),
            post_id=str(post_id),
            parent_id=request.parent_id,
        )
        return await self.comment_service.to_node(comment)

"""Delete comment use case."""

from uuid import UUID

from pydantic import BaseModel

from newsroom.domain.error import NotAuthenticatedError, NotFoundError
from newsroom.domain.permission import Identity, Permission, ensure_permitted
from newsroom.domain.service import CommentService
from newsroom.domain.value import CommentId


class DeleteCommentRequest(BaseModel):
    """Delete comment request."""

    identity: Identity
    comment_id: str  # UUID string


class DeleteCommentResponse(BaseModel):
    """Delete comment response."""

    comment_id: str
    deleted_ids: list[str]  # The comment and every reply beneath it


class DeleteCommentUseCase:
    """Use case for deleting a comment together with its replies."""

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(self, request: DeleteCommentRequest) -> DeleteCommentResponse:
        """Execute delete comment flow.

        Raises:
            NotAuthenticatedError: If the caller is anonymous
            NotAuthorizedError: If the caller may not delete this comment
            NotFoundError: If the comment does not exist
        """
        if not request.identity.authenticated:
            raise NotAuthenticatedError("delete comments")

        comment_id = CommentId(UUID(request.comment_id))
        comment = await self.comment_service.get_comment_by_id(comment_id)
        if comment is None:
            raise NotFoundError("Comment", request.comment_id)

        ensure_permitted(
            request.identity,
            Permission.DELETE_ALL_COMMENTS,
            Permission.DELETE_OWN_COMMENTS,
            comment.author_id,
            resource="comment",
            resource_id=request.comment_id,
            action="delete",
        )

        deleted = await self.comment_service.delete_comment(comment_id)
        if not deleted:
            raise NotFoundError("Comment", request.comment_id)

        return DeleteCommentResponse(
            comment_id=request.comment_id,
            deleted_ids=[str(cid) for cid in deleted],
        )

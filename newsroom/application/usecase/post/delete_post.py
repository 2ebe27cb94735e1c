"""Delete post use case."""

from pydantic import BaseModel

from newsroom.domain.error import NotAuthenticatedError, NotFoundError
from newsroom.domain.permission import Identity, Permission, ensure_permitted
from newsroom.domain.service import CommentService, PostService


class DeletePostRequest(BaseModel):
    """Delete post request."""

    identity: Identity
    slug: str


class DeletePostResponse(BaseModel):
    """Delete post response."""

    post_id: str
    deleted_comments: int


class DeletePostUseCase:
    """Use case for deleting a post and its comments."""

    def __init__(
        self, post_service: PostService, comment_service: CommentService
    ) -> None:
        self.post_service = post_service
        self.comment_service = comment_service

    async def execute(self, request: DeletePostRequest) -> DeletePostResponse:
        """Execute delete post flow.

        Raises:
            NotAuthenticatedError: If the caller is anonymous
            NotAuthorizedError: If the caller may not delete this post
            NotFoundError: If the post does not exist
        """
        if not request.identity.authenticated:
            raise NotAuthenticatedError("delete posts")

        post = await self.post_service.get_post_by_slug(request.slug)
        if post is None:
            raise NotFoundError("Post", request.slug)

        ensure_permitted(
            request.identity,
            Permission.DELETE_ALL_POSTS,
            Permission.DELETE_OWN_POSTS,
            post.author_id,
            resource="post",
            resource_id=str(post.id),
            action="delete",
        )

        deleted_comments = await self.comment_service.delete_comments_for_post(post.id)
        if not await self.post_service.delete_post(post.id):
            raise NotFoundError("Post", request.slug)

        return DeletePostResponse(post_id=str(post.id), deleted_comments=deleted_comments)

"""Get comments use case."""

from pydantic import BaseModel

from newsroom.domain.error import NotFoundError
from newsroom.domain.permission import Identity
from newsroom.domain.service import CommentService, PostService
from newsroom.domain.tree import CommentNode, count_nodes


class GetCommentsRequest(BaseModel):
    """Get comments request."""

    identity: Identity
    slug: str


class GetCommentsResponse(BaseModel):
    """Get comments response."""

    post_id: str
    comments: list[CommentNode]  # Root comments, replies nested
    total: int  # Number of comments at every level


class GetCommentsUseCase:
    """Use case for fetching a post's whole comment thread."""

    def __init__(
        self,
        comment_service: CommentService,
        post_service: PostService,
    ) -> None:
        """Initialize get comments use case.

        Args:
            comment_service: Comment domain service
            post_service: Post domain service
        """
        self.comment_service = comment_service
        self.post_service = post_service

    async def execute(self, request: GetCommentsRequest) -> GetCommentsResponse:
        """Execute get comments flow.

        Args:
            request: Get comments request

        Returns:
            The comment forest of the post

        Raises:
            NotFoundError: If the post does not exist or is a draft the
                caller may not see
        """
        post = await self.post_service.get_post_by_slug(request.slug)
        if not post or not PostService.is_visible_to(post, request.identity):
            raise NotFoundError("Post", request.slug)

        forest = await self.comment_service.get_thread(post.id)
        return GetCommentsResponse(
            post_id=str(post.id),
            comments=list(forest),
            total=count_nodes(forest),
        )

"""Get post use case."""

from pydantic import BaseModel

from newsroom.domain.error import NotFoundError
from newsroom.domain.permission import Identity, PermissionResolver
from newsroom.domain.service import CommentService, PostService
from newsroom.domain.tree import CommentNode, count_nodes

from .common import PostItem


class GetPostRequest(BaseModel):
    """Get post request."""

    identity: Identity
    slug: str


class GetPostResponse(BaseModel):
    """A post with its comment thread."""

    post: PostItem
    comments: list[CommentNode]
    can_edit: bool  # Rendering hints; the write endpoints re-check
    can_delete: bool


class GetPostUseCase:
    """Use case for reading one post by slug."""

    def __init__(
        self, post_service: PostService, comment_service: CommentService
    ) -> None:
        """Initialize get post use case.

        Args:
            post_service: Post domain service
            comment_service: Comment domain service
        """
        self.post_service = post_service
        self.comment_service = comment_service

    async def execute(self, request: GetPostRequest) -> GetPostResponse:
        """Execute get post flow.

        Drafts are reported as missing to anyone but their author and admins.

        Raises:
            NotFoundError: If the post does not exist or is hidden
        """
        post = await self.post_service.get_post_by_slug(request.slug)
        if not post or not PostService.is_visible_to(post, request.identity):
            raise NotFoundError("Post", request.slug)

        forest = await self.comment_service.get_thread(post.id)
        authors = await self.comment_service.get_authors({post.author_id})
        resolver = PermissionResolver(request.identity)
        return GetPostResponse(
            post=PostItem.from_post(
                post, authors.get(post.author_id), count_nodes(forest)
            ),
            comments=list(forest),
            can_edit=resolver.can_edit_post(post.author_id),
            can_delete=resolver.can_delete_post(post.author_id),
        )

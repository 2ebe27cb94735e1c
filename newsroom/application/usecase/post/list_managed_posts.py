"""List managed posts use case (author dashboard)."""

import logfire
from pydantic import BaseModel

from newsroom.config import ListingSettings
from newsroom.domain.permission import Identity
from newsroom.domain.query import build_management_query, total_pages
from newsroom.domain.service import CommentService, PostService
from newsroom.domain.value import SortOrder

from .common import PostItem, to_post_items
from .list_posts import listing_params


class ListManagedPostsRequest(BaseModel):
    """List managed posts request."""

    identity: Identity
    search: str | None = None
    tags: str | None = None
    sort: SortOrder = SortOrder.LATEST
    page: int = 1
    page_size: int | None = None


class ListManagedPostsResponse(BaseModel):
    """List managed posts response."""

    posts: list[PostItem]
    total: int
    page: int
    page_size: int
    total_pages: int


class ListManagedPostsUseCase:
    """Use case listing the caller's posts in any status (all posts for admins)."""

    def __init__(
        self,
        post_service: PostService,
        comment_service: CommentService,
        listing_settings: ListingSettings,
    ) -> None:
        self.post_service = post_service
        self.comment_service = comment_service
        self.listing_settings = listing_settings

    async def execute(
        self, request: ListManagedPostsRequest
    ) -> ListManagedPostsResponse:
        """Execute the management listing.

        Raises:
            NotAuthenticatedError: If the caller is anonymous
            ValidationError: If the page size is out of bounds
        """
        params = listing_params(
            self.listing_settings,
            request.search,
            request.tags,
            request.sort,
            request.page,
            request.page_size,
        )
        query = build_management_query(params, request.identity)

        with logfire.span(
            "list_managed_posts.execute",
            user_id=str(request.identity.user_id),
            scoped=query.author_id is not None,
        ):
            posts, total = await self.post_service.list_posts(query)
            return ListManagedPostsResponse(
                posts=await to_post_items(posts, self.comment_service),
                total=total,
                page=query.page,
                page_size=query.page_size,
                total_pages=total_pages(total, query.page_size),
            )

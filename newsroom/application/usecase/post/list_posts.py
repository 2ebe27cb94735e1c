"""List posts use case (public listing)."""

import logfire
from pydantic import BaseModel

from newsroom.config import ListingSettings
from newsroom.domain.error import ValidationError
from newsroom.domain.query import (
    ListingParams,
    build_public_query,
    parse_tags,
    total_pages,
)
from newsroom.domain.service import CommentService, PostService
from newsroom.domain.value import SortOrder

from .common import PostItem, to_post_items


class ListPostsRequest(BaseModel):
    """List posts request."""

    search: str | None = None
    tags: str | None = None  # Comma-joined tag names
    sort: SortOrder = SortOrder.LATEST
    page: int = 1
    page_size: int | None = None  # Defaults to the configured page size


class ListPostsResponse(BaseModel):
    """List posts response."""

    posts: list[PostItem]
    total_pages: int
    page: int
    page_size: int


def listing_params(
    settings: ListingSettings,
    search: str | None,
    tags: str | None,
    sort: SortOrder,
    page: int,
    page_size: int | None,
) -> ListingParams:
    """Build listing parameters, enforcing the configured page size bounds.

    Raises:
        ValidationError: If the page size is outside 1..max_page_size
    """
    size = settings.default_page_size if page_size is None else page_size
    if size < 1 or size > settings.max_page_size:
        raise ValidationError(
            f"page_size must be between 1 and {settings.max_page_size}"
        )
    return ListingParams(
        search=search,
        tags=parse_tags(tags),
        sort=sort,
        page=page,
        page_size=size,
    )


class ListPostsUseCase:
    """Use case for the public post listing."""

    def __init__(
        self,
        post_service: PostService,
        comment_service: CommentService,
        listing_settings: ListingSettings,
    ) -> None:
        """Initialize list posts use case.

        Args:
            post_service: Post service
            comment_service: Comment service, for authors and comment counts
            listing_settings: Page size limits
        """
        self.post_service = post_service
        self.comment_service = comment_service
        self.listing_settings = listing_settings

    async def execute(self, request: ListPostsRequest) -> ListPostsResponse:
        """Execute list posts flow.

        Only published posts are listed. A page outside ``[1, total_pages]``
        comes back empty.

        Args:
            request: List posts request with filters and pagination

        Returns:
            One page of posts plus the page count
        """
        params = listing_params(
            self.listing_settings,
            request.search,
            request.tags,
            request.sort,
            request.page,
            request.page_size,
        )
        query = build_public_query(params)

        with logfire.span("list_posts.execute", page=query.page, sort=query.sort.value):
            posts, total = await self.post_service.list_posts(query)
            return ListPostsResponse(
                posts=await to_post_items(posts, self.comment_service),
                total_pages=total_pages(total, query.page_size),
                page=query.page,
                page_size=query.page_size,
            )

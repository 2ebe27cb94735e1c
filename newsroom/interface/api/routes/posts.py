"""Post routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, Field

from newsroom.application.usecase.comment import (
    GetCommentsRequest,
    GetCommentsResponse,
    GetCommentsUseCase,
)
from newsroom.application.usecase.post import (
    CreatePostRequest,
    CreatePostUseCase,
    DeletePostRequest,
    DeletePostResponse,
    DeletePostUseCase,
    GetPostRequest,
    GetPostResponse,
    GetPostUseCase,
    ListManagedPostsRequest,
    ListManagedPostsResponse,
    ListManagedPostsUseCase,
    ListPostsRequest,
    ListPostsResponse,
    ListPostsUseCase,
    PostItem,
    UpdatePostRequest,
    UpdatePostUseCase,
)
from newsroom.domain.error import DomainError
from newsroom.domain.service import IdentityService
from newsroom.domain.value import PostStatus, SortOrder
from newsroom.interface.api.auth import read_auth_token
from newsroom.interface.api.error import http_error

router = APIRouter(prefix="/posts", tags=["posts"], route_class=DishkaRoute)


class CreatePostAPIRequest(BaseModel):
    """API request for creating a post."""

    title: str = Field(min_length=3, max_length=300)
    content: str = Field(min_length=10)
    slug: str | None = None  # Generated from the title when omitted
    excerpt: str | None = Field(default=None, max_length=500)
    image: str | None = None
    status: PostStatus = PostStatus.DRAFT
    tag_names: list[str] = Field(default_factory=list, max_length=20)


class UpdatePostAPIRequest(BaseModel):
    """API request for editing a post. Omitted fields are left unchanged."""

    title: str | None = Field(default=None, min_length=3, max_length=300)
    content: str | None = Field(default=None, min_length=10)
    slug: str | None = None
    excerpt: str | None = Field(default=None, max_length=500)
    image: str | None = None
    status: PostStatus | None = None
    tag_names: list[str] | None = Field(default=None, max_length=20)


@router.get("/list", response_model=ListPostsResponse)
async def list_posts(
    list_posts_use_case: FromDishka[ListPostsUseCase],
    page: int = 1,
    page_size: int | None = Query(default=None),
    search: str | None = None,
    tags: str | None = Query(default=None, description="Comma-joined tag names"),
    sort: SortOrder = SortOrder.LATEST,
) -> ListPostsResponse:
    """Public listing of published posts.

    Title search is case-insensitive; a post matches the tag filter when it
    carries any of the requested tags. Pages outside the valid range come
    back empty.

    Example:
        GET /posts/list?search=budget&tags=finance,policy&sort=oldest
    """
    try:
        return await list_posts_use_case.execute(
            ListPostsRequest(
                search=search, tags=tags, sort=sort, page=page, page_size=page_size
            )
        )
    except (DomainError, ValueError) as e:
        raise http_error(e, "list posts") from e


@router.get("", response_model=ListManagedPostsResponse)
async def list_managed_posts(
    identity_service: FromDishka[IdentityService],
    use_case: FromDishka[ListManagedPostsUseCase],
    page: int = 1,
    page_size: int | None = Query(default=None),
    search: str | None = None,
    tags: str | None = None,
    sort: SortOrder = SortOrder.LATEST,
    token: str | None = Depends(read_auth_token),
) -> ListManagedPostsResponse:
    """Dashboard listing: drafts included, own posts only unless ADMIN."""
    identity = await identity_service.resolve(token)
    try:
        return await use_case.execute(
            ListManagedPostsRequest(
                identity=identity,
                search=search,
                tags=tags,
                sort=sort,
                page=page,
                page_size=page_size,
            )
        )
    except (DomainError, ValueError) as e:
        raise http_error(e, "list managed posts") from e


@router.post("", response_model=PostItem, status_code=status.HTTP_201_CREATED)
async def create_post(
    request: CreatePostAPIRequest,
    identity_service: FromDishka[IdentityService],
    create_post_use_case: FromDishka[CreatePostUseCase],
    token: str | None = Depends(read_auth_token),
) -> PostItem:
    """Create a new post.

    Args:
        request: Post creation data
        identity_service: Resolves the caller from the session token
        create_post_use_case: Create post use case from DI
        token: Session token from cookie or header

    Returns:
        Created post

    Raises:
        HTTPException: 401/403 if not allowed, 409 if the slug is taken,
            400 if a field is invalid
    """
    identity = await identity_service.resolve(token)
    try:
        return await create_post_use_case.execute(
            CreatePostRequest(identity=identity, **request.model_dump())
        )
    except (DomainError, ValueError) as e:
        raise http_error(e, "create post") from e


@router.get("/{slug}", response_model=GetPostResponse)
async def get_post(
    slug: str,
    identity_service: FromDishka[IdentityService],
    get_post_use_case: FromDishka[GetPostUseCase],
    token: str | None = Depends(read_auth_token),
) -> GetPostResponse:
    """Get a post with its comment forest.

    Drafts are only visible to their author and admins; everyone else gets
    404.
    """
    identity = await identity_service.resolve(token)
    try:
        return await get_post_use_case.execute(
            GetPostRequest(identity=identity, slug=slug)
        )
    except (DomainError, ValueError) as e:
        raise http_error(e, "get post") from e


@router.patch("/{slug}", response_model=PostItem)
async def update_post(
    slug: str,
    request: UpdatePostAPIRequest,
    identity_service: FromDishka[IdentityService],
    update_post_use_case: FromDishka[UpdatePostUseCase],
    token: str | None = Depends(read_auth_token),
) -> PostItem:
    """Edit a post (EDIT_ALL_POSTS, or EDIT_OWN_POSTS on one's own post)."""
    identity = await identity_service.resolve(token)
    changes = request.model_dump(exclude_unset=True)
    if "slug" in changes:
        changes["new_slug"] = changes.pop("slug")
    try:
        return await update_post_use_case.execute(
            UpdatePostRequest(identity=identity, slug=slug, **changes)
        )
    except (DomainError, ValueError) as e:
        raise http_error(e, "update post") from e


@router.delete("/{slug}", response_model=DeletePostResponse)
async def delete_post(
    slug: str,
    identity_service: FromDishka[IdentityService],
    delete_post_use_case: FromDishka[DeletePostUseCase],
    token: str | None = Depends(read_auth_token),
) -> DeletePostResponse:
    """Delete a post together with all of its comments."""
    identity = await identity_service.resolve(token)
    try:
        return await delete_post_use_case.execute(
            DeletePostRequest(identity=identity, slug=slug)
        )
    except (DomainError, ValueError) as e:
        raise http_error(e, "delete post") from e


@router.get("/{slug}/comments", response_model=GetCommentsResponse)
async def get_comments(
    slug: str,
    identity_service: FromDishka[IdentityService],
    get_comments_use_case: FromDishka[GetCommentsUseCase],
    token: str | None = Depends(read_auth_token),
) -> GetCommentsResponse:
    """Get the comment forest of a post (used to refresh a thread)."""
    identity = await identity_service.resolve(token)
    try:
        return await get_comments_use_case.execute(
            GetCommentsRequest(identity=identity, slug=slug)
        )
    except (DomainError, ValueError) as e:
        raise http_error(e, "get comments") from e

"""Create post use case."""

from datetime import datetime
from uuid import uuid4

import logfire
from pydantic import BaseModel

from newsroom.domain.model import Post
from newsroom.domain.permission import Identity, Permission, ensure_can
from newsroom.domain.service import CommentService, PostService, TagService
from newsroom.domain.value import PostId, PostStatus, Slug, TagName

from .common import PostItem, to_post_items


class CreatePostRequest(BaseModel):
    """Create post request."""

    identity: Identity
    title: str
    content: str
    slug: str | None = None  # Generated from the title when omitted
    excerpt: str | None = None
    image: str | None = None
    status: PostStatus = PostStatus.DRAFT
    tag_names: list[str] = []


class CreatePostUseCase:
    """Use case for creating a new post."""

    def __init__(
        self,
        post_service: PostService,
        tag_service: TagService,
        comment_service: CommentService,
    ) -> None:
        """Initialize create post use case.

        Args:
            post_service: Post domain service
            tag_service: Tag domain service
            comment_service: Supplies author summaries for the response
        """
        self.post_service = post_service
        self.tag_service = tag_service
        self.comment_service = comment_service

    async def execute(self, request: CreatePostRequest) -> PostItem:
        """Execute create post flow.

        Steps:
        1. Check the caller may create posts
        2. Validate the requested slug is free, or generate one
        3. Find-or-create the referenced tags
        4. Build and save the post

        Args:
            request: Create post request

        Returns:
            Created post

        Raises:
            NotAuthenticatedError: If the caller is anonymous
            NotAuthorizedError: If the role cannot create posts
            ConflictError: If the slug is already in use
            ValueError: If a field fails validation
        """
        ensure_can(request.identity, Permission.CREATE_POSTS, "create posts")

        with logfire.span(
            "create_post.execute",
            title=request.title,
            tags=request.tag_names,
            author_id=str(request.identity.user_id),
        ):
            post_id = PostId(uuid4())
            if request.slug:
                slug = Slug(request.slug)
                await self.post_service.ensure_slug_available(slug)
            else:
                slug = await self.post_service.generate_unique_slug(
                    request.title, post_id
                )

            tag_names = [TagName(name) for name in request.tag_names]
            tags = await self.tag_service.ensure_tags(tag_names)

            now = datetime.now()
            post = Post(
                id=post_id,
                title=request.title,
                slug=slug,
                content=request.content,
                excerpt=request.excerpt,
                image=request.image,
                status=request.status,
                author_id=request.identity.user_id,
                tag_names=[tag.name for tag in tags],
                created_at=now,
                updated_at=now,
            )

            saved = await self.post_service.save_post(post)
            logfire.info(
                "Post created successfully",
                post_id=str(saved.id),
                slug=str(saved.slug),
            )
            [item] = await to_post_items([saved], self.comment_service)
            return item

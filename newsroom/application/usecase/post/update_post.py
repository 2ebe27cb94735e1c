"""Update post use case."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel

from newsroom.domain.error import NotAuthenticatedError, NotFoundError
from newsroom.domain.model import Post
from newsroom.domain.permission import Identity, Permission, ensure_permitted
from newsroom.domain.service import CommentService, PostService, TagService
from newsroom.domain.value import PostStatus, Slug, TagName

from .common import PostItem, to_post_items


class UpdatePostRequest(BaseModel):
    """Update post request.

    Only fields that are explicitly set are changed; setting ``excerpt`` or
    ``image`` to None clears them.
    """

    identity: Identity
    slug: str  # Current slug of the post
    title: str | None = None
    content: str | None = None
    new_slug: str | None = None
    excerpt: str | None = None
    image: str | None = None
    status: PostStatus | None = None
    tag_names: list[str] | None = None


class UpdatePostUseCase:
    """Use case for editing a post."""

    def __init__(
        self,
        post_service: PostService,
        tag_service: TagService,
        comment_service: CommentService,
    ) -> None:
        """Initialize update post use case.

        Args:
            post_service: Post service
            tag_service: Tag service
            comment_service: Comment service, for the author and comment count
        """
        self.post_service = post_service
        self.tag_service = tag_service
        self.comment_service = comment_service

    async def execute(self, request: UpdatePostRequest) -> PostItem:
        """Execute update post flow.

        Args:
            request: Update post request

        Returns:
            Updated post

        Raises:
            NotAuthenticatedError: If the caller is anonymous
            NotAuthorizedError: If the caller may not edit this post
            NotFoundError: If the post does not exist
            ConflictError: If the new slug is taken
            ValueError: If an updated field fails validation
        """
        if not request.identity.authenticated:
            raise NotAuthenticatedError("edit posts")

        post = await self.post_service.get_post_by_slug(request.slug)
        if post is None:
            raise NotFoundError("Post", request.slug)

        ensure_permitted(
            request.identity,
            Permission.EDIT_ALL_POSTS,
            Permission.EDIT_OWN_POSTS,
            post.author_id,
            resource="post",
            resource_id=str(post.id),
            action="edit",
        )

        fields = request.model_fields_set
        changes: dict[str, Any] = {}
        for name in ("title", "content", "excerpt", "image"):
            if name in fields:
                changes[name] = getattr(request, name)
        if "status" in fields and request.status is not None:
            changes["status"] = request.status
        if "new_slug" in fields and request.new_slug:
            slug = Slug(request.new_slug)
            if slug != post.slug:
                await self.post_service.ensure_slug_available(slug, post_id=post.id)
            changes["slug"] = slug
        if "tag_names" in fields and request.tag_names is not None:
            tags = await self.tag_service.ensure_tags(
                [TagName(name) for name in request.tag_names]
            )
            changes["tag_names"] = [tag.name for tag in tags]

        changes["updated_at"] = datetime.now()
        # Re-validate so title/content rules still hold after the edit
        updated = Post.model_validate({**dict(post), **changes})

        saved = await self.post_service.save_post(updated)
        [item] = await to_post_items([saved], self.comment_service)
        return item

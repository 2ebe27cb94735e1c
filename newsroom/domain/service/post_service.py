"""Post domain service."""

import re

import logfire

from newsroom.domain.error import ConflictError
from newsroom.domain.model import Post
from newsroom.domain.permission import Identity, Permission, can
from newsroom.domain.query import PostQuery
from newsroom.domain.repository import PostRepository
from newsroom.domain.value import PostId, Slug

from .base import Service

# Slugs that collide with fixed routes under /posts
RESERVED_SLUGS = frozenset({"list"})


class PostService(Service):
    """Domain service for post operations."""

    def __init__(self, post_repository: PostRepository) -> None:
        """Initialize post service.

        Args:
            post_repository: Post repository
        """
        self.post_repository = post_repository

    async def save_post(self, post: Post) -> Post:
        """Save a post.

        Args:
            post: Post to save

        Returns:
            Saved post
        """
        with logfire.span(
            "post_service.save_post", post_id=str(post.id), title=post.title
        ):
            saved = await self.post_repository.save(post)
            logfire.info("Post saved", post_id=str(saved.id), status=saved.status.value)
            return saved

    async def get_post_by_id(self, post_id: PostId) -> Post | None:
        """Get a post by ID.

        Args:
            post_id: Post ID

        Returns:
            Post if found, None otherwise
        """
        with logfire.span("post_service.get_post_by_id", post_id=str(post_id)):
            post = await self.post_repository.find_by_id(post_id)

            if post:
                logfire.info("Post found", post_id=str(post_id), title=post.title)
            else:
                logfire.warn("Post not found", post_id=str(post_id))

            return post

    async def get_post_by_slug(self, slug: Slug | str) -> Post | None:
        """Get a post by slug.

        Args:
            slug: Post slug; a malformed string matches nothing

        Returns:
            Post if found, None otherwise
        """
        with logfire.span("post_service.get_post_by_slug", slug=str(slug)):
            if isinstance(slug, str):
                try:
                    slug = Slug(slug)
                except ValueError:
                    logfire.warn("Malformed slug", slug=slug)
                    return None

            post = await self.post_repository.find_by_slug(slug)

            if post:
                logfire.info(
                    "Post found by slug",
                    slug=str(slug),
                    post_id=str(post.id),
                )
            else:
                logfire.warn("Post not found by slug", slug=str(slug))

            return post

    @staticmethod
    def is_visible_to(post: Post, identity: Identity) -> bool:
        """Published posts are public; drafts are seen by the author and admins."""
        if post.is_published:
            return True
        return can(identity, Permission.EDIT_ALL_POSTS) or (
            identity.authenticated and identity.user_id == post.author_id
        )

    async def list_posts(self, query: PostQuery) -> tuple[list[Post], int]:
        """Run a listing query.

        Args:
            query: Listing descriptor

        Returns:
            Posts on the requested page and the total number of matches
        """
        with logfire.span(
            "post_service.list_posts",
            search=query.search,
            tags=query.tag_names,
            sort=query.sort.value,
            page=query.page,
            page_size=query.page_size,
            published_only=query.published_only,
            author_id=str(query.author_id) if query.author_id else None,
        ):
            total = await self.post_repository.count(query)
            if query.is_out_of_range(total):
                logfire.info("Requested page out of range", page=query.page, total=total)
                return [], total

            posts = await self.post_repository.find_page(query)
            logfire.info("Posts listed", count=len(posts), total=total)
            return posts, total

    async def delete_post(self, post_id: PostId) -> bool:
        with logfire.span("post_service.delete_post", post_id=str(post_id)):
            deleted = await self.post_repository.delete(post_id)
            if deleted:
                logfire.info("Post deleted", post_id=str(post_id))
            else:
                logfire.warn("Post already gone", post_id=str(post_id))
            return deleted

    async def ensure_slug_available(
        self, slug: Slug, post_id: PostId | None = None
    ) -> None:
        """Reject a slug that another post already holds.

        Args:
            slug: Requested slug
            post_id: Post that may keep the slug (when editing)

        Raises:
            ConflictError: If the slug is in use
        """
        if str(slug) in RESERVED_SLUGS or await self.post_repository.slug_exists(
            slug, exclude_post_id=post_id
        ):
            logfire.warn("Slug already in use", slug=str(slug))
            raise ConflictError("Post", "slug", str(slug))

    async def generate_unique_slug(self, title: str, post_id: PostId) -> Slug:
        """Generate a unique slug from a title.

        Handles collisions by appending numeric suffixes.

        Args:
            title: Post title to slugify
            post_id: Post ID (used for fallback if title produces a short slug)

        Returns:
            Unique slug for the post
        """
        with logfire.span(
            "post_service.generate_unique_slug",
            post_id=str(post_id),
            title=title,
        ):
            base_slug_str = self._slugify(title)

            # Fallback for titles without enough slug characters
            if len(base_slug_str) < 3:
                fallback = f"post-{post_id.hex[:8]}"
                logfire.info(
                    "Using fallback slug for title",
                    post_id=str(post_id),
                    slug=fallback,
                )
                return Slug(fallback)

            slug_str = base_slug_str
            counter = 1
            while slug_str in RESERVED_SLUGS or await self.post_repository.slug_exists(
                Slug(slug_str)
            ):
                suffix = f"-{counter}"
                slug_str = base_slug_str[: 100 - len(suffix)] + suffix
                counter += 1
                logfire.debug(
                    "Slug collision, trying with suffix",
                    base_slug=base_slug_str,
                    attempt=slug_str,
                    counter=counter,
                )

            slug = Slug(slug_str)
            logfire.info(
                "Generated unique slug",
                post_id=str(post_id),
                slug=str(slug),
                had_collision=counter > 1,
            )
            return slug

    @staticmethod
    def _slugify(title: str) -> str:
        """Lowercase, collapse non-alphanumerics to hyphens, trim to 100 chars."""
        slug = re.sub(r"[^a-z0-9]+", "-", title.lower())
        return slug.strip("-")[:100].rstrip("-")

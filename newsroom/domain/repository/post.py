"""Post repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from newsroom.domain.model import Post
from newsroom.domain.query import PostQuery
from newsroom.domain.value import PostId, Slug


class PostRepository(ABC):
    """Repository for Post aggregate.

    Defines the contract for post persistence operations.
    Implementations live in the persistence layer.
    """

    @abstractmethod
    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID.

        Args:
            post_id: The post's unique identifier

        Returns:
            The post if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_slug(self, slug: Slug) -> Optional[Post]:
        """Find a post by slug.

        Args:
            slug: URL slug

        Returns:
            The post if found, None otherwise
        """
        pass

    @abstractmethod
    async def slug_exists(
        self, slug: Slug, exclude_post_id: Optional[PostId] = None
    ) -> bool:
        """Check whether a slug is taken.

        Args:
            slug: Slug to check
            exclude_post_id: Post allowed to hold the slug (the one being edited)

        Returns:
            True if another post uses the slug
        """
        pass

    @abstractmethod
    async def find_page(self, query: PostQuery) -> list[Post]:
        """Execute a listing query and return one page.

        Filters, ordering and window come from ``query``. A page outside the
        valid range yields an empty list.

        Args:
            query: Listing descriptor

        Returns:
            Posts on the requested page
        """
        pass

    @abstractmethod
    async def count(self, query: PostQuery) -> int:
        """Count posts matching the query filters (ignoring the window).

        Args:
            query: Listing descriptor

        Returns:
            Total number of matching posts
        """
        pass

    @abstractmethod
    async def save(self, post: Post) -> Post:
        """Save a post (create or update), including its tag links.

        Tags named by the post must already exist.

        Args:
            post: The post to save

        Returns:
            The saved post
        """
        pass

    @abstractmethod
    async def delete(self, post_id: PostId) -> bool:
        """Delete a post (hard delete).

        Args:
            post_id: The post ID to delete

        Returns:
            True if a post was deleted
        """
        pass

"""In-memory post repository for testing."""

from typing import Optional

from newsroom.domain.model import Post
from newsroom.domain.query import PostQuery
from newsroom.domain.repository import PostRepository
from newsroom.domain.value import PostId, Slug


class InMemoryPostRepository(PostRepository):
    """In-memory implementation of PostRepository for testing.

    Filtering follows ``PostQuery.matches``; insertion order stands in for
    storage order when creation times tie.
    """

    def __init__(self) -> None:
        self._posts: dict[PostId, Post] = {}

    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID."""
        return self._posts.get(post_id)

    async def find_by_slug(self, slug: Slug) -> Optional[Post]:
        """Find a post by slug."""
        for post in self._posts.values():
            if post.slug == slug:
                return post
        return None

    async def slug_exists(
        self, slug: Slug, exclude_post_id: Optional[PostId] = None
    ) -> bool:
        return any(
            post.slug == slug and post.id != exclude_post_id
            for post in self._posts.values()
        )

    async def find_page(self, query: PostQuery) -> list[Post]:
        if query.page < 1:
            return []
        posts = query.apply(self._posts.values())
        return posts[query.offset : query.offset + query.limit]

    async def count(self, query: PostQuery) -> int:
        return sum(1 for post in self._posts.values() if query.matches(post))

    async def save(self, post: Post) -> Post:
        """Save a post (create or update)."""
        self._posts[post.id] = post
        return post

    async def delete(self, post_id: PostId) -> bool:
        return self._posts.pop(post_id, None) is not None

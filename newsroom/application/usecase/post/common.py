"""Shared post response shapes."""

from datetime import datetime

from pydantic import BaseModel

from newsroom.domain.model import Post
from newsroom.domain.service import CommentService
from newsroom.domain.tree import AuthorSummary
from newsroom.domain.value import PostStatus


class PostItem(BaseModel):
    """Post as returned by the API."""

    id: str
    title: str
    slug: str
    content: str
    excerpt: str | None
    image: str | None
    status: PostStatus
    author_id: str
    author: AuthorSummary | None = None  # None once the author is deleted
    comment_count: int = 0
    tags: list[str]
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_post(
        cls,
        post: Post,
        author: AuthorSummary | None = None,
        comment_count: int = 0,
    ) -> "PostItem":
        return cls(
            id=str(post.id),
            title=post.title,
            slug=str(post.slug),
            content=post.content,
            excerpt=post.excerpt,
            image=post.image,
            status=post.status,
            author_id=str(post.author_id),
            author=author,
            comment_count=comment_count,
            tags=[tag.root for tag in post.tag_names],
            created_at=post.created_at,
            updated_at=post.updated_at,
        )


async def to_post_items(
    posts: list[Post], comment_service: CommentService
) -> list[PostItem]:
    """Attach author summaries and comment counts, one lookup each for all posts."""
    if not posts:
        return []
    authors = await comment_service.get_authors({post.author_id for post in posts})
    counts = await comment_service.count_comments([post.id for post in posts])
    return [
        PostItem.from_post(post, authors.get(post.author_id), counts.get(post.id, 0))
        for post in posts
    ]

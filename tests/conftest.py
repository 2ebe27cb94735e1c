"""Test configuration and fixtures."""

from datetime import datetime, timedelta
from uuid import uuid4

from newsroom.domain.model import Comment, Post, User
from newsroom.domain.permission import Identity
from newsroom.domain.tree import CommentNode
from newsroom.domain.value import (
    CommentId,
    PostId,
    PostStatus,
    Slug,
    TagName,
    UserId,
    UserRole,
)

# Fixed reference time so ordering assertions do not depend on the clock
BASE_TIME = datetime(2025, 1, 1, 12, 0, 0)


def make_user(
    role: UserRole = UserRole.USER,
    email: str | None = None,
    name: str | None = None,
    created_at: datetime | None = None,
) -> User:
    """Build a user with a unique email unless one is given."""
    user_id = UserId(uuid4())
    return User(
        id=user_id,
        email=email or f"{user_id.hex[:8]}@example.com",
        name=name,
        role=role,
        created_at=created_at or BASE_TIME,
        updated_at=created_at or BASE_TIME,
    )


def make_post(
    author: User,
    title: str = "City budget review",
    slug: str | None = None,
    status: PostStatus = PostStatus.PUBLISHED,
    tags: list[str] | None = None,
    days: int = 0,
) -> Post:
    """Build a post created ``days`` after BASE_TIME."""
    post_id = PostId(uuid4())
    created = BASE_TIME + timedelta(days=days)
    return Post(
        id=post_id,
        title=title,
        slug=Slug(slug or f"post-{post_id.hex[:12]}"),
        content="Long enough content for a post body.",
        status=status,
        author_id=author.id,
        tag_names=[TagName(tag) for tag in tags or []],
        created_at=created,
        updated_at=created,
    )


def make_comment(
    post: Post,
    author: User,
    parent: Comment | None = None,
    content: str = "A comment",
    minutes: int = 0,
) -> Comment:
    """Build a comment created ``minutes`` after BASE_TIME."""
    created = BASE_TIME + timedelta(minutes=minutes)
    return Comment(
        id=CommentId(uuid4()),
        post_id=post.id,
        author_id=author.id,
        content=content,
        parent_id=parent.id if parent else None,
        created_at=created,
        updated_at=created,
    )


def make_node(
    author_id: UserId | None = None,
    parent_id: CommentId | None = None,
    post_id: PostId | None = None,
    content: str = "A comment",
    replies: tuple[CommentNode, ...] = (),
) -> CommentNode:
    """Build a comment node for forest tests."""
    return CommentNode(
        id=CommentId(uuid4()),
        post_id=post_id or PostId(uuid4()),
        author_id=author_id or UserId(uuid4()),
        content=content,
        parent_id=parent_id,
        created_at=BASE_TIME,
        updated_at=BASE_TIME,
        replies=replies,
    )


def identity_of(user: User) -> Identity:
    return Identity.for_user(user)

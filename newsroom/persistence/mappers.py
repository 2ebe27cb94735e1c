"""Mappers for converting between database rows and domain models.

Since the domain models are immutable pydantic objects, rows are mapped by
hand instead of through SQLAlchemy's imperative mapping.
"""

from typing import Any, Dict, Iterable
from uuid import UUID

from newsroom.domain.model import Comment, Post, Tag, User
from newsroom.domain.value import (
    CommentId,
    PostId,
    PostStatus,
    Slug,
    TagId,
    TagName,
    UserId,
    UserRole,
)


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def row_to_user(row: Dict[str, Any]) -> User:
    """Convert database row to User domain model.

    Args:
        row: Database row as dict

    Returns:
        User domain model
    """
    return User(
        id=UserId(_uuid(row["id"])),
        email=row["email"],
        name=row.get("name"),
        avatar=row.get("avatar"),
        role=UserRole(row["role"]),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def user_to_dict(user: User) -> Dict[str, Any]:
    """Convert User domain model to database dict."""
    data = user.model_dump()
    data["role"] = user.role.value
    return data


def row_to_post(row: Dict[str, Any], tag_names: Iterable[str] = ()) -> Post:
    """Convert database row to Post domain model.

    Args:
        row: Database row as dict
        tag_names: Names of the tags linked through ``post_tags``

    Returns:
        Post domain model
    """
    return Post(
        id=PostId(_uuid(row["id"])),
        title=row["title"],
        slug=Slug(row["slug"]),
        content=row["content"],
        excerpt=row.get("excerpt"),
        image=row.get("image"),
        status=PostStatus(row["status"]),
        author_id=UserId(_uuid(row["author_id"])),
        tag_names=[TagName(name) for name in tag_names],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def post_to_dict(post: Post) -> Dict[str, Any]:
    """Convert Post domain model to a ``posts`` row.

    Tag names are not a column; they are stored in ``post_tags``.
    """
    data = post.model_dump(exclude={"tag_names"})
    data["status"] = post.status.value
    return data


def row_to_tag(row: Dict[str, Any]) -> Tag:
    return Tag(
        id=TagId(_uuid(row["id"])),
        name=TagName(row["name"]),
        slug=row["slug"],
        created_at=row["created_at"],
    )


def tag_to_dict(tag: Tag) -> Dict[str, Any]:
    return tag.model_dump()


def row_to_comment(row: Dict[str, Any]) -> Comment:
    """Convert database row to Comment domain model.

    Args:
        row: Database row as dict

    Returns:
        Comment domain model
    """
    return Comment(
        id=CommentId(_uuid(row["id"])),
        post_id=PostId(_uuid(row["post_id"])),
        author_id=UserId(_uuid(row["author_id"])),
        content=row["content"],
        parent_id=CommentId(_uuid(row["parent_id"])) if row.get("parent_id") else None,
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def comment_to_dict(comment: Comment) -> Dict[str, Any]:
    return comment.model_dump()

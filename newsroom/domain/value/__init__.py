"""Domain value objects for the newsroom."""

from newsroom.domain.value.identifiers import CommentId, PostId, TagId, UserId
from newsroom.domain.value.types import (
    PostStatus,
    Slug,
    SortOrder,
    TagName,
    UserRole,
    UserSortField,
)

__all__ = [
    # Identifiers
    "UserId",
    "PostId",
    "CommentId",
    "TagId",
    # Types
    "PostStatus",
    "Slug",
    "SortOrder",
    "TagName",
    "UserRole",
    "UserSortField",
]

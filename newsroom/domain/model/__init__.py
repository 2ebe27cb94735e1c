"""Domain model entities for the newsroom."""

from newsroom.domain.model.comment import Comment
from newsroom.domain.model.post import Post
from newsroom.domain.model.tag import Tag
from newsroom.domain.model.user import User

__all__ = [
    "User",
    "Post",
    "Comment",
    "Tag",
]

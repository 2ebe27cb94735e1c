"""Domain services."""

from .base import Service
from .comment_service import CommentService
from .identity_service import IdentityService
from .post_service import PostService
from .tag_service import TagService
from .user_service import UserService

__all__ = [
    "CommentService",
    "IdentityService",
    "PostService",
    "Service",
    "TagService",
    "UserService",
]

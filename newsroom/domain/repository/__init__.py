"""Repository interfaces for the newsroom domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from newsroom.domain.repository.comment import CommentRepository
from newsroom.domain.repository.post import PostRepository
from newsroom.domain.repository.tag import TagRepository
from newsroom.domain.repository.user import UserRepository

__all__ = [
    "UserRepository",
    "PostRepository",
    "CommentRepository",
    "TagRepository",
]

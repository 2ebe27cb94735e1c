"""PostgreSQL repository implementations."""

from newsroom.persistence.repository.comment import PostgresCommentRepository
from newsroom.persistence.repository.post import PostgresPostRepository
from newsroom.persistence.repository.tag import PostgresTagRepository
from newsroom.persistence.repository.user import PostgresUserRepository

__all__ = [
    "PostgresCommentRepository",
    "PostgresPostRepository",
    "PostgresTagRepository",
    "PostgresUserRepository",
]

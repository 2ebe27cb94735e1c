"""Shared user response shapes."""

from datetime import datetime

from pydantic import BaseModel

from newsroom.domain.model import User
from newsroom.domain.value import UserRole


class UserItem(BaseModel):
    """User as returned by the API."""

    id: str
    email: str
    name: str | None
    avatar: str | None
    role: UserRole
    created_at: datetime

    @classmethod
    def from_user(cls, user: User) -> "UserItem":
        return cls(
            id=str(user.id),
            email=user.email,
            name=user.name,
            avatar=user.avatar,
            role=user.role,
            created_at=user.created_at,
        )

"""User aggregate root."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from newsroom.domain.model.common import DomainModel
from newsroom.domain.value import UserId, UserRole


class User(DomainModel):
    """User account.

    The id never changes. Profile fields (name, email, avatar) are edited by
    the user or an admin; the role is edited only by an admin acting on
    someone else.
    """

    id: UserId
    email: str = Field(min_length=3, max_length=255)
    name: Optional[str] = Field(default=None, max_length=100)
    avatar: Optional[str] = None
    role: UserRole = UserRole.USER
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

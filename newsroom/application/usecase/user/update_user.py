"""Update user use case."""

from datetime import datetime
from typing import Any
from uuid import UUID

import logfire
from pydantic import BaseModel

from newsroom.domain.error import (
    ConflictError,
    NotAuthenticatedError,
    NotAuthorizedError,
)
from newsroom.domain.model import User
from newsroom.domain.permission import Identity, Permission, can
from newsroom.domain.service import UserService
from newsroom.domain.value import UserId, UserRole

from .common import UserItem


class UpdateUserRequest(BaseModel):
    """Update user request.

    Only explicitly set fields are applied.
    """

    identity: Identity
    user_id: str  # Target user (UUID string)
    name: str | None = None
    email: str | None = None
    avatar: str | None = None
    role: UserRole | None = None


class UpdateUserUseCase:
    """Use case for editing a user's profile or role."""

    def __init__(self, user_service: UserService) -> None:
        """Initialize update user use case.

        Args:
            user_service: User domain service
        """
        self.user_service = user_service

    async def execute(self, request: UpdateUserRequest) -> UserItem:
        """Execute update user flow.

        Rules:
        - users edit themselves; admins edit anyone except other admins
        - only an admin changes a role, and never their own
        - email stays unique

        Raises:
            NotAuthenticatedError: If the caller is anonymous
            NotAuthorizedError: If one of the rules above is broken
            NotFoundError: If the target user does not exist
            ConflictError: If the email belongs to another user
        """
        identity = request.identity
        if not identity.authenticated:
            raise NotAuthenticatedError("edit users")

        target = await self.user_service.get_by_id(UserId(UUID(request.user_id)))
        is_self = identity.user_id == target.id
        is_admin = can(identity, Permission.MANAGE_USERS)

        if not is_self and not is_admin:
            raise NotAuthorizedError("user", request.user_id, str(identity.user_id))
        if not is_self and target.role == UserRole.ADMIN:
            logfire.warn(
                "Admin tried to edit another admin",
                actor_id=str(identity.user_id),
                target_id=request.user_id,
            )
            raise NotAuthorizedError("user", request.user_id, str(identity.user_id))

        fields = request.model_fields_set
        changes: dict[str, Any] = {}
        for name in ("name", "avatar"):
            if name in fields:
                changes[name] = getattr(request, name)

        email = (request.email or "").strip().lower()
        if "email" in fields and email and email != target.email:
            existing = await self.user_service.get_user_by_email(email)
            if existing and existing.id != target.id:
                raise ConflictError("User", "email", email)
            changes["email"] = email

        if "role" in fields and request.role is not None and request.role != target.role:
            if is_self or not is_admin:
                raise NotAuthorizedError(
                    "user role", request.user_id, str(identity.user_id), action="change"
                )
            changes["role"] = request.role

        changes["updated_at"] = datetime.now()
        updated = User.model_validate({**dict(target), **changes})
        saved = await self.user_service.save(updated)
        return UserItem.from_user(saved)

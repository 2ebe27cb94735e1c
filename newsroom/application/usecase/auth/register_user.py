"""Register user use case."""

from datetime import datetime
from uuid import uuid4

import logfire
from pydantic import BaseModel

from newsroom.domain.error import ConflictError
from newsroom.domain.model import User
from newsroom.domain.service import IdentityService, UserService
from newsroom.domain.value import UserId, UserRole

from ..user.common import UserItem


class RegisterUserRequest(BaseModel):
    """Register user request."""

    email: str
    name: str | None = None
    avatar: str | None = None


class RegisterUserResponse(BaseModel):
    """Register user response."""

    user: UserItem
    token: str


class RegisterUserUseCase:
    """Use case for creating an account and issuing its first token."""

    def __init__(
        self,
        user_service: UserService,
        identity_service: IdentityService,
    ) -> None:
        """Initialize register user use case.

        Args:
            user_service: User domain service
            identity_service: Identity domain service (token issuance)
        """
        self.user_service = user_service
        self.identity_service = identity_service

    async def execute(self, request: RegisterUserRequest) -> RegisterUserResponse:
        """Execute register user flow.

        The first account on an empty instance becomes ADMIN; later accounts
        start as USER.

        Args:
            request: Register user request

        Returns:
            Created user and a session token for them

        Raises:
            ConflictError: If the email is already registered
        """
        email = request.email.strip().lower()
        with logfire.span("register_user.execute", email=email):
            if await self.user_service.get_user_by_email(email):
                raise ConflictError("User", "email", email)

            is_first = await self.user_service.count_users() == 0
            now = datetime.now()
            user = User(
                id=UserId(uuid4()),
                email=email,
                name=request.name,
                avatar=request.avatar,
                role=UserRole.ADMIN if is_first else UserRole.USER,
                created_at=now,
                updated_at=now,
            )
            saved = await self.user_service.save(user)

            logfire.info(
                "User registered",
                user_id=str(saved.id),
                role=saved.role.value,
                first_user=is_first,
            )

            token = self.identity_service.create_token(saved.id)
            return RegisterUserResponse(user=UserItem.from_user(saved), token=token)

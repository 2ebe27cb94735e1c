"""Delete user use case."""

from uuid import UUID

from pydantic import BaseModel

from newsroom.domain.error import NotAuthorizedError, NotFoundError
from newsroom.domain.permission import Identity, Permission, ensure_can
from newsroom.domain.service import UserService
from newsroom.domain.value import UserId


class DeleteUserRequest(BaseModel):
    """Delete user request."""

    identity: Identity
    user_id: str


class DeleteUserResponse(BaseModel):
    """Delete user response."""

    user_id: str


class DeleteUserUseCase:
    """Use case for removing a user account."""

    def __init__(self, user_service: UserService) -> None:
        self.user_service = user_service

    async def execute(self, request: DeleteUserRequest) -> DeleteUserResponse:
        """Execute delete user flow.

        Raises:
            NotAuthenticatedError: If the caller is anonymous
            NotAuthorizedError: If the caller cannot manage users, or targets
                their own account
            NotFoundError: If the user does not exist
        """
        ensure_can(request.identity, Permission.MANAGE_USERS, "delete users")

        user_id = UserId(UUID(request.user_id))
        if user_id == request.identity.user_id:
            raise NotAuthorizedError(
                "user", request.user_id, request.user_id, action="delete"
            )

        if not await self.user_service.delete_user(user_id):
            raise NotFoundError("User", request.user_id)

        return DeleteUserResponse(user_id=request.user_id)

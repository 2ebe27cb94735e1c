"""Get current identity use case."""

from pydantic import BaseModel

from newsroom.domain.permission import ROLE_PERMISSIONS, Identity
from newsroom.domain.service import UserService
from newsroom.domain.value import UserRole


class GetCurrentIdentityRequest(BaseModel):
    """Get current identity request."""

    identity: Identity


class GetCurrentIdentityResponse(BaseModel):
    """Who the caller is, and what they may do.

    Anonymous callers get ``authenticated=False`` and no permissions.
    """

    authenticated: bool
    user_id: str | None = None
    role: UserRole | None = None
    name: str | None = None
    email: str | None = None
    avatar: str | None = None
    permissions: list[str] = []


class GetCurrentIdentityUseCase:
    """Use case for describing the resolved identity to a client."""

    def __init__(self, user_service: UserService) -> None:
        """Initialize get current identity use case.

        Args:
            user_service: User domain service
        """
        self.user_service = user_service

    async def execute(
        self, request: GetCurrentIdentityRequest
    ) -> GetCurrentIdentityResponse:
        identity = request.identity
        if not identity.authenticated or identity.user_id is None:
            return GetCurrentIdentityResponse(authenticated=False)

        user = await self.user_service.find_by_id(identity.user_id)
        if user is None:
            return GetCurrentIdentityResponse(authenticated=False)

        return GetCurrentIdentityResponse(
            authenticated=True,
            user_id=str(user.id),
            role=user.role,
            name=user.name,
            email=user.email,
            avatar=user.avatar,
            permissions=sorted(p.value for p in ROLE_PERMISSIONS[user.role]),
        )

"""Identity domain service.

Turns a session token into an ``Identity``. The token only vouches for the
user id; the role comes from the stored user record on every request.
"""

from uuid import UUID

import logfire

from newsroom.config import AuthSettings
from newsroom.domain.permission import Identity
from newsroom.domain.repository import UserRepository
from newsroom.domain.value import UserId
from newsroom.util.jwt import JWTError, TokenPayload, create_token, verify_token

from .base import Service


class IdentityService(Service):
    """Domain service for token handling and identity resolution."""

    def __init__(
        self, user_repository: UserRepository, auth_settings: AuthSettings
    ) -> None:
        """Initialize identity service.

        Args:
            user_repository: User repository
            auth_settings: Authentication settings
        """
        self.user_repository = user_repository
        self.auth_settings = auth_settings

    def create_token(self, user_id: UserId) -> str:
        """Create a session token for a user."""
        with logfire.span("identity_service.create_token", user_id=str(user_id)):
            token = create_token(str(user_id), self.auth_settings)
            logfire.info("Session token created", user_id=str(user_id))
            return token

    def verify_token(self, token: str) -> TokenPayload:
        """Verify a token and extract its payload.

        Raises:
            JWTError: If token is invalid or expired
        """
        with logfire.span("identity_service.verify_token"):
            try:
                return verify_token(token, self.auth_settings)
            except JWTError as e:
                logfire.warn("Token verification failed", error=str(e))
                raise

    async def resolve(self, token: str | None) -> Identity:
        """Resolve the acting identity for a request.

        Missing, invalid or expired tokens, and tokens for users that no
        longer exist, all resolve to the anonymous identity.

        Args:
            token: Session token, if any

        Returns:
            Identity with the role currently stored for the user
        """
        if not token:
            return Identity.anonymous()

        try:
            payload = self.verify_token(token)
            user_id = UserId(UUID(payload.user_id))
        except (JWTError, ValueError) as e:
            logfire.debug("Treating request as anonymous", error=str(e))
            return Identity.anonymous()

        user = await self.user_repository.find_by_id(user_id)
        if user is None:
            logfire.warn("Token refers to a missing user", user_id=str(user_id))
            return Identity.anonymous()

        return Identity.for_user(user)

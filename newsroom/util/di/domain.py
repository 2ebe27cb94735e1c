"""Domain layer DI providers."""

from dishka import Scope, provide

from newsroom.config import AuthSettings, CommentSettings
from newsroom.domain.repository import (
    CommentRepository,
    PostRepository,
    TagRepository,
    UserRepository,
)
from newsroom.domain.service import (
    CommentService,
    IdentityService,
    PostService,
    TagService,
    UserService,
)
from newsroom.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_identity_service(
        self, user_repository: UserRepository, auth_settings: AuthSettings
    ) -> IdentityService:
        """Provide identity domain service."""
        return IdentityService(
            user_repository=user_repository, auth_settings=auth_settings
        )

    @provide
    def get_comment_service(
        self,
        comment_repository: CommentRepository,
        user_repository: UserRepository,
        comment_settings: CommentSettings,
    ) -> CommentService:
        """Provide comment domain service."""
        return CommentService(
            comment_repository=comment_repository,
            user_repository=user_repository,
            max_depth=comment_settings.max_depth,
        )

    @provide
    def get_post_service(self, post_repository: PostRepository) -> PostService:
        """Provide post domain service."""
        return PostService(post_repository=post_repository)

    @provide
    def get_user_service(self, user_repository: UserRepository) -> UserService:
        """Provide user domain service."""
        return UserService(user_repository=user_repository)

    @provide
    def get_tag_service(self, tag_repository: TagRepository) -> TagService:
        """Provide tag domain service."""
        return TagService(tag_repository=tag_repository)

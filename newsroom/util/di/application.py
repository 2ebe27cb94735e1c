"""Application layer DI providers."""

from dishka import Scope, provide

from newsroom.application.usecase.auth import (
    GetCurrentIdentityUseCase,
    RegisterUserUseCase,
)
from newsroom.application.usecase.comment import (
    CreateCommentUseCase,
    DeleteCommentUseCase,
    GetCommentsUseCase,
    UpdateCommentUseCase,
)
from newsroom.application.usecase.post import (
    CreatePostUseCase,
    DeletePostUseCase,
    GetPostUseCase,
    ListManagedPostsUseCase,
    ListPostsUseCase,
    UpdatePostUseCase,
)
from newsroom.application.usecase.tag import ListTagsUseCase
from newsroom.application.usecase.user import (
    DeleteUserUseCase,
    ListUsersUseCase,
    UpdateUserUseCase,
)
from newsroom.config import CommentSettings, ListingSettings
from newsroom.domain.service import (
    CommentService,
    IdentityService,
    PostService,
    TagService,
    UserService,
)
from newsroom.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Auth use cases
    @provide(scope=Scope.REQUEST)
    def get_current_identity_use_case(
        self, user_service: UserService
    ) -> GetCurrentIdentityUseCase:
        """Provide get current identity use case."""
        return GetCurrentIdentityUseCase(user_service=user_service)

    @provide(scope=Scope.REQUEST)
    def get_register_user_use_case(
        self, user_service: UserService, identity_service: IdentityService
    ) -> RegisterUserUseCase:
        """Provide register user use case."""
        return RegisterUserUseCase(
            user_service=user_service, identity_service=identity_service
        )

    # Post use cases
    @provide(scope=Scope.REQUEST)
    def get_create_post_use_case(
        self,
        post_service: PostService,
        tag_service: TagService,
        comment_service: CommentService,
    ) -> CreatePostUseCase:
        """Provide create post use case."""
        return CreatePostUseCase(
            post_service=post_service,
            tag_service=tag_service,
            comment_service=comment_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_get_post_use_case(
        self, post_service: PostService, comment_service: CommentService
    ) -> GetPostUseCase:
        """Provide get post use case."""
        return GetPostUseCase(
            post_service=post_service, comment_service=comment_service
        )

    @provide(scope=Scope.REQUEST)
    def get_list_posts_use_case(
        self,
        post_service: PostService,
        comment_service: CommentService,
        listing_settings: ListingSettings,
    ) -> ListPostsUseCase:
        """Provide public list posts use case."""
        return ListPostsUseCase(
            post_service=post_service,
            comment_service=comment_service,
            listing_settings=listing_settings,
        )

    @provide(scope=Scope.REQUEST)
    def get_list_managed_posts_use_case(
        self,
        post_service: PostService,
        comment_service: CommentService,
        listing_settings: ListingSettings,
    ) -> ListManagedPostsUseCase:
        """Provide management list posts use case."""
        return ListManagedPostsUseCase(
            post_service=post_service,
            comment_service=comment_service,
            listing_settings=listing_settings,
        )

    @provide(scope=Scope.REQUEST)
    def get_update_post_use_case(
        self,
        post_service: PostService,
        tag_service: TagService,
        comment_service: CommentService,
    ) -> UpdatePostUseCase:
        """Provide update post use case."""
        return UpdatePostUseCase(
            post_service=post_service,
            tag_service=tag_service,
            comment_service=comment_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_delete_post_use_case(
        self, post_service: PostService, comment_service: CommentService
    ) -> DeletePostUseCase:
        """Provide delete post use case."""
        return DeletePostUseCase(
            post_service=post_service, comment_service=comment_service
        )

    # Comment use cases
    @provide(scope=Scope.REQUEST)
    def get_create_comment_use_case(
        self,
        comment_service: CommentService,
        post_service: PostService,
        comment_settings: CommentSettings,
    ) -> CreateCommentUseCase:
        """Provide create comment use case."""
        return CreateCommentUseCase(
            comment_service=comment_service,
            post_service=post_service,
            comment_settings=comment_settings,
        )

    @provide(scope=Scope.REQUEST)
    def get_get_comments_use_case(
        self, comment_service: CommentService, post_service: PostService
    ) -> GetCommentsUseCase:
        """Provide get comments use case."""
        return GetCommentsUseCase(
            comment_service=comment_service, post_service=post_service
        )

    @provide(scope=Scope.REQUEST)
    def get_update_comment_use_case(
        self, comment_service: CommentService, comment_settings: CommentSettings
    ) -> UpdateCommentUseCase:
        """Provide update comment use case."""
        return UpdateCommentUseCase(
            comment_service=comment_service, comment_settings=comment_settings
        )

    @provide(scope=Scope.REQUEST)
    def get_delete_comment_use_case(
        self, comment_service: CommentService
    ) -> DeleteCommentUseCase:
        """Provide delete comment use case."""
        return DeleteCommentUseCase(comment_service=comment_service)

    # User use cases
    @provide(scope=Scope.REQUEST)
    def get_list_users_use_case(
        self, user_service: UserService, listing_settings: ListingSettings
    ) -> ListUsersUseCase:
        """Provide list users use case."""
        return ListUsersUseCase(
            user_service=user_service, listing_settings=listing_settings
        )

    @provide(scope=Scope.REQUEST)
    def get_update_user_use_case(self, user_service: UserService) -> UpdateUserUseCase:
        """Provide update user use case."""
        return UpdateUserUseCase(user_service=user_service)

    @provide(scope=Scope.REQUEST)
    def get_delete_user_use_case(self, user_service: UserService) -> DeleteUserUseCase:
        """Provide delete user use case."""
        return DeleteUserUseCase(user_service=user_service)

    # Tag use cases
    @provide(scope=Scope.REQUEST)
    def get_list_tags_use_case(self, tag_service: TagService) -> ListTagsUseCase:
        """Provide list tags use case."""
        return ListTagsUseCase(tag_service=tag_service)

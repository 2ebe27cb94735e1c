"""Post use cases."""

from .common import PostItem
from .create_post import CreatePostRequest, CreatePostUseCase
from .delete_post import DeletePostRequest, DeletePostResponse, DeletePostUseCase
from .get_post import GetPostRequest, GetPostResponse, GetPostUseCase
from .list_managed_posts import (
    ListManagedPostsRequest,
    ListManagedPostsResponse,
    ListManagedPostsUseCase,
)
from .list_posts import ListPostsRequest, ListPostsResponse, ListPostsUseCase
from .update_post import UpdatePostRequest, UpdatePostUseCase

__all__ = [
    "CreatePostRequest",
    "CreatePostUseCase",
    "DeletePostRequest",
    "DeletePostResponse",
    "DeletePostUseCase",
    "GetPostRequest",
    "GetPostResponse",
    "GetPostUseCase",
    "ListManagedPostsRequest",
    "ListManagedPostsResponse",
    "ListManagedPostsUseCase",
    "ListPostsRequest",
    "ListPostsResponse",
    "ListPostsUseCase",
    "PostItem",
    "UpdatePostRequest",
    "UpdatePostUseCase",
]

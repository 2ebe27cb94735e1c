"""User administration use cases."""

from .common import UserItem
from .delete_user import DeleteUserRequest, DeleteUserResponse, DeleteUserUseCase
from .list_users import ListUsersRequest, ListUsersResponse, ListUsersUseCase
from .update_user import UpdateUserRequest, UpdateUserUseCase

__all__ = [
    "DeleteUserRequest",
    "DeleteUserResponse",
    "DeleteUserUseCase",
    "ListUsersRequest",
    "ListUsersResponse",
    "ListUsersUseCase",
    "UpdateUserRequest",
    "UpdateUserUseCase",
    "UserItem",
]

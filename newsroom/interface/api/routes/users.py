"""User administration routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from newsroom.application.usecase.user import (
    DeleteUserRequest,
    DeleteUserResponse,
    DeleteUserUseCase,
    ListUsersRequest,
    ListUsersResponse,
    ListUsersUseCase,
    UpdateUserRequest,
    UpdateUserUseCase,
    UserItem,
)
from newsroom.domain.error import DomainError
from newsroom.domain.service import IdentityService
from newsroom.domain.value import UserRole, UserSortField
from newsroom.interface.api.auth import read_auth_token
from newsroom.interface.api.error import http_error

router = APIRouter(prefix="/users", tags=["users"], route_class=DishkaRoute)


class UpdateUserAPIRequest(BaseModel):
    """API request for editing a user. Omitted fields are left unchanged."""

    name: str | None = Field(default=None, max_length=100)
    email: str | None = Field(default=None, min_length=3, max_length=255)
    avatar: str | None = None
    role: UserRole | None = None


@router.get("", response_model=ListUsersResponse)
async def list_users(
    identity_service: FromDishka[IdentityService],
    list_users_use_case: FromDishka[ListUsersUseCase],
    page: int = 1,
    page_size: int | None = None,
    search: str | None = None,
    sort: UserSortField = UserSortField.CREATED_AT,
    token: str | None = Depends(read_auth_token),
) -> ListUsersResponse:
    """Paginated user table for admins, searchable by name or email."""
    identity = await identity_service.resolve(token)
    try:
        return await list_users_use_case.execute(
            ListUsersRequest(
                identity=identity,
                search=search,
                sort=sort,
                page=page,
                page_size=page_size,
            )
        )
    except (DomainError, ValueError) as e:
        raise http_error(e, "list users") from e


@router.patch("/{user_id}", response_model=UserItem)
async def update_user(
    user_id: str,
    request: UpdateUserAPIRequest,
    identity_service: FromDishka[IdentityService],
    update_user_use_case: FromDishka[UpdateUserUseCase],
    token: str | None = Depends(read_auth_token),
) -> UserItem:
    """Edit a profile.

    Users edit themselves. Admins edit anyone except other admins, and are
    the only ones who can change a role (never their own).
    """
    identity = await identity_service.resolve(token)
    try:
        return await update_user_use_case.execute(
            UpdateUserRequest(
                identity=identity,
                user_id=user_id,
                **request.model_dump(exclude_unset=True),
            )
        )
    except (DomainError, ValueError) as e:
        raise http_error(e, "update user") from e


@router.delete("/{user_id}", response_model=DeleteUserResponse)
async def delete_user(
    user_id: str,
    identity_service: FromDishka[IdentityService],
    delete_user_use_case: FromDishka[DeleteUserUseCase],
    token: str | None = Depends(read_auth_token),
) -> DeleteUserResponse:
    """Delete an account (MANAGE_USERS; admins cannot delete themselves)."""
    identity = await identity_service.resolve(token)
    try:
        return await delete_user_use_case.execute(
            DeleteUserRequest(identity=identity, user_id=user_id)
        )
    except (DomainError, ValueError) as e:
        raise http_error(e, "delete user") from e

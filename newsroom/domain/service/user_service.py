"""User domain service."""

import logfire

from newsroom.domain.error import NotFoundError
from newsroom.domain.model import User
from newsroom.domain.query import UserQuery
from newsroom.domain.repository import UserRepository
from newsroom.domain.value import UserId

from .base import Service


class UserService(Service):
    """Domain service for user operations."""

    def __init__(self, user_repository: UserRepository) -> None:
        """Initialize user service.

        Args:
            user_repository: User repository
        """
        self.user_repository = user_repository

    async def get_by_id(self, user_id: UserId) -> User:
        """Get user by ID.

        Args:
            user_id: User ID

        Returns:
            User entity

        Raises:
            NotFoundError: If user not found
        """
        with logfire.span("user_service.get_by_id", user_id=str(user_id)):
            user = await self.user_repository.find_by_id(user_id)
            if not user:
                logfire.warn("User not found", user_id=str(user_id))
                raise NotFoundError("User", str(user_id))
            logfire.info("User found", user_id=str(user_id), role=user.role.value)
            return user

    async def find_by_id(self, user_id: UserId) -> User | None:
        return await self.user_repository.find_by_id(user_id)

    async def get_user_by_email(self, email: str) -> User | None:
        """Get user by email.

        Args:
            email: User email

        Returns:
            User if found, None otherwise
        """
        with logfire.span("user_service.get_user_by_email", email=email):
            user = await self.user_repository.find_by_email(email)
            if user:
                logfire.info("User found", email=email, user_id=str(user.id))
            else:
                logfire.info("No user with email", email=email)
            return user

    async def count_users(self) -> int:
        return await self.user_repository.count()

    async def list_users(self, query: UserQuery) -> tuple[list[User], int]:
        """Search and page through users.

        Args:
            query: Search, sort and page window

        Returns:
            Users on the requested page and the total number of matches
        """
        with logfire.span(
            "user_service.list_users",
            search=query.search,
            sort=query.sort.value,
            page=query.page,
            page_size=query.page_size,
        ):
            total = await self.user_repository.count(query)
            if query.is_out_of_range(total):
                return [], total
            users = await self.user_repository.find_page(query)
            logfire.info("Users listed", count=len(users), total=total)
            return users, total

    async def save(self, user: User) -> User:
        """Save user (create or update).

        Args:
            user: User to save

        Returns:
            Saved user
        """
        with logfire.span("user_service.save", user_id=str(user.id)):
            saved = await self.user_repository.save(user)
            logfire.info("User saved", user_id=str(saved.id), role=saved.role.value)
            return saved

    async def delete_user(self, user_id: UserId) -> bool:
        """Delete a user.

        Args:
            user_id: User ID

        Returns:
            True if the user existed
        """
        with logfire.span("user_service.delete_user", user_id=str(user_id)):
            deleted = await self.user_repository.delete(user_id)
            if deleted:
                logfire.info("User deleted", user_id=str(user_id))
            else:
                logfire.warn("User to delete not found", user_id=str(user_id))
            return deleted

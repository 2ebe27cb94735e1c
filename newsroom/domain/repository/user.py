"""User repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from newsroom.domain.model import User
from newsroom.domain.query import UserQuery
from newsroom.domain.value import UserId


class UserRepository(ABC):
    """Repository for User aggregate.

    Defines the contract for user persistence operations.
    Implementations live in the persistence layer.
    """

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: The user's unique identifier

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[User]:
        """Find a user by email (case-insensitive).

        Args:
            email: Email address

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_ids(self, user_ids: list[UserId]) -> list[User]:
        """Find several users in one query.

        Args:
            user_ids: User IDs to load

        Returns:
            Users found (missing ids are skipped)
        """
        pass

    @abstractmethod
    async def find_page(self, query: UserQuery) -> list[User]:
        """Find one page of users matching the query.

        Args:
            query: Search, sort and page window

        Returns:
            Users on the requested page
        """
        pass

    @abstractmethod
    async def count(self, query: Optional[UserQuery] = None) -> int:
        """Count users matching the query (all users when None).

        Args:
            query: Optional search filter

        Returns:
            Number of matching users
        """
        pass

    @abstractmethod
    async def save(self, user: User) -> User:
        """Save a user (create or update).

        Args:
            user: The user to save

        Returns:
            The saved user
        """
        pass

    @abstractmethod
    async def delete(self, user_id: UserId) -> bool:
        """Delete a user.

        Authored posts and comments go with the user where the store enforces
        foreign keys.

        Args:
            user_id: The user ID to delete

        Returns:
            True if a user was deleted
        """
        pass

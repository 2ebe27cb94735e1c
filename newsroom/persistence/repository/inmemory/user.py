"""In-memory user repository for testing."""

from typing import Optional

from newsroom.domain.model import User
from newsroom.domain.query import UserQuery
from newsroom.domain.repository import UserRepository
from newsroom.domain.value import UserId


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository for testing."""

    def __init__(self) -> None:
        self._users: dict[UserId, User] = {}

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        return self._users.get(user_id)

    async def find_by_email(self, email: str) -> Optional[User]:
        wanted = email.lower()
        for user in self._users.values():
            if user.email.lower() == wanted:
                return user
        return None

    async def find_by_ids(self, user_ids: list[UserId]) -> list[User]:
        return [self._users[uid] for uid in user_ids if uid in self._users]

    async def find_page(self, query: UserQuery) -> list[User]:
        if query.page < 1:
            return []
        users = query.apply(self._users.values())
        return users[query.offset : query.offset + query.limit]

    async def count(self, query: Optional[UserQuery] = None) -> int:
        if query is None:
            return len(self._users)
        return sum(1 for user in self._users.values() if query.matches(user))

    async def save(self, user: User) -> User:
        self._users[user.id] = user
        return user

    async def delete(self, user_id: UserId) -> bool:
        """Delete a user. Authored content is left in the other stores."""
        return self._users.pop(user_id, None) is not None

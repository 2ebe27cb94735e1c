"""Unit tests for ListUsersUseCase and DeleteUserUseCase."""

from datetime import timedelta
from uuid import uuid4

import pytest

from newsroom.application.usecase.user import (
    DeleteUserRequest,
    DeleteUserUseCase,
    ListUsersRequest,
    ListUsersUseCase,
)
from newsroom.domain.error import NotAuthorizedError, NotFoundError, ValidationError
from newsroom.domain.repository import UserRepository
from newsroom.domain.value import UserRole, UserSortField
from tests.conftest import BASE_TIME, identity_of, make_user
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestListUsersUseCase:
    """Tests for ListUsersUseCase."""

    @pytest.mark.asyncio
    async def test_admin_searches_and_pages(self, unit_env):
        # Arrange
        use_case = await unit_env.get(ListUsersUseCase)
        user_repo = await unit_env.get(UserRepository)
        admin = await user_repo.save(
            make_user(role=UserRole.ADMIN, email="root@example.com")
        )
        for i in range(3):
            await user_repo.save(
                make_user(
                    email=f"reporter{i}@news.org",
                    name=f"Reporter {i}",
                    created_at=BASE_TIME + timedelta(days=i + 1),
                )
            )

        # Act
        response = await use_case.execute(
            ListUsersRequest(
                identity=identity_of(admin),
                search="NEWS.ORG",
                sort=UserSortField.EMAIL,
                page=2,
                page_size=2,
            )
        )

        # Assert
        assert response.total == 3
        assert response.total_pages == 2
        assert [u.email for u in response.users] == ["reporter2@news.org"]

    @pytest.mark.asyncio
    async def test_editor_cannot_view_users(self, unit_env):
        use_case = await unit_env.get(ListUsersUseCase)

        with pytest.raises(NotAuthorizedError):
            await use_case.execute(
                ListUsersRequest(identity=identity_of(make_user(role=UserRole.EDITOR)))
            )

    @pytest.mark.asyncio
    async def test_page_size_bounds(self, unit_env):
        use_case = await unit_env.get(ListUsersUseCase)
        admin = identity_of(make_user(role=UserRole.ADMIN))

        with pytest.raises(ValidationError):
            await use_case.execute(ListUsersRequest(identity=admin, page_size=500))


class TestDeleteUserUseCase:
    """Tests for DeleteUserUseCase."""

    @pytest.mark.asyncio
    async def test_admin_deletes_user(self, unit_env):
        use_case = await unit_env.get(DeleteUserUseCase)
        user_repo = await unit_env.get(UserRepository)
        admin = await user_repo.save(make_user(role=UserRole.ADMIN))
        user = await user_repo.save(make_user())

        response = await use_case.execute(
            DeleteUserRequest(identity=identity_of(admin), user_id=str(user.id))
        )

        assert response.user_id == str(user.id)
        assert await user_repo.find_by_id(user.id) is None

    @pytest.mark.asyncio
    async def test_admin_cannot_delete_self(self, unit_env):
        use_case = await unit_env.get(DeleteUserUseCase)
        user_repo = await unit_env.get(UserRepository)
        admin = await user_repo.save(make_user(role=UserRole.ADMIN))

        with pytest.raises(NotAuthorizedError):
            await use_case.execute(
                DeleteUserRequest(identity=identity_of(admin), user_id=str(admin.id))
            )
        assert await user_repo.find_by_id(admin.id) is not None

    @pytest.mark.asyncio
    async def test_missing_user(self, unit_env):
        use_case = await unit_env.get(DeleteUserUseCase)

        with pytest.raises(NotFoundError):
            await use_case.execute(
                DeleteUserRequest(
                    identity=identity_of(make_user(role=UserRole.ADMIN)),
                    user_id=str(uuid4()),
                )
            )

    @pytest.mark.asyncio
    async def test_user_cannot_delete_others(self, unit_env):
        use_case = await unit_env.get(DeleteUserUseCase)

        with pytest.raises(NotAuthorizedError):
            await use_case.execute(
                DeleteUserRequest(
                    identity=identity_of(make_user()), user_id=str(uuid4())
                )
            )

"""Unit tests for UpdateCommentUseCase."""

from uuid import uuid4

import pytest

from newsroom.application.usecase.comment import (
    UpdateCommentRequest,
    UpdateCommentUseCase,
)
from newsroom.config import CommentSettings
from newsroom.domain.error import (
    NotAuthenticatedError,
    NotAuthorizedError,
    NotFoundError,
    ValidationError,
)
from newsroom.domain.permission import Identity
from newsroom.domain.repository import CommentRepository, PostRepository, UserRepository
from newsroom.domain.value import UserRole
from tests.conftest import identity_of, make_comment, make_post, make_user
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


async def _seed(unit_env):
    user_repo = await unit_env.get(UserRepository)
    post_repo = await unit_env.get(PostRepository)
    comment_repo = await unit_env.get(CommentRepository)
    owner = await user_repo.save(make_user())
    post = await post_repo.save(make_post(owner))
    comment = await comment_repo.save(make_comment(post, owner, content="Original"))
    return owner, comment


class TestUpdateCommentUseCase:
    """Tests for UpdateCommentUseCase."""

    @pytest.mark.asyncio
    async def test_owner_can_edit(self, unit_env):
        # Arrange
        use_case = await unit_env.get(UpdateCommentUseCase)
        comment_repo = await unit_env.get(CommentRepository)
        owner, comment = await _seed(unit_env)

        # Act
        node = await use_case.execute(
            UpdateCommentRequest(
                identity=identity_of(owner),
                comment_id=str(comment.id),
                content="Edited",
            )
        )

        # Assert
        assert node.content == "Edited"
        stored = await comment_repo.find_by_id(comment.id)
        assert stored.content == "Edited"

    @pytest.mark.asyncio
    async def test_user_cannot_edit_someone_elses_comment(self, unit_env):
        # Arrange
        use_case = await unit_env.get(UpdateCommentUseCase)
        comment_repo = await unit_env.get(CommentRepository)
        _, comment = await _seed(unit_env)
        intruder = make_user()

        # Act / Assert
        with pytest.raises(NotAuthorizedError):
            await use_case.execute(
                UpdateCommentRequest(
                    identity=identity_of(intruder),
                    comment_id=str(comment.id),
                    content="Hijacked",
                )
            )
        stored = await comment_repo.find_by_id(comment.id)
        assert stored.content == "Original"

    @pytest.mark.asyncio
    async def test_admin_can_edit_any_comment(self, unit_env):
        use_case = await unit_env.get(UpdateCommentUseCase)
        _, comment = await _seed(unit_env)
        admin = make_user(role=UserRole.ADMIN)

        node = await use_case.execute(
            UpdateCommentRequest(
                identity=identity_of(admin),
                comment_id=str(comment.id),
                content="Moderated",
            )
        )

        assert node.content == "Moderated"

    @pytest.mark.asyncio
    async def test_anonymous_rejected(self, unit_env):
        use_case = await unit_env.get(UpdateCommentUseCase)
        _, comment = await _seed(unit_env)

        with pytest.raises(NotAuthenticatedError):
            await use_case.execute(
                UpdateCommentRequest(
                    identity=Identity.anonymous(),
                    comment_id=str(comment.id),
                    content="x",
                )
            )

    @pytest.mark.asyncio
    async def test_empty_content_rejected(self, unit_env):
        use_case = await unit_env.get(UpdateCommentUseCase)
        owner, comment = await _seed(unit_env)

        with pytest.raises(ValidationError):
            await use_case.execute(
                UpdateCommentRequest(
                    identity=identity_of(owner),
                    comment_id=str(comment.id),
                    content=" ",
                )
            )

    @pytest.mark.asyncio
    async def test_content_over_configured_limit_rejected(self, unit_env):
        # Arrange
        use_case = await unit_env.get(UpdateCommentUseCase)
        comment_repo = await unit_env.get(CommentRepository)
        limit = (await unit_env.get(CommentSettings)).max_length
        owner, comment = await _seed(unit_env)

        # Act
        with pytest.raises(ValidationError, match="exceeds"):
            await use_case.execute(
                UpdateCommentRequest(
                    identity=identity_of(owner),
                    comment_id=str(comment.id),
                    content="x" * (limit + 1),
                )
            )

        # Assert
        stored = await comment_repo.find_by_id(comment.id)
        assert stored.content == "Original"

    @pytest.mark.asyncio
    async def test_missing_comment(self, unit_env):
        use_case = await unit_env.get(UpdateCommentUseCase)
        owner, _ = await _seed(unit_env)

        with pytest.raises(NotFoundError):
            await use_case.execute(
                UpdateCommentRequest(
                    identity=identity_of(owner),
                    comment_id=str(uuid4()),
                    content="x",
                )
            )

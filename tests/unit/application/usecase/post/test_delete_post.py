"""Unit tests for DeletePostUseCase."""

import pytest

from newsroom.application.usecase.post import DeletePostRequest, DeletePostUseCase
from newsroom.domain.error import NotAuthorizedError
from newsroom.domain.repository import CommentRepository, PostRepository
from newsroom.domain.value import UserRole
from tests.conftest import identity_of, make_comment, make_post, make_user
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestDeletePostUseCase:
    """Tests for DeletePostUseCase."""

    @pytest.mark.asyncio
    async def test_editor_deletes_own_post_with_comments(self, unit_env):
        # Arrange
        use_case = await unit_env.get(DeletePostUseCase)
        post_repo = await unit_env.get(PostRepository)
        comment_repo = await unit_env.get(CommentRepository)
        editor = make_user(role=UserRole.EDITOR)
        post = await post_repo.save(make_post(editor, slug="doomed-post"))
        root = await comment_repo.save(make_comment(post, editor))
        await comment_repo.save(make_comment(post, editor, root, minutes=1))

        # Act
        response = await use_case.execute(
            DeletePostRequest(identity=identity_of(editor), slug="doomed-post")
        )

        # Assert
        assert response.post_id == str(post.id)
        assert response.deleted_comments == 2
        assert await post_repo.find_by_id(post.id) is None
        assert await comment_repo.find_by_post(post.id) == []

    @pytest.mark.asyncio
    async def test_user_cannot_delete(self, unit_env):
        use_case = await unit_env.get(DeletePostUseCase)
        post_repo = await unit_env.get(PostRepository)
        user = make_user()
        await post_repo.save(make_post(user, slug="kept-post"))

        with pytest.raises(NotAuthorizedError):
            await use_case.execute(
                DeletePostRequest(identity=identity_of(user), slug="kept-post")
            )

"""Unit tests for CreateCommentUseCase."""

from uuid import uuid4

import pytest

from newsroom.application.usecase.comment import (
    CreateCommentRequest,
    CreateCommentUseCase,
    GetCommentsRequest,
    GetCommentsUseCase,
)
from newsroom.config import CommentSettings
from newsroom.domain.error import (
    NotAuthenticatedError,
    NotFoundError,
    ValidationError,
)
from newsroom.domain.permission import Identity
from newsroom.domain.repository import PostRepository, UserRepository
from newsroom.domain.value import PostStatus, UserRole
from tests.conftest import identity_of, make_post, make_user
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


async def _seed(unit_env, status=PostStatus.PUBLISHED):
    user_repo = await unit_env.get(UserRepository)
    post_repo = await unit_env.get(PostRepository)
    author = await user_repo.save(make_user(role=UserRole.EDITOR, name="Editor"))
    reader = await user_repo.save(make_user(name="Reader"))
    post = await post_repo.save(make_post(author, status=status))
    return author, reader, post


class TestCreateCommentUseCase:
    """Tests for CreateCommentUseCase."""

    @pytest.mark.asyncio
    async def test_reply_scenario(self, unit_env):
        """Two replies to a depth-1 comment are kept in order, newest last."""
        # Arrange
        use_case = await unit_env.get(CreateCommentUseCase)
        get_comments = await unit_env.get(GetCommentsUseCase)
        _, reader, post = await _seed(unit_env)
        identity = identity_of(reader)
        root = await use_case.execute(
            CreateCommentRequest(identity=identity, post_id=str(post.id), content="Root")
        )
        child = await use_case.execute(
            CreateCommentRequest(
                identity=identity,
                post_id=str(post.id),
                content="Depth one",
                parent_id=str(root.id),
            )
        )

        # Act
        first = await use_case.execute(
            CreateCommentRequest(
                identity=identity,
                post_id=str(post.id),
                content="First reply",
                parent_id=str(child.id),
            )
        )
        second = await use_case.execute(
            CreateCommentRequest(
                identity=identity,
                post_id=str(post.id),
                content="Second reply",
                parent_id=str(child.id),
            )
        )

        # Assert
        assert first.parent_id == child.id
        assert second.parent_id == child.id
        assert first.author.name == "Reader"
        assert first.replies == ()

        thread = await get_comments.execute(
            GetCommentsRequest(identity=identity, slug=str(post.slug))
        )
        depth_one = thread.comments[0].replies[0]
        assert [n.id for n in depth_one.replies] == [first.id, second.id]
        assert thread.total == 4

    @pytest.mark.asyncio
    async def test_content_is_stripped(self, unit_env):
        use_case = await unit_env.get(CreateCommentUseCase)
        _, reader, post = await _seed(unit_env)

        node = await use_case.execute(
            CreateCommentRequest(
                identity=identity_of(reader), post_id=str(post.id), content="  hi  "
            )
        )

        assert node.content == "hi"

    @pytest.mark.asyncio
    async def test_anonymous_rejected(self, unit_env):
        use_case = await unit_env.get(CreateCommentUseCase)
        _, _, post = await _seed(unit_env)

        with pytest.raises(NotAuthenticatedError):
            await use_case.execute(
                CreateCommentRequest(
                    identity=Identity.anonymous(), post_id=str(post.id), content="hi"
                )
            )

    @pytest.mark.asyncio
    async def test_empty_content_rejected(self, unit_env):
        use_case = await unit_env.get(CreateCommentUseCase)
        _, reader, post = await _seed(unit_env)

        with pytest.raises(ValidationError):
            await use_case.execute(
                CreateCommentRequest(
                    identity=identity_of(reader), post_id=str(post.id), content="   "
                )
            )

    @pytest.mark.asyncio
    async def test_content_over_configured_limit_rejected(self, unit_env):
        """The limit is read from settings; content at the limit is accepted."""
        # Arrange
        use_case = await unit_env.get(CreateCommentUseCase)
        limit = (await unit_env.get(CommentSettings)).max_length
        _, reader, post = await _seed(unit_env)
        identity = identity_of(reader)

        # Act
        at_limit = await use_case.execute(
            CreateCommentRequest(
                identity=identity, post_id=str(post.id), content="x" * limit
            )
        )

        # Assert
        assert len(at_limit.content) == limit
        with pytest.raises(ValidationError, match="exceeds"):
            await use_case.execute(
                CreateCommentRequest(
                    identity=identity, post_id=str(post.id), content="x" * (limit + 1)
                )
            )

    @pytest.mark.asyncio
    async def test_missing_post(self, unit_env):
        use_case = await unit_env.get(CreateCommentUseCase)
        _, reader, _ = await _seed(unit_env)

        with pytest.raises(NotFoundError):
            await use_case.execute(
                CreateCommentRequest(
                    identity=identity_of(reader), post_id=str(uuid4()), content="hi"
                )
            )

    @pytest.mark.asyncio
    async def test_draft_hidden_from_other_users(self, unit_env):
        use_case = await unit_env.get(CreateCommentUseCase)
        author, reader, post = await _seed(unit_env, status=PostStatus.DRAFT)

        with pytest.raises(NotFoundError):
            await use_case.execute(
                CreateCommentRequest(
                    identity=identity_of(reader), post_id=str(post.id), content="hi"
                )
            )
        node = await use_case.execute(
            CreateCommentRequest(
                identity=identity_of(author), post_id=str(post.id), content="note"
            )
        )
        assert node.content == "note"

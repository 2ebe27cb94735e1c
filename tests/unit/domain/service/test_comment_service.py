"""Unit tests for CommentService."""

from uuid import uuid4

import pytest

from newsroom.domain.error import NotFoundError, ValidationError
from newsroom.domain.repository import CommentRepository, PostRepository, UserRepository
from newsroom.domain.service import CommentService
from newsroom.domain.tree import count_nodes
from newsroom.domain.value import CommentId
from tests.conftest import make_comment, make_post, make_user
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no database needed
unit_env = create_env_fixture()


async def _seed(unit_env):
    user_repo = await unit_env.get(UserRepository)
    post_repo = await unit_env.get(PostRepository)
    author = await user_repo.save(make_user(name="Author"))
    post = await post_repo.save(make_post(author))
    return author, post


class TestCreateComment:
    """Tests for create_comment."""

    @pytest.mark.asyncio
    async def test_create_root_comment(self, unit_env):
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        author, post = await _seed(unit_env)

        # Act
        comment = await comment_service.create_comment(
            post_id=post.id, author_id=author.id, content="First!"
        )

        # Assert
        assert comment.parent_id is None
        assert await comment_repo.find_by_id(comment.id) == comment

    @pytest.mark.asyncio
    async def test_reply_to_missing_parent(self, unit_env):
        comment_service = await unit_env.get(CommentService)
        author, post = await _seed(unit_env)

        with pytest.raises(NotFoundError):
            await comment_service.create_comment(
                post_id=post.id,
                author_id=author.id,
                content="Reply",
                parent_id=CommentId(uuid4()),
            )

    @pytest.mark.asyncio
    async def test_reply_parent_on_other_post(self, unit_env):
        comment_service = await unit_env.get(CommentService)
        post_repo = await unit_env.get(PostRepository)
        author, post = await _seed(unit_env)
        other_post = await post_repo.save(make_post(author))
        parent = await comment_service.create_comment(
            post_id=other_post.id, author_id=author.id, content="Elsewhere"
        )

        with pytest.raises(ValidationError):
            await comment_service.create_comment(
                post_id=post.id,
                author_id=author.id,
                content="Reply",
                parent_id=parent.id,
            )

    @pytest.mark.asyncio
    async def test_reply_depth_is_limited(self, unit_env):
        """Root plus three levels of replies; a fifth level is refused."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        author, post = await _seed(unit_env)
        parent = None
        for level in range(4):
            parent = await comment_service.create_comment(
                post_id=post.id,
                author_id=author.id,
                content=f"Level {level}",
                parent_id=parent.id if parent else None,
            )

        # Act / Assert
        assert await comment_service.comment_level(parent) == 3
        with pytest.raises(ValidationError):
            await comment_service.create_comment(
                post_id=post.id,
                author_id=author.id,
                content="Too deep",
                parent_id=parent.id,
            )


class TestThread:
    """Tests for get_thread and deletion."""

    @pytest.mark.asyncio
    async def test_get_thread_nests_replies_with_authors(self, unit_env):
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        author, post = await _seed(unit_env)
        root = await comment_repo.save(make_comment(post, author, minutes=0))
        first = await comment_repo.save(make_comment(post, author, root, minutes=1))
        second = await comment_repo.save(make_comment(post, author, root, minutes=2))

        # Act
        forest = await comment_service.get_thread(post.id)

        # Assert
        assert len(forest) == 1
        assert [n.id for n in forest[0].replies] == [first.id, second.id]
        assert forest[0].author.name == "Author"

    @pytest.mark.asyncio
    async def test_delete_removes_whole_subtree(self, unit_env):
        """Deleting a comment with two nested replies removes all three."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        author, post = await _seed(unit_env)
        root = await comment_repo.save(make_comment(post, author, minutes=0))
        reply = await comment_repo.save(make_comment(post, author, root, minutes=1))
        nested = await comment_repo.save(make_comment(post, author, reply, minutes=2))
        other = await comment_repo.save(make_comment(post, author, minutes=3))

        # Act
        deleted = await comment_service.delete_comment(root.id)

        # Assert
        assert set(deleted) == {root.id, reply.id, nested.id}
        forest = await comment_service.get_thread(post.id)
        assert count_nodes(forest) == 1
        assert forest[0].id == other.id

    @pytest.mark.asyncio
    async def test_delete_missing_comment(self, unit_env):
        comment_service = await unit_env.get(CommentService)
        assert await comment_service.delete_comment(CommentId(uuid4())) == []

    @pytest.mark.asyncio
    async def test_update_content(self, unit_env):
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        author, post = await _seed(unit_env)
        comment = await comment_repo.save(make_comment(post, author))

        updated = await comment_service.update_content(comment.id, "Edited")

        assert updated.content == "Edited"
        assert updated.updated_at >= comment.updated_at
        assert await comment_service.update_content(CommentId(uuid4()), "x") is None

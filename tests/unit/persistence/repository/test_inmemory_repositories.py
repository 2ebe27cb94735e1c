"""Unit tests for the in-memory repositories."""

import pytest

from newsroom.domain.query import PostQuery, UserQuery
from newsroom.domain.repository import CommentRepository, PostRepository, TagRepository
from newsroom.domain.value import SortOrder, TagName
from newsroom.persistence.repository.inmemory import InMemoryUserRepository
from tests.conftest import make_comment, make_post, make_user
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestInMemoryPostRepository:
    """Tests for post paging and ordering."""

    @pytest.mark.asyncio
    async def test_creation_time_ties_keep_storage_order(self, unit_env):
        post_repo = await unit_env.get(PostRepository)
        author = make_user()
        first = await post_repo.save(make_post(author, "Same time one"))
        second = await post_repo.save(make_post(author, "Same time two"))

        page = await post_repo.find_page(PostQuery(sort=SortOrder.OLDEST))

        assert [p.id for p in page] == [first.id, second.id]

    @pytest.mark.asyncio
    async def test_page_below_one_is_empty(self, unit_env):
        post_repo = await unit_env.get(PostRepository)
        await post_repo.save(make_post(make_user()))

        assert await post_repo.find_page(PostQuery(page=0)) == []
        assert await post_repo.count(PostQuery(page=0)) == 1


class TestInMemoryTagRepository:
    """Tests for find-or-create of tags."""

    @pytest.mark.asyncio
    async def test_ensure_reuses_existing_tags(self, unit_env):
        tag_repo = await unit_env.get(TagRepository)

        first = await tag_repo.ensure([TagName("Finance"), TagName("city hall")])
        again = await tag_repo.ensure([TagName("finance")])

        assert again[0].id == first[0].id
        assert first[1].slug == "city-hall"
        assert [t.name.root for t in await tag_repo.find_all()] == [
            "city hall",
            "finance",
        ]


class TestInMemoryCommentRepository:
    """Tests for comment storage."""

    @pytest.mark.asyncio
    async def test_delete_by_post_counts(self, unit_env):
        comment_repo = await unit_env.get(CommentRepository)
        author = make_user()
        post = make_post(author)
        other = make_post(author)
        root = await comment_repo.save(make_comment(post, author))
        await comment_repo.save(make_comment(post, author, root, minutes=1))
        survivor = await comment_repo.save(make_comment(other, author))

        assert await comment_repo.delete_by_post(post.id) == 2
        assert await comment_repo.find_by_post(other.id) == [survivor]

    @pytest.mark.asyncio
    async def test_count_by_posts_includes_posts_without_comments(self, unit_env):
        comment_repo = await unit_env.get(CommentRepository)
        author = make_user()
        post = make_post(author)
        quiet = make_post(author)
        root = await comment_repo.save(make_comment(post, author))
        await comment_repo.save(make_comment(post, author, root, minutes=1))

        counts = await comment_repo.count_by_posts([post.id, quiet.id])

        assert counts == {post.id: 2, quiet.id: 0}


class TestInMemoryUserRepository:
    """Tests for user search."""

    @pytest.mark.asyncio
    async def test_search_and_count(self):
        repo = InMemoryUserRepository()
        await repo.save(make_user(email="ann@example.com", name="Ann"))
        await repo.save(make_user(email="bo@example.com", name="Bo"))

        query = UserQuery(search="ann")

        assert await repo.count() == 2
        assert await repo.count(query) == 1
        assert [u.name for u in await repo.find_page(query)] == ["Ann"]

"""Unit tests for CreatePostUseCase."""

import pytest

from newsroom.application.usecase.post import CreatePostRequest, CreatePostUseCase
from newsroom.domain.error import ConflictError, NotAuthenticatedError
from newsroom.domain.permission import Identity
from newsroom.domain.repository import TagRepository
from newsroom.domain.value import PostStatus
from tests.conftest import identity_of, make_user
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestCreatePostUseCase:
    """Tests for CreatePostUseCase."""

    @pytest.mark.asyncio
    async def test_creates_draft_with_generated_slug_and_tags(self, unit_env):
        # Arrange
        use_case = await unit_env.get(CreatePostUseCase)
        tag_repo = await unit_env.get(TagRepository)
        author = make_user()

        # Act
        item = await use_case.execute(
            CreatePostRequest(
                identity=identity_of(author),
                title="City Budget 2025",
                content="The council published its budget today.",
                tag_names=["Finance", "policy", "finance"],
            )
        )

        # Assert
        assert item.slug == "city-budget-2025"
        assert item.status == PostStatus.DRAFT
        assert item.author_id == str(author.id)
        assert item.tags == ["finance", "policy"]
        assert [t.name.root for t in await tag_repo.find_all()] == ["finance", "policy"]

    @pytest.mark.asyncio
    async def test_duplicate_explicit_slug_conflicts(self, unit_env):
        use_case = await unit_env.get(CreatePostUseCase)
        identity = identity_of(make_user())
        request = CreatePostRequest(
            identity=identity,
            title="Budget news",
            content="Some content for the post.",
            slug="budget-news",
        )
        await use_case.execute(request)

        with pytest.raises(ConflictError):
            await use_case.execute(request)

    @pytest.mark.asyncio
    async def test_same_title_gets_suffixed_slug(self, unit_env):
        use_case = await unit_env.get(CreatePostUseCase)
        identity = identity_of(make_user())
        request = CreatePostRequest(
            identity=identity,
            title="Budget news",
            content="Some content for the post.",
        )

        first = await use_case.execute(request)
        second = await use_case.execute(request)

        assert first.slug == "budget-news"
        assert second.slug == "budget-news-1"

    @pytest.mark.asyncio
    async def test_invalid_title_raises_value_error(self, unit_env):
        use_case = await unit_env.get(CreatePostUseCase)

        with pytest.raises(ValueError):
            await use_case.execute(
                CreatePostRequest(
                    identity=identity_of(make_user()),
                    title="Hi",
                    content="Some content for the post.",
                )
            )

    @pytest.mark.asyncio
    async def test_anonymous_rejected(self, unit_env):
        use_case = await unit_env.get(CreatePostUseCase)

        with pytest.raises(NotAuthenticatedError):
            await use_case.execute(
                CreatePostRequest(
                    identity=Identity.anonymous(),
                    title="Budget news",
                    content="Some content for the post.",
                )
            )

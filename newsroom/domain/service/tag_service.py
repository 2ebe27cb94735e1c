"""Tag domain service."""

import logfire

from newsroom.domain.model import Tag
from newsroom.domain.repository import TagRepository
from newsroom.domain.value import TagName

from .base import Service


class TagService(Service):
    """Domain service for tag operations."""

    def __init__(self, tag_repository: TagRepository) -> None:
        """Initialize tag service.

        Args:
            tag_repository: Tag repository
        """
        self.tag_repository = tag_repository

    async def ensure_tags(self, tag_names: list[TagName]) -> list[Tag]:
        """Find-or-create the named tags.

        Names are already lowercased by ``TagName``, so "Finance" and
        "finance" resolve to the same tag.

        Args:
            tag_names: Tag names referenced by a post

        Returns:
            One tag per distinct name
        """
        unique = list({name.root: name for name in tag_names}.values())
        with logfire.span("tag_service.ensure_tags", tags=[t.root for t in unique]):
            if not unique:
                return []
            tags = await self.tag_repository.ensure(unique)
            logfire.info("Tags ensured", count=len(tags))
            return tags

    async def get_all_tags(self) -> list[Tag]:
        """Get all tags ordered by name."""
        with logfire.span("tag_service.get_all_tags"):
            tags = await self.tag_repository.find_all()
            logfire.info("Tags retrieved", count=len(tags))
            return tags

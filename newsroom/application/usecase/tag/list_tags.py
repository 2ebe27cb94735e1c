"""List tags use case."""

import logfire
from datetime import datetime

from pydantic import BaseModel

from newsroom.domain.service import TagService


class TagItem(BaseModel):
    """Tag item in response."""

    name: str
    slug: str
    created_at: datetime


class ListTagsResponse(BaseModel):
    """List tags response."""

    tags: list[TagItem]


class ListTagsUseCase:
    """Use case for listing tags alphabetically."""

    def __init__(self, tag_service: TagService) -> None:
        """Initialize list tags use case.

        Args:
            tag_service: Tag domain service
        """
        self.tag_service = tag_service

    async def execute(self) -> ListTagsResponse:
        """Execute list tags flow.

        Returns:
            All tags ordered by name
        """
        with logfire.span("list_tags.execute"):
            tags = await self.tag_service.get_all_tags()

            tag_items = [
                TagItem(
                    name=tag.name.root,
                    slug=tag.slug,
                    created_at=tag.created_at,
                )
                for tag in tags
            ]

            logfire.info("Tags listed", count=len(tag_items))

            return ListTagsResponse(tags=tag_items)

"""Tag repository interface."""

from abc import ABC, abstractmethod

from newsroom.domain.model import Tag
from newsroom.domain.value import TagName


class TagRepository(ABC):
    """Repository interface for Tag entity."""

    @abstractmethod
    async def find_by_names(self, names: list[TagName]) -> list[Tag]:
        """Find multiple tags by names in a single query.

        Args:
            names: List of tag names

        Returns:
            List of found tags (may be fewer than requested if some don't exist)
        """
        pass

    @abstractmethod
    async def find_all(self) -> list[Tag]:
        """Find all tags ordered by name.

        Returns:
            List of tags
        """
        pass

    @abstractmethod
    async def ensure(self, names: list[TagName]) -> list[Tag]:
        """Find-or-create tags by name.

        Missing tags are inserted; existing ones are reused, never duplicated.

        Args:
            names: Tag names (already normalized)

        Returns:
            One tag per distinct name, in request order
        """
        pass

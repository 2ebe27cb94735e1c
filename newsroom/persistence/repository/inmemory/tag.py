"""In-memory tag repository for testing."""

from newsroom.domain.model import Tag
from newsroom.domain.repository import TagRepository
from newsroom.domain.value import TagName


class InMemoryTagRepository(TagRepository):
    """In-memory implementation of TagRepository, keyed by name."""

    def __init__(self) -> None:
        self._tags: dict[str, Tag] = {}

    async def find_by_names(self, names: list[TagName]) -> list[Tag]:
        return [self._tags[name.root] for name in names if name.root in self._tags]

    async def find_all(self) -> list[Tag]:
        return sorted(self._tags.values(), key=lambda tag: tag.name.root)

    async def ensure(self, names: list[TagName]) -> list[Tag]:
        ordered: dict[str, Tag] = {}
        for name in names:
            if name.root not in self._tags:
                self._tags[name.root] = Tag.new(name)
            ordered.setdefault(name.root, self._tags[name.root])
        return list(ordered.values())

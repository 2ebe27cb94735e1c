"""Tag use cases."""

from .list_tags import ListTagsResponse, ListTagsUseCase, TagItem

__all__ = ["ListTagsResponse", "ListTagsUseCase", "TagItem"]

"""Post aggregate root."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from newsroom.domain.model.common import DomainModel
from newsroom.domain.value import PostId, PostStatus, Slug, TagName, UserId


class Post(DomainModel):
    """Article owned by its author.

    Drafts are visible to the author and admins only; the public listing
    shows published posts exclusively.
    """

    id: PostId
    title: str = Field(min_length=3, max_length=300)
    slug: Slug
    content: str = Field(min_length=10)
    excerpt: Optional[str] = Field(default=None, max_length=500)
    image: Optional[str] = None
    status: PostStatus = PostStatus.DRAFT
    author_id: UserId
    tag_names: list[TagName] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    @property
    def is_published(self) -> bool:
        return self.status == PostStatus.PUBLISHED

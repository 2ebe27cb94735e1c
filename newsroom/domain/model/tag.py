"""Tag entity for categorizing posts."""

import re
from datetime import datetime
from uuid import uuid4

from pydantic import Field

from newsroom.domain.model.common import DomainModel
from newsroom.domain.value import TagId, TagName


class Tag(DomainModel):
    """Tag entity.

    Tags are created on demand the first time a post references them.
    """

    id: TagId
    name: TagName  # Unique, lowercase
    slug: str = Field(min_length=1, max_length=100)
    created_at: datetime = Field(default_factory=datetime.now)

    @classmethod
    def new(cls, name: TagName) -> "Tag":
        """Create a tag for ``name`` with a URL slug derived from it."""
        slug = re.sub(r"[^a-z0-9]+", "-", name.root).strip("-") or "tag"
        return cls(id=TagId(uuid4()), name=name, slug=slug[:100])

"""Comment entity.

Comments are stored flat; ``parent_id`` links a reply to the comment it
answers. The nested view handed to clients is built by
``newsroom.domain.tree``.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from newsroom.domain.model.common import DomainModel
from newsroom.domain.value import CommentId, PostId, UserId


class Comment(DomainModel):
    """Comment on a post or reply to another comment."""

    id: CommentId
    post_id: PostId
    author_id: UserId
    content: str = Field(min_length=1)  # Length limit comes from CommentSettings
    parent_id: Optional[CommentId] = None
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

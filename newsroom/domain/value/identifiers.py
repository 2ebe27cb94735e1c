"""Strongly typed identifiers for newsroom entities."""

from typing import NewType
from uuid import UUID

UserId = NewType("UserId", UUID)
PostId = NewType("PostId", UUID)
CommentId = NewType("CommentId", UUID)
TagId = NewType("TagId", UUID)

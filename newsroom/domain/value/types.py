"""Domain value types.

Enumerations are closed: adding a member means updating every table that is
keyed by it (see ``newsroom.domain.permission``).
"""

import re
from enum import Enum

from pydantic import field_validator

from newsroom.domain.value.common import RootValueObject


class UserRole(str, Enum):
    """Role of a user account."""

    USER = "USER"
    EDITOR = "EDITOR"
    ADMIN = "ADMIN"


class PostStatus(str, Enum):
    """Publication status of a post."""

    DRAFT = "DRAFT"
    PUBLISHED = "PUBLISHED"


class SortOrder(str, Enum):
    """Creation-time ordering for post listings."""

    LATEST = "latest"  # created_at DESC
    OLDEST = "oldest"  # created_at ASC


class UserSortField(str, Enum):
    """Sort key for the user administration listing."""

    NAME = "name"
    EMAIL = "email"
    CREATED_AT = "created_at"


class TagName(RootValueObject[str]):
    """Tag name, stored lowercase.

    Input is stripped and lowercased before validation, so "Finance" and
    "finance " name the same tag.
    """

    @field_validator("root", mode="before")
    @classmethod
    def normalize_tag_name(cls, v: object) -> object:
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_validator("root")
    @classmethod
    def validate_tag_name(cls, v: str) -> str:
        if len(v) < 1 or len(v) > 50:
            raise ValueError("Tag name must be 1-50 characters")
        return v


class Slug(RootValueObject[str]):
    """URL-safe slug for posts.

    Lowercase alphanumerics separated by single hyphens, 3-100 characters.
    Examples: 'city-budget-2025', 'policy-review'
    """

    @field_validator("root")
    @classmethod
    def validate_slug_format(cls, v: str) -> str:
        if not re.match(r"^[a-z0-9]+(?:-[a-z0-9]+)*$", v):
            raise ValueError(
                "Slug must be lowercase alphanumeric with hyphens, "
                "no leading/trailing hyphens or consecutive hyphens"
            )
        if len(v) < 3 or len(v) > 100:
            raise ValueError("Slug must be 3-100 characters")
        return v

"""Post listing queries.

``PostQuery`` describes which posts a listing wants: title search, tag
membership, status and author scope, creation-time ordering and a page
window. Repositories execute it (SQL for PostgreSQL, ``matches`` for the
in-memory store); this module owns the rules and the page arithmetic.
"""

import math
from collections.abc import Iterable
from typing import Optional

from pydantic import Field, field_validator

from newsroom.domain.error import NotAuthenticatedError
from newsroom.domain.model import Post, User
from newsroom.domain.permission import Identity
from newsroom.domain.value import SortOrder, TagName, UserId, UserRole, UserSortField
from newsroom.domain.value.common import ValueObject


def parse_tags(raw: Optional[str]) -> tuple[TagName, ...]:
    """Split a comma-joined tag list, dropping blanks and duplicates."""
    if not raw:
        return ()
    seen: dict[str, TagName] = {}
    for part in raw.split(","):
        if part.strip():
            tag = TagName(part)
            seen.setdefault(tag.root, tag)
    return tuple(seen.values())


def total_pages(total: int, page_size: int) -> int:
    """``ceil(total / page_size)``; zero when nothing matches."""
    if page_size < 1:
        raise ValueError("page_size must be positive")
    return math.ceil(total / page_size) if total > 0 else 0


class ListingParams(ValueObject):
    """Filter, sort and page parameters as requested by a caller.

    ``page`` is not range-checked here: a page below 1 or past the last page
    yields an empty result rather than an error.
    """

    search: Optional[str] = None
    tags: tuple[TagName, ...] = ()
    sort: SortOrder = SortOrder.LATEST
    page: int = 1
    page_size: int = Field(default=12, ge=1)

    @field_validator("search")
    @classmethod
    def blank_search_is_none(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        v = v.strip()
        return v or None


class PostQuery(ValueObject):
    """Executable description of a post listing."""

    search: Optional[str] = None
    tags: tuple[TagName, ...] = ()
    sort: SortOrder = SortOrder.LATEST
    page: int = 1
    page_size: int = Field(default=12, ge=1)
    published_only: bool = True
    author_id: Optional[UserId] = None

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size if self.page > 1 else 0

    @property
    def limit(self) -> int:
        return self.page_size

    @property
    def descending(self) -> bool:
        return self.sort == SortOrder.LATEST

    @property
    def tag_names(self) -> list[str]:
        return [tag.root for tag in self.tags]

    def is_out_of_range(self, total: int) -> bool:
        """Whether the requested page lies outside ``[1, total_pages]``."""
        return self.page < 1 or self.page > total_pages(total, self.page_size)

    def matches(self, post: Post) -> bool:
        """Reference predicate for the filters (ignores paging and order)."""
        if self.published_only and not post.is_published:
            return False
        if self.author_id is not None and post.author_id != self.author_id:
            return False
        if self.search and self.search.casefold() not in post.title.casefold():
            return False
        if self.tags:
            wanted = set(self.tag_names)
            if not any(tag.root in wanted for tag in post.tag_names):
                return False
        return True

    def apply(self, posts: Iterable[Post]) -> list[Post]:
        """Filter and order ``posts`` in memory (no paging)."""
        matching = [post for post in posts if self.matches(post)]
        # sorted() is stable, so ties keep storage order
        return sorted(matching, key=lambda post: post.created_at, reverse=self.descending)


def build_public_query(params: ListingParams) -> PostQuery:
    """Listing for readers: published posts only."""
    return PostQuery(
        search=params.search,
        tags=params.tags,
        sort=params.sort,
        page=params.page,
        page_size=params.page_size,
        published_only=True,
    )


def build_management_query(params: ListingParams, identity: Identity) -> PostQuery:
    """Listing for the dashboard: any status, scoped to the caller's posts.

    Admins see every author's posts.

    Raises:
        NotAuthenticatedError: If the identity is anonymous
    """
    if not identity.authenticated:
        raise NotAuthenticatedError("list managed posts")
    author_id = None if identity.role == UserRole.ADMIN else identity.user_id
    return PostQuery(
        search=params.search,
        tags=params.tags,
        sort=params.sort,
        page=params.page,
        page_size=params.page_size,
        published_only=False,
        author_id=author_id,
    )


class UserQuery(ValueObject):
    """Paged, searchable user listing for administrators."""

    search: Optional[str] = None
    sort: UserSortField = UserSortField.CREATED_AT
    page: int = 1
    page_size: int = Field(default=10, ge=1)

    @field_validator("search")
    @classmethod
    def blank_search_is_none(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        v = v.strip()
        return v or None

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size if self.page > 1 else 0

    @property
    def limit(self) -> int:
        return self.page_size

    def is_out_of_range(self, total: int) -> bool:
        return self.page < 1 or self.page > total_pages(total, self.page_size)

    def matches(self, user: User) -> bool:
        """Search is a case-insensitive substring of the name or email."""
        if not self.search:
            return True
        needle = self.search.casefold()
        return needle in user.email.casefold() or needle in (user.name or "").casefold()

    def apply(self, users: Iterable[User]) -> list[User]:
        """Filter and sort ascending by the requested field."""
        matching = [user for user in users if self.matches(user)]
        if self.sort == UserSortField.NAME:
            return sorted(matching, key=lambda user: (user.name or "").casefold())
        if self.sort == UserSortField.EMAIL:
            return sorted(matching, key=lambda user: user.email.casefold())
        return sorted(matching, key=lambda user: user.created_at)

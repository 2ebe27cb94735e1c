"""List users use case."""

from pydantic import BaseModel

from newsroom.config import ListingSettings
from newsroom.domain.error import ValidationError
from newsroom.domain.permission import Identity, Permission, ensure_can
from newsroom.domain.query import UserQuery, total_pages
from newsroom.domain.service import UserService
from newsroom.domain.value import UserSortField

from .common import UserItem

# Upper bound for a single page of the user table
MAX_USER_PAGE_SIZE = 100


class ListUsersRequest(BaseModel):
    """List users request."""

    identity: Identity
    search: str | None = None
    sort: UserSortField = UserSortField.CREATED_AT
    page: int = 1
    page_size: int | None = None


class ListUsersResponse(BaseModel):
    """List users response."""

    users: list[UserItem]
    total: int
    page: int
    page_size: int
    total_pages: int


class ListUsersUseCase:
    """Use case for the admin user table."""

    def __init__(
        self, user_service: UserService, listing_settings: ListingSettings
    ) -> None:
        self.user_service = user_service
        self.listing_settings = listing_settings

    async def execute(self, request: ListUsersRequest) -> ListUsersResponse:
        """Execute list users flow.

        Raises:
            NotAuthenticatedError: If the caller is anonymous
            NotAuthorizedError: If the caller cannot view users
            ValidationError: If the page size is out of bounds
        """
        ensure_can(request.identity, Permission.VIEW_USERS, "view users")

        size = request.page_size or self.listing_settings.user_page_size
        if size < 1 or size > MAX_USER_PAGE_SIZE:
            raise ValidationError(
                f"page_size must be between 1 and {MAX_USER_PAGE_SIZE}"
            )

        query = UserQuery(
            search=request.search,
            sort=request.sort,
            page=request.page,
            page_size=size,
        )
        users, total = await self.user_service.list_users(query)
        return ListUsersResponse(
            users=[UserItem.from_user(user) for user in users],
            total=total,
            page=query.page,
            page_size=query.page_size,
            total_pages=total_pages(total, query.page_size),
        )

"""Tag routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter

from newsroom.application.usecase.tag import ListTagsResponse, ListTagsUseCase

router = APIRouter(prefix="/tags", tags=["tags"], route_class=DishkaRoute)


@router.get("", response_model=ListTagsResponse)
async def list_tags(list_tags_use_case: FromDishka[ListTagsUseCase]) -> ListTagsResponse:
    """List all tags, alphabetically."""
    return await list_tags_use_case.execute()

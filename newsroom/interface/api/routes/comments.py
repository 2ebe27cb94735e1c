"""Comment routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from newsroom.application.usecase.comment import (
    CreateCommentRequest,
    CreateCommentUseCase,
    DeleteCommentRequest,
    DeleteCommentResponse,
    DeleteCommentUseCase,
    UpdateCommentRequest,
    UpdateCommentUseCase,
)
from newsroom.domain.error import DomainError
from newsroom.domain.service import IdentityService
from newsroom.domain.tree import CommentNode
from newsroom.interface.api.auth import read_auth_token
from newsroom.interface.api.error import http_error

router = APIRouter(prefix="/comments", tags=["comments"], route_class=DishkaRoute)


class CreateCommentAPIRequest(BaseModel):
    """API request for creating a comment."""

    content: str
    post_id: str
    parent_id: str | None = None  # Parent comment ID for replies


class UpdateCommentAPIRequest(BaseModel):
    """API request for updating a comment."""

    content: str


@router.post("", response_model=CommentNode, status_code=status.HTTP_201_CREATED)
async def create_comment(
    request: CreateCommentAPIRequest,
    identity_service: FromDishka[IdentityService],
    create_comment_use_case: FromDishka[CreateCommentUseCase],
    token: str | None = Depends(read_auth_token),
) -> CommentNode:
    """Create a comment on a post or reply to another comment.

    Args:
        request: Comment content, post and optional parent
        identity_service: Resolves the caller from the session token
        create_comment_use_case: Create comment use case from DI
        token: Session token from cookie or header

    Returns:
        Created comment with its author summary

    Raises:
        HTTPException: 401/403 if not allowed, 404 if the post or parent is
            gone, 400 if the content is empty or the reply is too deep
    """
    identity = await identity_service.resolve(token)
    try:
        return await create_comment_use_case.execute(
            CreateCommentRequest(
                identity=identity,
                post_id=request.post_id,
                content=request.content,
                parent_id=request.parent_id,
            )
        )
    except (DomainError, ValueError) as e:
        raise http_error(e, "create comment") from e


@router.patch("/{comment_id}", response_model=CommentNode)
async def update_comment(
    comment_id: str,
    request: UpdateCommentAPIRequest,
    identity_service: FromDishka[IdentityService],
    update_comment_use_case: FromDishka[UpdateCommentUseCase],
    token: str | None = Depends(read_auth_token),
) -> CommentNode:
    """Update a comment's content.

    The author may edit with EDIT_OWN_COMMENTS; admins may edit any comment.
    A comment deleted in the meantime yields 404.
    """
    identity = await identity_service.resolve(token)
    try:
        return await update_comment_use_case.execute(
            UpdateCommentRequest(
                identity=identity, comment_id=comment_id, content=request.content
            )
        )
    except (DomainError, ValueError) as e:
        raise http_error(e, "update comment") from e


@router.delete("/{comment_id}", response_model=DeleteCommentResponse)
async def delete_comment(
    comment_id: str,
    identity_service: FromDishka[IdentityService],
    delete_comment_use_case: FromDishka[DeleteCommentUseCase],
    token: str | None = Depends(read_auth_token),
) -> DeleteCommentResponse:
    """Delete a comment and every reply beneath it."""
    identity = await identity_service.resolve(token)
    try:
        return await delete_comment_use_case.execute(
            DeleteCommentRequest(identity=identity, comment_id=comment_id)
        )
    except (DomainError, ValueError) as e:
        raise http_error(e, "delete comment") from e

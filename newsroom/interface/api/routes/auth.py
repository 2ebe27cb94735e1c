"""Authentication routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel, Field

from newsroom.application.usecase.auth import (
    GetCurrentIdentityRequest,
    GetCurrentIdentityResponse,
    GetCurrentIdentityUseCase,
    RegisterUserRequest,
    RegisterUserResponse,
    RegisterUserUseCase,
)
from newsroom.config import Settings
from newsroom.domain.error import DomainError
from newsroom.domain.service import IdentityService
from newsroom.interface.api.auth import AUTH_COOKIE, read_auth_token
from newsroom.interface.api.error import http_error

router = APIRouter(prefix="/auth", tags=["authentication"], route_class=DishkaRoute)


class RegisterAPIRequest(BaseModel):
    """API request for creating an account."""

    email: str = Field(min_length=3, max_length=255)
    name: str | None = Field(default=None, max_length=100)
    avatar: str | None = None


class LogoutResponse(BaseModel):
    """Logout response."""

    success: bool


@router.get("/me", response_model=GetCurrentIdentityResponse)
async def get_current_identity(
    identity_service: FromDishka[IdentityService],
    use_case: FromDishka[GetCurrentIdentityUseCase],
    token: str | None = Depends(read_auth_token),
) -> GetCurrentIdentityResponse:
    """Describe the caller.

    Safe to call without a token: anonymous callers get
    ``authenticated=false`` rather than an error, so the frontend can probe
    its session state without generating error logs.
    """
    identity = await identity_service.resolve(token)
    return await use_case.execute(GetCurrentIdentityRequest(identity=identity))


@router.post(
    "/register",
    response_model=RegisterUserResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register(
    request: RegisterAPIRequest,
    response: Response,
    use_case: FromDishka[RegisterUserUseCase],
    settings: FromDishka[Settings],
) -> RegisterUserResponse:
    """Create an account and start a session.

    The first account on a fresh instance becomes ADMIN. The session token
    is returned in the body and set as an HTTP-only cookie.

    Raises:
        HTTPException: 409 if the email is taken, 400 if a field is invalid
    """
    try:
        result = await use_case.execute(
            RegisterUserRequest(
                email=request.email, name=request.name, avatar=request.avatar
            )
        )
    except (DomainError, ValueError) as e:
        raise http_error(e, "register") from e

    secure = settings.secure_cookies
    response.set_cookie(
        key=AUTH_COOKIE,
        value=result.token,
        httponly=True,
        secure=secure,
        samesite="none" if secure else "lax",
        path="/",
        max_age=settings.auth.jwt_expiry_days * 24 * 60 * 60,
    )
    return result


@router.post("/logout", response_model=LogoutResponse)
async def logout(response: Response) -> LogoutResponse:
    """Clear the session cookie."""
    response.delete_cookie(key=AUTH_COOKIE, path="/")
    return LogoutResponse(success=True)

"""Authentication use cases."""

from .get_current_identity import (
    GetCurrentIdentityRequest,
    GetCurrentIdentityResponse,
    GetCurrentIdentityUseCase,
)
from .register_user import (
    RegisterUserRequest,
    RegisterUserResponse,
    RegisterUserUseCase,
)

__all__ = [
    "GetCurrentIdentityRequest",
    "GetCurrentIdentityResponse",
    "GetCurrentIdentityUseCase",
    "RegisterUserRequest",
    "RegisterUserResponse",
    "RegisterUserUseCase",
]

"""Translation of domain errors into HTTP responses."""

import logfire
from fastapi import HTTPException, status

from newsroom.domain.error import (
    BusinessRuleViolationError,
    ConflictError,
    DomainError,
    NotAuthenticatedError,
    NotAuthorizedError,
    NotFoundError,
)


def http_error(error: DomainError | ValueError, action: str) -> HTTPException:
    """Build the HTTPException for a failed action and log it.

    Pydantic validation errors and malformed ids surface as ``ValueError``
    and map to 400, like domain ``ValidationError``.

    Args:
        error: Error raised by a use case
        action: Short description for the log event, e.g. "update comment"
    """
    if isinstance(error, NotAuthenticatedError):
        code = status.HTTP_401_UNAUTHORIZED
    elif isinstance(error, NotAuthorizedError):
        code = status.HTTP_403_FORBIDDEN
    elif isinstance(error, NotFoundError):
        code = status.HTTP_404_NOT_FOUND
    elif isinstance(error, (ConflictError, BusinessRuleViolationError)):
        code = status.HTTP_409_CONFLICT
    else:
        code = status.HTTP_400_BAD_REQUEST

    logfire.warn(
        "Request failed: {action}",
        action=action,
        status_code=code,
        error_type=type(error).__name__,
        error=str(error),
    )
    return HTTPException(status_code=code, detail=str(error))

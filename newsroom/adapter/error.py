"""Adapter layer errors.

Failures of calls to the Newsroom HTTP API, grouped by what the caller can
do about them.
"""


class AdapterError(Exception):
    """Base adapter error."""

    pass


class ApiError(AdapterError):
    """A call to the Newsroom API failed."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class ApiAuthorizationError(ApiError):
    """The caller is not signed in (401) or not allowed (403)."""

    pass


class ApiValidationError(ApiError):
    """The request was rejected as invalid (400, 409, 422)."""

    pass


class ApiNotFoundError(ApiError):
    """The target no longer exists (404)."""

    pass


class ApiTransientError(ApiError):
    """Network failure, timeout or server error (5xx). Safe to retry."""

    pass

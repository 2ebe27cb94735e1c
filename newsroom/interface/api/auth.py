"""Request authentication helpers."""

from fastapi import Cookie, Header

# Cookie set by /auth/register and read on every request
AUTH_COOKIE = "auth_token"


def read_auth_token(
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> str | None:
    """Session token from the ``Authorization: Bearer`` header or the cookie.

    The header wins when both are present.
    """
    if authorization:
        scheme, _, credentials = authorization.partition(" ")
        if scheme.lower() == "bearer" and credentials.strip():
            return credentials.strip()
    return auth_token

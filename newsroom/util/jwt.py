"""Session token encoding (PyJWT)."""

from datetime import datetime, timedelta, timezone

import jwt
from pydantic import BaseModel

from newsroom.config import AuthSettings


class TokenPayload(BaseModel):
    """Decoded session token.

    Only the user id is trusted; the role is always read from storage.
    """

    user_id: str
    iat: datetime
    exp: datetime


class JWTError(Exception):
    """Token is malformed, tampered with or expired."""


def create_token(user_id: str, settings: AuthSettings) -> str:
    """Sign a token for ``user_id`` valid for ``jwt_expiry_days``."""
    issued_at = datetime.now(timezone.utc)
    payload = {
        "user_id": user_id,
        "iat": issued_at,
        "exp": issued_at + timedelta(days=settings.jwt_expiry_days),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str, settings: AuthSettings) -> TokenPayload:
    """Check the signature and expiry and return the payload.

    Raises:
        JWTError: If the token is invalid or expired
    """
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["user_id", "exp"]},
        )
    except jwt.ExpiredSignatureError as e:
        raise JWTError("Token has expired") from e
    except jwt.InvalidTokenError as e:
        raise JWTError("Invalid token") from e
    return TokenPayload(**payload)

"""User-visible notifications raised by a comment thread."""

from enum import Enum
from typing import Protocol

import logfire
from pydantic import BaseModel

from newsroom.adapter.error import (
    ApiAuthorizationError,
    ApiError,
    ApiNotFoundError,
    ApiValidationError,
)


class NoticeKind(str, Enum):
    """Why an action did not go through."""

    AUTHORIZATION = "authorization"
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    TRANSIENT = "transient"


class Notice(BaseModel):
    """Message shown to the viewer after a failed action."""

    kind: NoticeKind
    action: str
    message: str
    target_id: str | None = None

    @classmethod
    def from_error(
        cls, action: str, error: ApiError, target_id: str | None = None
    ) -> "Notice":
        if isinstance(error, ApiAuthorizationError):
            kind = NoticeKind.AUTHORIZATION
        elif isinstance(error, ApiValidationError):
            kind = NoticeKind.VALIDATION
        elif isinstance(error, ApiNotFoundError):
            kind = NoticeKind.NOT_FOUND
        else:
            kind = NoticeKind.TRANSIENT
        return cls(kind=kind, action=action, message=error.message, target_id=target_id)


class Notifier(Protocol):
    def notify(self, notice: Notice) -> None: ...


class LogfireNotifier:
    """Notifier that records notices as logfire warnings."""

    def notify(self, notice: Notice) -> None:
        logfire.warn(
            "Comment action failed: {message}",
            message=notice.message,
            kind=notice.kind.value,
            action=notice.action,
            target_id=notice.target_id,
        )

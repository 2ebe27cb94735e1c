"""Client-side comment thread."""

from .api import CommentApi
from .notifier import LogfireNotifier, Notice, NoticeKind, Notifier
from .thread import Action, CommentThread

__all__ = [
    "Action",
    "CommentApi",
    "CommentThread",
    "LogfireNotifier",
    "Notice",
    "NoticeKind",
    "Notifier",
]

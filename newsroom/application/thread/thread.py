"""Client-side state of one post's comment thread."""

from collections.abc import Awaitable, Callable
from enum import Enum
from typing import TypeVar

import logfire

from newsroom.adapter.error import ApiError
from newsroom.domain.permission import Identity, Permission, PermissionResolver
from newsroom.domain.tree import (
    MAX_DEPTH,
    CommentNode,
    Forest,
    append_root,
    can_reply,
    find_node,
    insert_reply,
    node_level,
    remove_node,
    update_node,
)
from newsroom.domain.value import CommentId, PostId

from .api import CommentApi
from .notifier import LogfireNotifier, Notice, NoticeKind, Notifier

T = TypeVar("T")


class Action(str, Enum):
    """Interactive controls of a thread."""

    CREATE = "create"
    REPLY = "reply"
    EDIT = "edit"
    DELETE = "delete"
    REFRESH = "refresh"


Control = tuple[Action, CommentId | None]


class CommentThread:
    """Comment forest of one post as seen by one viewer.

    Every action checks permissions and input locally before talking to the
    API, and changes the forest only after the API confirms. Each control
    (an action on a given comment) runs at most one request at a time; a
    second trigger while it is busy is ignored. Failures are reported to the
    notifier and leave the forest as it was.

    After ``close()`` the thread is no longer live: responses that arrive
    later are dropped without touching the forest.
    """

    def __init__(
        self,
        post_id: PostId,
        slug: str,
        identity: Identity,
        api: CommentApi,
        notifier: Notifier | None = None,
        forest: Forest = (),
        max_depth: int = MAX_DEPTH,
        max_length: int = 10000,
    ) -> None:
        """Initialize comment thread.

        Args:
            post_id: Post the comments belong to
            slug: Post slug, used to refetch the forest
            identity: Viewer identity as resolved by the server
            api: Comment API client
            notifier: Receives failure notices (defaults to logfire)
            forest: Initial forest, usually from the post page response
            max_depth: Maximum thread depth counting the root as 1
            max_length: Maximum comment length in characters
        """
        self.post_id = post_id
        self.slug = slug
        self.identity = identity
        self.api = api
        self.notifier = notifier or LogfireNotifier()
        self.max_depth = max_depth
        self.max_length = max_length
        self.permissions = PermissionResolver(identity)
        self._forest = forest
        self._in_flight: set[Control] = set()
        self._live = True

    @property
    def forest(self) -> Forest:
        return self._forest

    @property
    def live(self) -> bool:
        return self._live

    def close(self) -> None:
        """Stop applying results; pending requests finish but are ignored."""
        self._live = False
        logfire.debug(
            "Comment thread closed",
            post_id=str(self.post_id),
            pending=len(self._in_flight),
        )

    # Control state

    def is_busy(self, action: Action, target_id: CommentId | None = None) -> bool:
        return (action, target_id) in self._in_flight

    def can_comment(self) -> bool:
        return self.permissions.can(Permission.CREATE_COMMENTS)

    def can_reply_to(self, comment_id: CommentId) -> bool:
        """Whether the reply control should be offered under a comment."""
        if not self.can_comment():
            return False
        level = node_level(self._forest, comment_id)
        return level is not None and can_reply(level, self.max_depth)

    def can_edit(self, comment_id: CommentId) -> bool:
        node = find_node(self._forest, comment_id)
        return node is not None and self.permissions.can_edit_comment(node.author_id)

    def can_delete(self, comment_id: CommentId) -> bool:
        node = find_node(self._forest, comment_id)
        return node is not None and self.permissions.can_delete_comment(
            node.author_id
        )

    # Actions

    async def create_root(self, content: str) -> CommentNode | None:
        """Post a new top-level comment.

        Returns:
            The created comment, or None if nothing was applied
        """
        control: Control = (Action.CREATE, None)
        if self._busy(control):
            return None
        if not self.can_comment():
            self._reject(control, NoticeKind.AUTHORIZATION, "Sign in to comment")
            return None
        text = self._clean(control, content)
        if text is None:
            return None

        created = await self._run(
            control, lambda: self.api.create_comment(self.post_id, text)
        )
        if created is not None:
            self._forest = append_root(self._forest, created)
        return created

    async def reply(self, parent_id: CommentId, content: str) -> CommentNode | None:
        """Reply to a comment.

        Returns:
            The created reply, or None if nothing was applied
        """
        control: Control = (Action.REPLY, parent_id)
        if self._busy(control):
            return None
        if not self.can_comment():
            self._reject(control, NoticeKind.AUTHORIZATION, "Sign in to reply")
            return None
        level = node_level(self._forest, parent_id)
        if level is None:
            self._reject(control, NoticeKind.NOT_FOUND, "Comment no longer exists")
            return None
        if not can_reply(level, self.max_depth):
            self._reject(
                control,
                NoticeKind.VALIDATION,
                f"Replies are limited to a depth of {self.max_depth}",
            )
            return None
        text = self._clean(control, content)
        if text is None:
            return None

        created = await self._run(
            control, lambda: self.api.create_comment(self.post_id, text, parent_id)
        )
        if created is None:
            return None
        forest = insert_reply(self._forest, parent_id, created)
        if forest is self._forest:
            # Parent was removed while the request was in flight
            self._reject(control, NoticeKind.NOT_FOUND, "Comment no longer exists")
            return None
        self._forest = forest
        return created

    async def edit(self, comment_id: CommentId, content: str) -> CommentNode | None:
        """Change a comment's content.

        Returns:
            The comment as stored by the server, or None if nothing was applied
        """
        control: Control = (Action.EDIT, comment_id)
        if self._busy(control):
            return None
        node = find_node(self._forest, comment_id)
        if node is None:
            self._reject(control, NoticeKind.NOT_FOUND, "Comment no longer exists")
            return None
        if not self.permissions.can_edit_comment(node.author_id):
            self._reject(
                control,
                NoticeKind.AUTHORIZATION,
                "You are not allowed to edit this comment",
            )
            return None
        text = self._clean(control, content)
        if text is None:
            return None

        updated = await self._run(
            control, lambda: self.api.update_comment(comment_id, text)
        )
        if updated is None:
            return None
        forest = update_node(
            self._forest,
            comment_id,
            {"content": updated.content, "updated_at": updated.updated_at},
        )
        if forest is self._forest:
            self._reject(control, NoticeKind.NOT_FOUND, "Comment no longer exists")
            return None
        self._forest = forest
        return updated

    async def delete(self, comment_id: CommentId) -> bool:
        """Delete a comment with all of its replies.

        Returns:
            True if the subtree was removed from the forest
        """
        control: Control = (Action.DELETE, comment_id)
        if self._busy(control):
            return False
        node = find_node(self._forest, comment_id)
        if node is None:
            self._reject(control, NoticeKind.NOT_FOUND, "Comment no longer exists")
            return False
        if not self.permissions.can_delete_comment(node.author_id):
            self._reject(
                control,
                NoticeKind.AUTHORIZATION,
                "You are not allowed to delete this comment",
            )
            return False

        deleted = await self._run(control, lambda: self.api.delete_comment(comment_id))
        if deleted is None:
            return False

        forest = remove_node(self._forest, comment_id)
        for other_id in deleted:
            forest = remove_node(forest, other_id)
        self._forest = forest
        return True

    async def refresh(self) -> bool:
        """Replace the forest with the server's current copy."""
        control: Control = (Action.REFRESH, None)
        if self._busy(control):
            return False

        forest = await self._run(control, lambda: self.api.get_comments(self.slug))
        if forest is None:
            return False
        self._forest = tuple(forest)
        return True

    # Helpers

    def _busy(self, control: Control) -> bool:
        if control in self._in_flight:
            logfire.debug(
                "Ignoring trigger on busy control",
                action=control[0].value,
                target_id=str(control[1]) if control[1] else None,
            )
            return True
        return False

    def _clean(self, control: Control, content: str) -> str | None:
        """Stripped content, or None after notifying why it is unusable."""
        text = content.strip()
        if not text:
            self._reject(control, NoticeKind.VALIDATION, "Comment cannot be empty")
            return None
        if len(text) > self.max_length:
            self._reject(
                control,
                NoticeKind.VALIDATION,
                f"Comment exceeds {self.max_length} characters",
            )
            return None
        return text

    def _reject(self, control: Control, kind: NoticeKind, message: str) -> None:
        action, target_id = control
        self.notifier.notify(
            Notice(
                kind=kind,
                action=action.value,
                message=message,
                target_id=str(target_id) if target_id else None,
            )
        )

    async def _run(
        self, control: Control, call: Callable[[], Awaitable[T]]
    ) -> T | None:
        """Run ``call`` with the control marked busy.

        Returns:
            The call's result, or None if it failed or the thread was closed
            while it ran
        """
        action, target_id = control
        self._in_flight.add(control)
        try:
            result = await call()
        except ApiError as e:
            if not self._live:
                logfire.info(
                    "Dropping failure for closed thread",
                    action=action.value,
                    error=e.message,
                )
                return None
            self.notifier.notify(
                Notice.from_error(
                    action.value, e, str(target_id) if target_id else None
                )
            )
            return None
        finally:
            self._in_flight.discard(control)

        if not self._live:
            logfire.info(
                "Dropping response for closed thread",
                action=action.value,
                post_id=str(self.post_id),
            )
            return None
        return result

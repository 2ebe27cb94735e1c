"""Nested comment threads.

A thread is a forest: a tuple of root ``CommentNode`` objects, each owning its
replies as a tuple. Nodes keep no reference to their parent; a node's level
is the number of hops from its root and is derived while traversing.

All functions here are pure. They return a new forest and leave the input
untouched; subtrees that are not on the path to the change are shared with
the input. When the target id is absent the input forest itself is returned,
so callers can test ``result is forest`` to see whether anything changed.
"""

from collections import defaultdict
from collections.abc import Callable, Iterable, Iterator, Mapping
from datetime import datetime
from typing import Any, Optional

from pydantic import Field

from newsroom.domain.model import Comment, User
from newsroom.domain.model.common import DomainModel
from newsroom.domain.value import CommentId, PostId, UserId

# Root comment plus three levels of replies
MAX_DEPTH = 4


class AuthorSummary(DomainModel):
    """Public fields of a comment author."""

    id: UserId
    name: Optional[str] = None
    email: str
    avatar: Optional[str] = None

    @classmethod
    def from_user(cls, user: User) -> "AuthorSummary":
        return cls(id=user.id, name=user.name, email=user.email, avatar=user.avatar)


class CommentNode(DomainModel):
    """A comment together with its replies."""

    id: CommentId
    post_id: PostId
    author_id: UserId
    author: Optional[AuthorSummary] = None
    content: str
    parent_id: Optional[CommentId] = None
    created_at: datetime
    updated_at: datetime
    replies: tuple["CommentNode", ...] = Field(default_factory=tuple)

    @classmethod
    def from_comment(
        cls, comment: Comment, author: Optional[AuthorSummary] = None
    ) -> "CommentNode":
        return cls(
            id=comment.id,
            post_id=comment.post_id,
            author_id=comment.author_id,
            author=author,
            content=comment.content,
            parent_id=comment.parent_id,
            created_at=comment.created_at,
            updated_at=comment.updated_at,
        )


Forest = tuple[CommentNode, ...]


def _rewrite(
    forest: Forest,
    target_id: CommentId,
    replace: Callable[[CommentNode], Forest],
) -> Forest:
    """Swap the target node for ``replace(node)``, copying only its ancestors."""
    for index, node in enumerate(forest):
        if node.id == target_id:
            return forest[:index] + replace(node) + forest[index + 1 :]
        replies = _rewrite(node.replies, target_id, replace)
        if replies is not node.replies:
            updated = node.model_copy(update={"replies": replies})
            return forest[:index] + (updated,) + forest[index + 1 :]
    return forest


def update_node(
    forest: Forest, target_id: CommentId, patch: Mapping[str, Any]
) -> Forest:
    """Replace fields of the node with ``target_id``.

    The node keeps its replies unless ``patch`` supplies ``replies``. Keys
    that are not node fields are ignored.
    """
    changes = {
        key: value for key, value in patch.items() if key in CommentNode.model_fields
    }
    if "replies" in changes:
        changes["replies"] = tuple(changes["replies"])

    def _apply(node: CommentNode) -> Forest:
        return (node.model_copy(update=changes),)

    return _rewrite(forest, target_id, _apply)


def remove_node(forest: Forest, target_id: CommentId) -> Forest:
    """Drop the node with ``target_id`` together with all of its replies."""
    return _rewrite(forest, target_id, lambda node: ())


def insert_reply(
    forest: Forest, parent_id: CommentId, reply: CommentNode
) -> Forest:
    """Append ``reply`` as the last reply of ``parent_id``.

    Unchanged when the parent is missing or ``reply`` is already present.
    """
    if find_node(forest, reply.id) is not None:
        return forest

    def _append(parent: CommentNode) -> Forest:
        return (parent.model_copy(update={"replies": parent.replies + (reply,)}),)

    return _rewrite(forest, parent_id, _append)


def append_root(forest: Forest, node: CommentNode) -> Forest:
    """Add ``node`` after the existing roots."""
    if find_node(forest, node.id) is not None:
        return forest
    return forest + (node,)


def build_forest(nodes: Iterable[CommentNode]) -> Forest:
    """Assemble flat nodes into a forest.

    Sibling order follows the input order. Nodes whose parent is not in the
    input become roots.
    """
    ordered = list(nodes)
    known = {node.id for node in ordered}
    children: dict[CommentId, list[CommentNode]] = defaultdict(list)
    roots: list[CommentNode] = []

    for node in ordered:
        if node.parent_id is not None and node.parent_id in known:
            children[node.parent_id].append(node)
        else:
            roots.append(node)

    def _assemble(node: CommentNode) -> CommentNode:
        replies = tuple(_assemble(child) for child in children.get(node.id, ()))
        return node.model_copy(update={"replies": replies})

    return tuple(_assemble(root) for root in roots)


def find_node(forest: Forest, target_id: CommentId) -> Optional[CommentNode]:
    """Return the node with ``target_id`` or None."""
    for _, node in walk(forest):
        if node.id == target_id:
            return node
    return None


def node_level(forest: Forest, target_id: CommentId) -> Optional[int]:
    """Number of ancestors of ``target_id`` (roots are level 0), or None."""
    for level, node in walk(forest):
        if node.id == target_id:
            return level
    return None


def walk(forest: Forest, level: int = 0) -> Iterator[tuple[int, CommentNode]]:
    """Yield ``(level, node)`` pairs depth-first, parents before replies."""
    for node in forest:
        yield level, node
        yield from walk(node.replies, level + 1)


def count_nodes(forest: Forest) -> int:
    return sum(1 for _ in walk(forest))


def subtree_ids(node: CommentNode) -> list[CommentId]:
    """Ids of ``node`` and every reply beneath it."""
    return [descendant.id for _, descendant in walk((node,))]


def can_reply(parent_level: int, max_depth: int = MAX_DEPTH) -> bool:
    """Whether a reply under a node at ``parent_level`` stays within depth.

    Depth counts the root as 1, so with ``max_depth=4`` replies are allowed
    under levels 0, 1 and 2.
    """
    return parent_level + 2 <= max_depth

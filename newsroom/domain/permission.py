"""Role-based permissions.

Every role maps to a fixed set of permissions. Permissions ending in ``_OWN_``
variants additionally require the acting user to be the resource author;
the ``_ALL_`` variants skip the ownership check. An action on a resource is
permitted when ``can(ALL) or (can(OWN) and owner)``.

The same checks serve two purposes: clients use them to decide which
controls to render, and every mutating use case runs them again against
identity and ownership facts loaded from storage.
"""

from enum import Enum
from typing import Optional

from pydantic import model_validator

from newsroom.domain.error import NotAuthenticatedError, NotAuthorizedError
from newsroom.domain.model import User
from newsroom.domain.value import UserId, UserRole
from newsroom.domain.value.common import ValueObject


class Permission(str, Enum):
    """Capabilities that roles can grant."""

    VIEW_USERS = "VIEW_USERS"
    MANAGE_USERS = "MANAGE_USERS"
    CREATE_POSTS = "CREATE_POSTS"
    EDIT_OWN_POSTS = "EDIT_OWN_POSTS"
    EDIT_ALL_POSTS = "EDIT_ALL_POSTS"
    DELETE_OWN_POSTS = "DELETE_OWN_POSTS"
    DELETE_ALL_POSTS = "DELETE_ALL_POSTS"
    CREATE_COMMENTS = "CREATE_COMMENTS"
    EDIT_OWN_COMMENTS = "EDIT_OWN_COMMENTS"
    EDIT_ALL_COMMENTS = "EDIT_ALL_COMMENTS"
    DELETE_OWN_COMMENTS = "DELETE_OWN_COMMENTS"
    DELETE_ALL_COMMENTS = "DELETE_ALL_COMMENTS"


_USER_PERMISSIONS = frozenset(
    {
        Permission.CREATE_POSTS,
        Permission.CREATE_COMMENTS,
        Permission.EDIT_OWN_COMMENTS,
        Permission.DELETE_OWN_COMMENTS,
    }
)

ROLE_PERMISSIONS: dict[UserRole, frozenset[Permission]] = {
    UserRole.USER: _USER_PERMISSIONS,
    UserRole.EDITOR: _USER_PERMISSIONS
    | {Permission.EDIT_OWN_POSTS, Permission.DELETE_OWN_POSTS},
    UserRole.ADMIN: frozenset(Permission),
}


def _check_role_table() -> None:
    """Fail at import time if a role has no entry in the table."""
    missing = set(UserRole) - set(ROLE_PERMISSIONS)
    if missing:
        names = ", ".join(sorted(role.value for role in missing))
        raise RuntimeError(f"Roles without a permission set: {names}")
    if ROLE_PERMISSIONS[UserRole.ADMIN] != frozenset(Permission):
        raise RuntimeError("ADMIN must hold every permission")


_check_role_table()


class Identity(ValueObject):
    """Read-only view of who is acting.

    Built server-side from the verified token and the stored user record,
    never from client-supplied role data.
    """

    user_id: Optional[UserId] = None
    role: Optional[UserRole] = None
    authenticated: bool = False

    @model_validator(mode="after")
    def check_authenticated_fields(self) -> "Identity":
        if self.authenticated and (self.user_id is None or self.role is None):
            raise ValueError("Authenticated identity needs a user id and role")
        return self

    @classmethod
    def anonymous(cls) -> "Identity":
        return cls()

    @classmethod
    def for_user(cls, user: User) -> "Identity":
        return cls(user_id=user.id, role=user.role, authenticated=True)


def can(identity: Identity, permission: Permission) -> bool:
    """Whether the identity's role grants ``permission``.

    Anonymous identities are refused everything.
    """
    if not identity.authenticated or identity.role is None:
        return False
    return permission in ROLE_PERMISSIONS[identity.role]


def can_own(identity: Identity, permission: Permission, owner_id: UserId) -> bool:
    """Whether ``permission`` is granted and the identity owns the resource."""
    return (
        can(identity, permission)
        and identity.user_id is not None
        and identity.user_id == owner_id
    )


def is_permitted(
    identity: Identity,
    all_permission: Permission,
    own_permission: Permission,
    owner_id: UserId,
) -> bool:
    """Combine an ALL permission with its ownership-gated OWN counterpart."""
    return can(identity, all_permission) or can_own(identity, own_permission, owner_id)


def ensure_can(identity: Identity, permission: Permission, action: str) -> None:
    """Raise unless ``permission`` is granted.

    Raises:
        NotAuthenticatedError: If the identity is anonymous
        NotAuthorizedError: If the role lacks the permission
    """
    if not identity.authenticated:
        raise NotAuthenticatedError(action)
    if not can(identity, permission):
        raise NotAuthorizedError(
            "permission", permission.value, str(identity.user_id), action=action
        )


def ensure_permitted(
    identity: Identity,
    all_permission: Permission,
    own_permission: Permission,
    owner_id: UserId,
    resource: str,
    resource_id: str,
    action: str,
) -> None:
    """Raise unless ``is_permitted`` holds for the resource.

    Args:
        identity: Acting identity
        all_permission: Permission that bypasses ownership
        own_permission: Permission that requires ownership
        owner_id: Author of the resource, as stored
        resource: Resource kind for the error message
        resource_id: Resource identifier for the error message
        action: Verb for the error message ("edit", "delete")

    Raises:
        NotAuthenticatedError: If the identity is anonymous
        NotAuthorizedError: If neither permission applies
    """
    if not identity.authenticated:
        raise NotAuthenticatedError(f"{action} {resource}")
    if not is_permitted(identity, all_permission, own_permission, owner_id):
        raise NotAuthorizedError(
            resource, resource_id, str(identity.user_id), action=action
        )


class PermissionResolver:
    """Permission checks bound to one identity.

    Clients use this to decide which controls to show.
    """

    def __init__(self, identity: Identity) -> None:
        self.identity = identity

    def can(self, permission: Permission) -> bool:
        return can(self.identity, permission)

    def can_own(self, permission: Permission, owner_id: UserId) -> bool:
        return can_own(self.identity, permission, owner_id)

    def can_edit_comment(self, author_id: UserId) -> bool:
        return is_permitted(
            self.identity,
            Permission.EDIT_ALL_COMMENTS,
            Permission.EDIT_OWN_COMMENTS,
            author_id,
        )

    def can_delete_comment(self, author_id: UserId) -> bool:
        return is_permitted(
            self.identity,
            Permission.DELETE_ALL_COMMENTS,
            Permission.DELETE_OWN_COMMENTS,
            author_id,
        )

    def can_edit_post(self, author_id: UserId) -> bool:
        return is_permitted(
            self.identity,
            Permission.EDIT_ALL_POSTS,
            Permission.EDIT_OWN_POSTS,
            author_id,
        )

    def can_delete_post(self, author_id: UserId) -> bool:
        return is_permitted(
            self.identity,
            Permission.DELETE_ALL_POSTS,
            Permission.DELETE_OWN_POSTS,
            author_id,
        )

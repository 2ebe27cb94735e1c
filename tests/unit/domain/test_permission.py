"""Unit tests for role permissions."""

from uuid import uuid4

import pytest

from newsroom.domain.error import NotAuthenticatedError, NotAuthorizedError
from newsroom.domain.permission import (
    ROLE_PERMISSIONS,
    Identity,
    Permission,
    PermissionResolver,
    can,
    can_own,
    ensure_can,
    ensure_permitted,
    is_permitted,
)
from newsroom.domain.value import UserId, UserRole
from tests.conftest import identity_of, make_user


class TestRoleTable:
    """Tests for the role to permission table."""

    def test_every_role_has_an_entry(self):
        assert set(ROLE_PERMISSIONS) == set(UserRole)

    def test_admin_holds_every_permission(self):
        assert ROLE_PERMISSIONS[UserRole.ADMIN] == frozenset(Permission)

    def test_user_permissions(self):
        assert ROLE_PERMISSIONS[UserRole.USER] == {
            Permission.CREATE_POSTS,
            Permission.CREATE_COMMENTS,
            Permission.EDIT_OWN_COMMENTS,
            Permission.DELETE_OWN_COMMENTS,
        }

    def test_editor_extends_user_with_own_post_rights(self):
        editor = ROLE_PERMISSIONS[UserRole.EDITOR]
        assert ROLE_PERMISSIONS[UserRole.USER] < editor
        assert Permission.EDIT_OWN_POSTS in editor
        assert Permission.DELETE_OWN_POSTS in editor
        assert Permission.EDIT_ALL_POSTS not in editor
        assert Permission.MANAGE_USERS not in editor


class TestCan:
    """Tests for can and can_own."""

    def test_anonymous_is_refused_everything(self):
        anonymous = Identity.anonymous()
        assert not any(can(anonymous, permission) for permission in Permission)

    @pytest.mark.parametrize("role", list(UserRole))
    def test_can_follows_role_table(self, role):
        identity = identity_of(make_user(role=role))
        for permission in Permission:
            assert can(identity, permission) == (permission in ROLE_PERMISSIONS[role])

    def test_can_own_requires_ownership(self):
        user = make_user()
        identity = identity_of(user)

        assert can_own(identity, Permission.EDIT_OWN_COMMENTS, user.id)
        assert not can_own(identity, Permission.EDIT_OWN_COMMENTS, UserId(uuid4()))

    def test_can_own_requires_permission(self):
        user = make_user()
        assert not can_own(identity_of(user), Permission.EDIT_OWN_POSTS, user.id)

    def test_all_permission_ignores_ownership(self):
        admin = identity_of(make_user(role=UserRole.ADMIN))
        assert is_permitted(
            admin,
            Permission.EDIT_ALL_COMMENTS,
            Permission.EDIT_OWN_COMMENTS,
            UserId(uuid4()),
        )

    def test_authenticated_identity_needs_role(self):
        with pytest.raises(ValueError):
            Identity(user_id=UserId(uuid4()), authenticated=True)


class TestEnsure:
    """Tests for the raising checks used by use cases."""

    def test_ensure_can_anonymous_raises_not_authenticated(self):
        with pytest.raises(NotAuthenticatedError):
            ensure_can(Identity.anonymous(), Permission.CREATE_COMMENTS, "comment")

    def test_ensure_can_missing_permission_raises_not_authorized(self):
        identity = identity_of(make_user())
        with pytest.raises(NotAuthorizedError):
            ensure_can(identity, Permission.VIEW_USERS, "view users")

    def test_ensure_permitted_other_users_comment(self):
        """A USER may not edit someone else's comment."""
        identity = identity_of(make_user())
        with pytest.raises(NotAuthorizedError) as exc_info:
            ensure_permitted(
                identity,
                Permission.EDIT_ALL_COMMENTS,
                Permission.EDIT_OWN_COMMENTS,
                UserId(uuid4()),
                resource="comment",
                resource_id="c1",
                action="edit",
            )
        assert exc_info.value.action == "edit"


class TestPermissionResolver:
    """Tests for the per-identity resolver."""

    def test_user_controls_on_own_and_other_comments(self):
        user = make_user()
        resolver = PermissionResolver(identity_of(user))
        other = UserId(uuid4())

        assert resolver.can_edit_comment(user.id)
        assert resolver.can_delete_comment(user.id)
        assert not resolver.can_edit_comment(other)
        assert not resolver.can_delete_comment(other)

    def test_user_cannot_edit_own_post(self):
        user = make_user()
        resolver = PermissionResolver(identity_of(user))
        assert not resolver.can_edit_post(user.id)

    def test_editor_manages_only_own_posts(self):
        editor = make_user(role=UserRole.EDITOR)
        resolver = PermissionResolver(identity_of(editor))

        assert resolver.can_edit_post(editor.id)
        assert resolver.can_delete_post(editor.id)
        assert not resolver.can_edit_post(UserId(uuid4()))

    def test_admin_controls_everything(self):
        resolver = PermissionResolver(identity_of(make_user(role=UserRole.ADMIN)))
        someone = UserId(uuid4())

        assert resolver.can(Permission.MANAGE_USERS)
        assert resolver.can_edit_comment(someone)
        assert resolver.can_delete_comment(someone)
        assert resolver.can_edit_post(someone)
        assert resolver.can_delete_post(someone)

    def test_anonymous_sees_no_controls(self):
        resolver = PermissionResolver(Identity.anonymous())
        someone = UserId(uuid4())

        assert not resolver.can(Permission.CREATE_COMMENTS)
        assert not resolver.can_edit_comment(someone)
        assert not resolver.can_delete_post(someone)

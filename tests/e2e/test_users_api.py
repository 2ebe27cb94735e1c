"""End-to-end tests for user administration endpoints."""

import pytest
from fastapi.testclient import TestClient

from newsroom.interface.api.app import create_app
from tests.di import build_test_container


@pytest.fixture
def client():
    """Create test client backed by in-memory repositories."""
    app_instance = create_app(build_test_container())
    with TestClient(app_instance) as test_client:
        yield test_client


def _register(client, email, name=None):
    body = {"email": email}
    if name:
        body["name"] = name
    response = client.post("/auth/register", json=body)
    assert response.status_code == 201
    client.cookies.clear()
    data = response.json()
    return data["user"]["id"], {"Authorization": f"Bearer {data['token']}"}


class TestUserEndpoints:
    """End-to-end tests for /users."""

    def test_admin_lists_and_searches_users(self, client):
        _, admin = _register(client, "admin@example.com", "Ada")
        _register(client, "zed@example.com", "Zed")
        _register(client, "mia@example.com", "Mia")

        everyone = client.get("/users", params={"sort": "name"}, headers=admin).json()
        found = client.get("/users", params={"search": "MIA"}, headers=admin).json()

        assert [u["name"] for u in everyone["users"]] == ["Ada", "Mia", "Zed"]
        assert everyone["total"] == 3
        assert [u["email"] for u in found["users"]] == ["mia@example.com"]

    def test_user_cannot_list_users(self, client):
        _register(client, "admin@example.com")
        _, user = _register(client, "user@example.com")

        assert client.get("/users", headers=user).status_code == 403
        assert client.get("/users").status_code == 401

    def test_admin_promotes_user_and_role_applies_immediately(self, client):
        # Arrange
        _, admin = _register(client, "admin@example.com")
        user_id, user = _register(client, "writer@example.com")

        # Act
        response = client.patch(
            f"/users/{user_id}", json={"role": "EDITOR"}, headers=admin
        )

        # Assert
        assert response.status_code == 200
        assert response.json()["role"] == "EDITOR"
        me = client.get("/auth/me", headers=user).json()
        assert "EDIT_OWN_POSTS" in me["permissions"]

    def test_user_cannot_change_own_role(self, client):
        _register(client, "admin@example.com")
        user_id, user = _register(client, "user@example.com")

        response = client.patch(f"/users/{user_id}", json={"role": "ADMIN"}, headers=user)

        assert response.status_code == 403

    def test_user_edits_own_profile(self, client):
        _register(client, "admin@example.com")
        user_id, user = _register(client, "user@example.com")

        response = client.patch(
            f"/users/{user_id}", json={"name": "New Name"}, headers=user
        )

        assert response.status_code == 200
        assert response.json()["name"] == "New Name"

    def test_email_conflict(self, client):
        _, admin = _register(client, "admin@example.com")
        user_id, _ = _register(client, "user@example.com")

        response = client.patch(
            f"/users/{user_id}", json={"email": "ADMIN@example.com"}, headers=admin
        )

        assert response.status_code == 409

    def test_admin_deletes_user_and_token_becomes_anonymous(self, client):
        _, admin = _register(client, "admin@example.com")
        user_id, user = _register(client, "user@example.com")

        response = client.delete(f"/users/{user_id}", headers=admin)

        assert response.status_code == 200
        assert client.get("/auth/me", headers=user).json()["authenticated"] is False

    def test_admin_cannot_delete_self(self, client):
        admin_id, admin = _register(client, "admin@example.com")

        response = client.delete(f"/users/{admin_id}", headers=admin)

        assert response.status_code == 403

"""End-to-end tests for post and tag endpoints."""

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


def _register(client, email):
    response = client.post("/auth/register", json={"email": email})
    assert response.status_code == 201
    client.cookies.clear()
    data = response.json()
    return data["user"]["id"], {"Authorization": f"Bearer {data['token']}"}


def _setup_roles(client):
    """Admin, editor and plain user headers."""
    _, admin = _register(client, "admin@example.com")
    editor_id, editor = _register(client, "editor@example.com")
    _, user = _register(client, "user@example.com")
    response = client.patch(
        f"/users/{editor_id}", json={"role": "EDITOR"}, headers=admin
    )
    assert response.status_code == 200
    return admin, editor, user


def _create(client, headers, title, **fields):
    body = {"title": title, "content": "Content long enough to publish.", **fields}
    response = client.post("/posts", json=body, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


class TestPostEndpoints:
    """End-to-end tests for /posts."""

    def test_create_requires_authentication(self, client):
        response = client.post(
            "/posts", json={"title": "Hello there", "content": "Long enough body"}
        )

        assert response.status_code == 401

    def test_public_listing_search_tags_sort(self, client):
        # Arrange
        admin, editor, _ = _setup_roles(client)
        older = _create(
            client, editor, "Budget hearing", status="PUBLISHED", tag_names=["Finance"]
        )
        newer = _create(
            client, admin, "Policy budget", status="PUBLISHED", tag_names=["policy"]
        )
        _create(client, editor, "Budget draft", tag_names=["finance"])
        _create(client, editor, "Budget sports", status="PUBLISHED", tag_names=["sports"])

        # Act
        response = client.get(
            "/posts/list",
            params={"search": "budget", "tags": "finance,policy", "sort": "oldest"},
        )

        # Assert
        assert response.status_code == 200
        data = response.json()
        assert [p["id"] for p in data["posts"]] == [older["id"], newer["id"]]
        assert data["total_pages"] == 1
        assert data["page_size"] == 12

    def test_listing_page_size_limit(self, client):
        response = client.get("/posts/list", params={"page_size": 13})

        assert response.status_code == 400

    def test_listing_page_out_of_range_is_empty(self, client):
        response = client.get("/posts/list", params={"page": 5})

        assert response.status_code == 200
        assert response.json()["posts"] == []

    def test_draft_visibility(self, client):
        admin, editor, user = _setup_roles(client)
        draft = _create(client, editor, "Unpublished piece")
        url = f"/posts/{draft['slug']}"

        assert client.get(url).status_code == 404
        assert client.get(url, headers=user).status_code == 404
        assert client.get(url, headers=editor).status_code == 200
        assert client.get(url, headers=admin).status_code == 200

    def test_get_post_reports_controls(self, client):
        _, editor, user = _setup_roles(client)
        post = _create(client, editor, "Visible piece", status="PUBLISHED")

        as_editor = client.get(f"/posts/{post['slug']}", headers=editor).json()
        as_user = client.get(f"/posts/{post['slug']}", headers=user).json()

        assert as_editor["can_edit"] is True
        assert as_user["can_edit"] is False
        assert as_user["comments"] == []

    def test_patch_only_changes_sent_fields(self, client):
        _, editor, _ = _setup_roles(client)
        post = _create(client, editor, "Original title", excerpt="Summary")

        response = client.patch(
            f"/posts/{post['slug']}",
            json={"title": "Renamed title", "slug": "renamed-title"},
            headers=editor,
        )

        assert response.status_code == 200
        data = response.json()
        assert data["title"] == "Renamed title"
        assert data["slug"] == "renamed-title"
        assert data["excerpt"] == "Summary"
        assert client.get("/posts/renamed-title", headers=editor).status_code == 200

    def test_user_cannot_edit_or_delete_post(self, client):
        _, _, user = _setup_roles(client)
        post = _create(client, user, "User written post", status="PUBLISHED")
        url = f"/posts/{post['slug']}"

        assert client.patch(url, json={"title": "Nope"}, headers=user).status_code == 403
        assert client.delete(url, headers=user).status_code == 403

    def test_reserved_slug_conflicts(self, client):
        _, editor, _ = _setup_roles(client)

        response = client.post(
            "/posts",
            json={"title": "List", "content": "Content long enough.", "slug": "list"},
            headers=editor,
        )

        assert response.status_code == 409

    def test_invalid_slug_is_bad_request(self, client):
        _, editor, _ = _setup_roles(client)

        response = client.post(
            "/posts",
            json={"title": "Bad slug", "content": "Content long enough.", "slug": "Bad Slug"},
            headers=editor,
        )

        assert response.status_code == 400

    def test_delete_post(self, client):
        admin, editor, _ = _setup_roles(client)
        post = _create(client, editor, "Short lived", status="PUBLISHED")

        response = client.delete(f"/posts/{post['slug']}", headers=admin)

        assert response.status_code == 200
        assert client.get(f"/posts/{post['slug']}").status_code == 404

    def test_managed_listing(self, client):
        admin, editor, _ = _setup_roles(client)
        _create(client, editor, "Editor draft")
        _create(client, admin, "Admin draft")

        own = client.get("/posts", headers=editor).json()
        everything = client.get("/posts", headers=admin).json()

        assert [p["title"] for p in own["posts"]] == ["Editor draft"]
        assert everything["total"] == 2
        assert client.get("/posts").status_code == 401


class TestTagEndpoints:
    """End-to-end tests for /tags."""

    def test_tags_created_on_demand_and_listed(self, client):
        _, editor, _ = _setup_roles(client)
        _create(client, editor, "Tagged piece", tag_names=["Policy", "finance"])

        response = client.get("/tags")

        assert response.status_code == 200
        assert [t["name"] for t in response.json()["tags"]] == ["finance", "policy"]


class TestPostListingDetails:
    """Author and comment count on listed posts."""

    def test_listing_shows_author_and_comment_count(self, client):
        # Arrange
        admin, editor, user = _setup_roles(client)
        post = _create(client, editor, "Talked about piece", status="PUBLISHED")
        _create(client, admin, "Ignored piece", status="PUBLISHED")
        root = client.post(
            "/comments", json={"post_id": post["id"], "content": "First"}, headers=user
        ).json()
        client.post(
            "/comments",
            json={"post_id": post["id"], "content": "Reply", "parent_id": root["id"]},
            headers=editor,
        )

        # Act
        listed = client.get("/posts/list").json()["posts"]
        managed = client.get("/posts", headers=editor).json()["posts"]

        # Assert
        by_title = {item["title"]: item for item in listed}
        assert by_title["Talked about piece"]["comment_count"] == 2
        assert by_title["Talked about piece"]["author"]["email"] == "editor@example.com"
        assert by_title["Ignored piece"]["comment_count"] == 0
        assert by_title["Ignored piece"]["author"]["email"] == "admin@example.com"
        assert managed[0]["comment_count"] == 2
        assert post["author"]["email"] == "editor@example.com"

"""Tests for the JSON post endpoints."""

import uuid


class TestCreateEndpoint:
    def test_create_returns_published_post(self, client, editor_auth):
        response = client.post("/api/posts", json={"title": "Hello", "content": "World"}, auth=editor_auth)

        assert response.status_code == 201
        body = response.json()
        assert uuid.UUID(body["id"])
        assert body["status"] == "published"
        assert body["title"] == "Hello"
        assert body["content"] == "World"

    def test_empty_title_is_422_with_field_error(self, client, editor_auth):
        response = client.post("/api/posts", json={"title": "", "content": "World"}, auth=editor_auth)

        assert response.status_code == 422
        body = response.json()
        assert "title" in body["errors"]
        assert "content" not in body["errors"]
        assert client.get("/api/posts").json() == []

    def test_missing_fields_is_422(self, client, editor_auth):
        response = client.post("/api/posts", json={}, auth=editor_auth)

        assert response.status_code == 422
        assert set(response.json()["errors"]) == {"title", "content"}

    def test_wrong_type_is_422_with_field_error(self, client, editor_auth):
        response = client.post("/api/posts", json={"title": 5, "content": "World"}, auth=editor_auth)

        assert response.status_code == 422
        body = response.json()
        assert body["detail"] == "validation failed"
        assert "title" in body["errors"]
        assert client.get("/api/posts").json() == []

    def test_malformed_json_is_422_with_errors(self, client, editor_auth):
        response = client.post(
            "/api/posts",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
            auth=editor_auth,
        )

        assert response.status_code == 422
        assert response.json()["errors"]

    def test_unauthenticated_is_challenged(self, client):
        response = client.post("/api/posts", json={"title": "Hello", "content": "World"})

        assert response.status_code == 401
        assert response.headers["www-authenticate"].startswith("Basic")
        assert client.get("/api/posts").json() == []

    def test_wrong_password_is_challenged(self, client):
        response = client.post(
            "/api/posts", json={"title": "Hello", "content": "World"}, auth=("editor", "nope")
        )

        assert response.status_code == 401
        assert client.get("/api/posts").json() == []

    def test_unset_password_refuses_writes(self, client, monkeypatch):
        from plainpost.dependencies import auth

        monkeypatch.setattr(auth, "EDITOR_PASSWORD", "")
        response = client.post("/api/posts", json={"title": "Hello", "content": "World"}, auth=("editor", ""))

        assert response.status_code == 401


class TestReadEndpoints:
    def test_list_is_public(self, client, create_post):
        create_post("First", "one")
        create_post("Second", "two")

        response = client.get("/api/posts")

        assert response.status_code == 200
        assert {p["title"] for p in response.json()} == {"First", "Second"}

    def test_show_is_public(self, client, create_post):
        post = create_post()

        response = client.get(f"/api/posts/{post['id']}")

        assert response.status_code == 200
        assert response.json()["id"] == post["id"]

    def test_show_unknown_is_404(self, client):
        response = client.get(f"/api/posts/{uuid.uuid4()}")

        assert response.status_code == 404
        assert response.json()["detail"] == "post not found"

    def test_show_malformed_id_is_404(self, client):
        assert client.get("/api/posts/not-a-uuid").status_code == 404


class TestArchiveEndpoint:
    def test_archive_flow(self, client, editor_auth, create_post):
        post = create_post("Hello", "World")

        response = client.patch(f"/api/posts/{post['id']}/archive", auth=editor_auth)

        assert response.status_code == 200
        assert response.json()["status"] == "archived"
        assert post["id"] not in [p["id"] for p in client.get("/api/posts").json()]
        shown = client.get(f"/api/posts/{post['id']}")
        assert shown.status_code == 200
        assert shown.json()["status"] == "archived"

    def test_archive_twice_succeeds(self, client, editor_auth, create_post):
        post = create_post()

        first = client.patch(f"/api/posts/{post['id']}/archive", auth=editor_auth)
        second = client.patch(f"/api/posts/{post['id']}/archive", auth=editor_auth)

        assert first.status_code == 200
        assert second.status_code == 200
        assert second.json()["status"] == "archived"

    def test_archive_unknown_is_404(self, client, editor_auth):
        response = client.patch(f"/api/posts/{uuid.uuid4()}/archive", auth=editor_auth)

        assert response.status_code == 404

    def test_archive_requires_auth(self, client, create_post):
        post = create_post()

        response = client.patch(f"/api/posts/{post['id']}/archive")

        assert response.status_code == 401
        assert client.get(f"/api/posts/{post['id']}").json()["status"] == "published"


class TestUpdateEndpoint:
    def test_update(self, client, editor_auth, create_post):
        post = create_post()

        response = client.patch(
            f"/api/posts/{post['id']}", json={"title": "Hi", "content": "There"}, auth=editor_auth
        )

        assert response.status_code == 200
        assert response.json()["title"] == "Hi"
        assert response.json()["content"] == "There"

    def test_update_validation(self, client, editor_auth, create_post):
        post = create_post()

        response = client.patch(f"/api/posts/{post['id']}", json={"title": "Hi", "content": ""}, auth=editor_auth)

        assert response.status_code == 422
        assert "content" in response.json()["errors"]

    def test_partial_update_keeps_omitted_fields(self, client, editor_auth, create_post):
        post = create_post("Hello", "World")

        response = client.patch(f"/api/posts/{post['id']}", json={"title": "Only title"}, auth=editor_auth)

        assert response.status_code == 200
        assert response.json()["title"] == "Only title"
        assert response.json()["content"] == "World"

    def test_partial_update_content_only(self, client, editor_auth, create_post):
        post = create_post("Hello", "World")

        response = client.patch(f"/api/posts/{post['id']}", json={"content": "New body"}, auth=editor_auth)

        assert response.status_code == 200
        assert response.json()["title"] == "Hello"
        assert response.json()["content"] == "New body"

    def test_explicit_null_is_blank(self, client, editor_auth, create_post):
        post = create_post()

        response = client.patch(f"/api/posts/{post['id']}", json={"title": None}, auth=editor_auth)

        assert response.status_code == 422
        assert "title" in response.json()["errors"]

    def test_update_requires_auth(self, client, create_post):
        post = create_post()

        response = client.patch(f"/api/posts/{post['id']}", json={"title": "Hi", "content": "There"})

        assert response.status_code == 401


class TestAmbientEndpoints:
    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

    def test_request_id_is_generated(self, client):
        response = client.get("/health")

        assert uuid.UUID(response.headers["x-request-id"])

    def test_request_id_is_echoed(self, client):
        response = client.get("/health", headers={"X-Request-ID": "abc-123"})

        assert response.headers["x-request-id"] == "abc-123"

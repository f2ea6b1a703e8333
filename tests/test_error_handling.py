"""Tests for the JSON error envelope and status mapping."""

import pytest
from fastapi.testclient import TestClient

from foodblog.main import EXCEPTION_STATUS_MAP, app, status_for
from foodblog.services.blog_service import BlogService
from foodblog.utils.exceptions import (
    AuthProviderError,
    BadRequestError,
    ForbiddenError,
    InvalidCredentialsError,
    InvalidTokenError,
    NotFoundError,
    UnauthorizedError,
    UpstreamServiceError,
)


def test_status_mapping_follows_class_hierarchy():
    assert status_for(BadRequestError("x")) == 400
    assert status_for(InvalidCredentialsError("x")) == 400
    assert status_for(UpstreamServiceError("x")) == 400
    assert status_for(AuthProviderError("x")) == 400
    assert status_for(UnauthorizedError("x")) == 401
    assert status_for(InvalidTokenError("x")) == 401
    assert status_for(ForbiddenError("x")) == 403
    assert status_for(NotFoundError("x")) == 404
    assert status_for(RuntimeError("x")) == 500
    assert set(EXCEPTION_STATUS_MAP.values()) == {400, 401, 403, 404}


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_missing_bearer_token(client):
    resp = client.get("/api/users/me")
    assert resp.status_code == 401
    assert resp.json() == {"message": "No token provided"}


def test_garbage_bearer_token(client):
    resp = client.get("/api/users/me", headers={"Authorization": "Bearer garbage"})
    assert resp.status_code == 401
    assert resp.json() == {"message": "Invalid token"}


def test_cookie_is_not_accepted_as_access_credential(client, make_user):
    alice = make_user("alice")
    resp = client.get("/api/users/me", headers={"Cookie": f"accessToken={alice.token}"})
    assert resp.status_code == 401


def test_malformed_body_is_400(client):
    resp = client.post("/api/auth/login", json={"email": "alice@example.com"})
    assert resp.status_code == 400
    body = resp.json()
    assert body["message"] == "Invalid request"
    assert body["errors"]


def test_unexpected_error_is_500_with_raw_text(client, monkeypatch):
    async def explode(self, filter, caller):
        raise RuntimeError("database exploded")

    monkeypatch.setattr(BlogService, "list_blogs", explode)
    with TestClient(app, base_url="https://testserver", raise_server_exceptions=False) as raw:
        resp = raw.get("/api/blogs")
    assert resp.status_code == 500
    assert resp.json() == {"message": "Server error", "error": "database exploded"}


@pytest.mark.parametrize(
    "path",
    [
        "/api/blogs/99999999999999999999",
        "/api/blogs/0",
        "/api/likes/99999999999999999999/count",
        "/api/comments/-1",
        "/api/users/2147483648",
    ],
)
def test_out_of_range_ids_are_400(client, make_user, path):
    alice = make_user("alice")
    resp = client.get(path, headers=alice.headers)
    assert resp.status_code == 400
    assert resp.json()["message"] == "Invalid request"


def test_out_of_range_comment_blog_id_is_400(client, make_user):
    alice = make_user("alice")
    resp = client.post(
        "/api/comments",
        json={"blogId": 2**63, "content": "hi"},
        headers=alice.headers,
    )
    assert resp.status_code == 400

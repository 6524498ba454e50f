from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.main import create_app


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["timestamp"]


def test_readiness_checks_the_database(client):
    response = client.get("/health/ready")
    assert response.status_code == 200
    assert response.json() == {"status": "ready"}


def test_security_headers_present(client):
    response = client.get("/health")
    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["X-Frame-Options"] == "DENY"


def test_cors_allows_known_origin_only(client):
    allowed = client.options(
        "/api/progress",
        headers={"Origin": "https://aboutblank.ie", "Access-Control-Request-Method": "POST"},
    )
    assert allowed.status_code == 200
    assert allowed.headers["access-control-allow-origin"] == "https://aboutblank.ie"

    denied = client.options(
        "/api/progress",
        headers={"Origin": "https://evil.example", "Access-Control-Request-Method": "POST"},
    )
    assert "access-control-allow-origin" not in denied.headers


def test_large_responses_are_gzipped(client):
    for i in range(10):
        client.post("/api/community/message", json={"message": f"{i} " + "one day at a time " * 5})

    response = client.get("/api/community/messages", headers={"Accept-Encoding": "gzip"})
    assert response.status_code == 200
    assert response.headers.get("content-encoding") == "gzip"
    assert len(response.json()) == 10


def test_oversized_body_is_rejected(make_settings):
    with TestClient(create_app(make_settings(max_body_bytes=200))) as client:
        response = client.post("/api/community/message", json={"message": "x" * 400})
    assert response.status_code == 413
    assert response.json() == {"error": "Request body too large"}


def _chunked(*parts):
    for part in parts:
        yield part


def test_streamed_body_without_length_is_capped(make_settings):
    body = _chunked(b'{"message": "', b"x" * 200, b"x" * 200, b'"}')
    with TestClient(create_app(make_settings(max_body_bytes=200))) as client:
        response = client.post(
            "/api/community/message",
            content=body,
            headers={"Content-Type": "application/json"},
        )
    assert response.status_code == 413
    assert response.json() == {"error": "Request body too large"}


def test_streamed_body_under_cap_is_accepted(make_settings):
    body = _chunked(b'{"message": ', b'"stay strong"}')
    with TestClient(create_app(make_settings(max_body_bytes=200))) as client:
        response = client.post(
            "/api/community/message",
            content=body,
            headers={"Content-Type": "application/json"},
        )
    assert response.status_code == 200
    assert response.json() == {"success": True}


def test_unknown_route_uses_error_envelope(client):
    response = client.get("/api/nope")
    assert response.status_code == 404
    assert "error" in response.json()


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("postgres://u:p@db:5432/app", "postgresql+asyncpg://u:p@db:5432/app"),
        ("postgresql://u:p@db:5432/app", "postgresql+asyncpg://u:p@db:5432/app"),
        ("postgresql+asyncpg://u:p@db/app", "postgresql+asyncpg://u:p@db/app"),
        ("sqlite:///./local.db", "sqlite+aiosqlite:///./local.db"),
    ],
)
def test_database_url_is_normalized_to_async_driver(raw, expected):
    assert Settings(database_url=raw).async_database_url == expected

"""Unit tests for the FastAPI application factory."""

from __future__ import annotations

from fastapi.testclient import TestClient

from yt_transcript.api.app import create_app


def test_health_endpoint() -> None:
    client = TestClient(create_app(cors_origins=""))
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_root_metadata() -> None:
    client = TestClient(create_app(cors_origins=""))
    payload = client.get("/").json()
    assert payload["service"] == "yt-transcript-api"
    assert payload["health"] == "/health"


def test_routes_are_mounted() -> None:
    app = create_app(cors_origins="")
    paths = {route.path for route in app.routes}
    assert {
        "/api/youtube/transcript",
        "/api/youtube/download",
        "/api/youtube/search",
    } <= paths


def test_cors_headers_when_configured() -> None:
    client = TestClient(create_app(cors_origins="https://example.com, https://other.test"))
    response = client.get("/health", headers={"Origin": "https://example.com"})
    assert response.headers["access-control-allow-origin"] == "https://example.com"


def test_no_cors_by_default() -> None:
    client = TestClient(create_app(cors_origins=""))
    response = client.get("/health", headers={"Origin": "https://example.com"})
    assert "access-control-allow-origin" not in response.headers

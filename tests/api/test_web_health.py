"""Tests for greeting and health endpoints."""

from tutorcenter import __version__


def test_root_greeting(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.text == "Hello from the tutoring center API!"


def test_health_check(client):
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["version"] == __version__
    assert "timestamp" in data


def test_cors_allows_frontend_origin(client):
    """Frontend origin is allowed with credentials."""
    response = client.get("/health", headers={"Origin": "http://localhost:8080"})
    assert response.headers["access-control-allow-origin"] == "http://localhost:8080"
    assert response.headers["access-control-allow-credentials"] == "true"


def test_cors_rejects_other_origin(client):
    response = client.get("/health", headers={"Origin": "http://evil.example"})
    assert "access-control-allow-origin" not in response.headers

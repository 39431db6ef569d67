"""Health endpoint tests."""

import shutil

from fastapi.testclient import TestClient

from docsite.config import Settings


def test_liveness_returns_200(client: TestClient) -> None:
    """Liveness endpoint returns 200 OK."""
    response = client.get("/api/v1/health/live")
    assert response.status_code == 200
    assert response.json() == {"status": "alive"}


def test_readiness_ok_when_content_root_exists(client: TestClient) -> None:
    """Readiness passes and reports how many documents are indexed."""
    response = client.get("/api/v1/health/ready")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ready"
    assert data["checks"] == [
        {"name": "content_root", "status": "ok", "message": "6 documents indexed"}
    ]


def test_readiness_ok_for_empty_content_root(
    client: TestClient, settings: Settings
) -> None:
    """An empty content root is ready; navigation falls back."""
    shutil.rmtree(settings.content_root)
    settings.content_root.mkdir()
    response = client.get("/api/v1/health/ready")
    assert response.status_code == 200
    check = response.json()["checks"][0]
    assert check["status"] == "ok"
    assert check["message"] == "No documents; navigation uses fallback"


def test_readiness_fails_without_content_root(
    client: TestClient, settings: Settings
) -> None:
    """Readiness reports 503 when the content root is gone."""
    shutil.rmtree(settings.content_root)
    response = client.get("/api/v1/health/ready")
    assert response.status_code == 503
    data = response.json()
    assert data["status"] == "not_ready"
    assert data["checks"][0]["name"] == "content_root"
    assert data["checks"][0]["message"] == (
        f"Content root not found: {settings.content_root}"
    )


def test_request_id_is_echoed(client: TestClient) -> None:
    """Requests carry an X-Request-ID header back to the caller."""
    response = client.get("/api/v1/content-tree", headers={"X-Request-ID": "abc123"})
    assert response.headers["X-Request-ID"] == "abc123"

"""Error response tests."""

from fastapi.testclient import TestClient

from docsite.app import create_app
from docsite.config import Settings


def test_validation_errors_use_error_body(settings: Settings) -> None:
    """Malformed parameters produce a 400 with the standard error body."""
    app = create_app(settings)

    @app.get("/api/v1/typed")
    async def typed(n: int) -> dict[str, int]:
        return {"n": n}

    response = TestClient(app).get("/api/v1/typed", params={"n": "not-a-number"})
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid request parameters"}


def test_error_detail_only_in_debug(settings: Settings) -> None:
    """Debug mode adds detail to error bodies."""
    debug_settings = settings.model_copy(update={"debug": True})
    client = TestClient(create_app(debug_settings))
    response = client.get("/api/v1/content", params={"path": "missing.md"})
    assert response.status_code == 404
    assert response.json() == {"error": "File not found", "detail": "missing.md"}

from fastapi.testclient import TestClient

from app.main import app
from app.storage import get_storage


def _broken_storage():
    raise RuntimeError("storage exploded")


def test_uncaught_error_becomes_internal_error_envelope() -> None:
    app.dependency_overrides[get_storage] = _broken_storage
    try:
        client = TestClient(app, raise_server_exceptions=False)
        response = client.post("/api/upload", files={"file": ("a.gif", b"gif", "image/gif")})
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 500
    assert response.json() == {"success": False, "error": "Internal server error"}
    assert "storage exploded" not in response.text

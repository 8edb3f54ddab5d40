import asyncio
import os

import httpx
import pytest
from fastapi.testclient import TestClient

# Keep tests offline and the local server off.
os.environ["ENVIRONMENT"] = "test"
os.environ["CDN_UPLOAD_URL"] = "https://cdn.test/upload"
os.environ.pop("UPSTREAM_TIMEOUT_SECONDS", None)

from app.core.upload_validation import ValidationPolicy  # noqa: E402
from app.main import app  # noqa: E402
from app.storage import CdnStorage, get_storage  # noqa: E402


class FakeCdn:
    """Stands in for the CDN behind an httpx.MockTransport and records every request."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.status_code = 200
        self.json: object = {"result": {"url": "https://cdn.test/file.mp4"}}
        self.text: str | None = None
        self.error: Exception | None = None

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if self.text is not None:
            return httpx.Response(self.status_code, text=self.text)
        return httpx.Response(self.status_code, json=self.json)

    def storage(self) -> CdnStorage:
        client = httpx.AsyncClient(transport=httpx.MockTransport(self.handler))
        return CdnStorage(client, upload_url="https://cdn.test/upload")


@pytest.fixture
def cdn() -> FakeCdn:
    return FakeCdn()


@pytest.fixture
def client(cdn: FakeCdn):
    storage = cdn.storage()
    app.dependency_overrides[get_storage] = lambda: storage
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()
    asyncio.run(storage.client.aclose())


@pytest.fixture
def set_policy(monkeypatch):
    """Swap the app-wide validation policy for the duration of a test."""

    def _set(**kwargs) -> ValidationPolicy:
        policy = ValidationPolicy(**kwargs)
        monkeypatch.setattr(app.state, "validation_policy", policy)
        return policy

    return _set

# Storage backends

from fastapi import Request

from app.storage.base import StorageBackend
from app.storage.cdn_storage import CdnStorage


def get_storage(request: Request) -> StorageBackend:
    """Per-request backend bound to the app's pooled HTTP client."""
    return CdnStorage(request.app.state.http_client)


__all__ = ["get_storage", "StorageBackend", "CdnStorage"]

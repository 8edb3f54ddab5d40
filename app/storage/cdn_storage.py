"""Multipart relay to the public CDN upload endpoint."""

import logging
from typing import Any

import httpx

from app.config import CDN_UPLOAD_URL
from app.storage.base import StorageBackend

logger = logging.getLogger(__name__)

# Checked in this order; the first non-empty string wins
URL_FIELDS = ("url", "file", "link")


def extract_public_url(body: Any) -> str | None:
    """
    Pull the file URL out of an untyped CDN response.
    The payload sits under "result" when present, else at the top level.
    """
    if not body or not isinstance(body, dict):
        return None
    result = body.get("result") or body
    if not isinstance(result, dict):
        return None
    for name in URL_FIELDS:
        value = result.get(name)
        if isinstance(value, str) and value:
            return value
    return None


class CdnStorage(StorageBackend):
    """POST files to the CDN as a single multipart "file" part. Returns the public URL."""

    def __init__(self, client: httpx.AsyncClient, upload_url: str = CDN_UPLOAD_URL) -> None:
        self.client = client
        self.upload_url = upload_url

    async def upload(
        self,
        content: bytes,
        filename: str,
        content_type: str | None = None,
    ) -> str | None:
        files = {"file": (filename, content, content_type or "application/octet-stream")}
        logger.info("Relaying %s (%d bytes) to %s", filename, len(content), self.upload_url)
        response = await self.client.post(self.upload_url, files=files)
        response.raise_for_status()
        if not response.content:
            logger.warning("CDN returned an empty body for %s", filename)
            return None
        try:
            body = response.json()
        except ValueError:
            logger.warning("CDN returned non-JSON body for %s", filename)
            logger.debug("Raw CDN response: %s", response.text[:500])
            return None
        url = extract_public_url(body)
        if not url:
            logger.debug("CDN response without url/file/link: %s", body)
        return url

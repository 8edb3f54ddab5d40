"""Relay a validated upload to the CDN and shape the result."""

import logging
import time

import httpx

from app.core.errors import ErrorKind, RelayError
from app.core.upload_validation import UploadRequest, file_extension, format_size
from app.schemas.upload import FileInfo, UploadResult
from app.storage.base import StorageBackend

logger = logging.getLogger(__name__)

INVALID_RESPONSE_MESSAGE = "Upload failed or invalid response"


def build_filename(extension: str) -> str:
    """Synthetic upstream name, e.g. converted-1700000000000.mp4."""
    return f"converted-{int(time.time() * 1000)}{extension}"


def describe_upload(upload: UploadRequest) -> FileInfo:
    return FileInfo(
        name=upload.original_name,
        size=upload.size_bytes,
        sizeFormatted=format_size(upload.size_bytes),
        mimetype=upload.declared_mime_type,
        extension=file_extension(upload.original_name),
    )


async def relay_upload(upload: UploadRequest, storage: StorageBackend) -> UploadResult | RelayError:
    """
    Forward one upload to the CDN. A single attempt; nothing is retried.
    Returns an UploadResult only when the CDN handed back a URL.
    """
    extension = file_extension(upload.original_name).lower()
    filename = build_filename(extension)
    try:
        url = await storage.upload(upload.content, filename, content_type=upload.declared_mime_type)
    except httpx.HTTPError as e:
        logger.error("Upload of %s to CDN failed: %s", upload.original_name, e)
        return RelayError(ErrorKind.UPSTREAM, str(e) or "Upload failed")
    if not url:
        logger.error("CDN gave no URL for %s", upload.original_name)
        return RelayError(ErrorKind.UPSTREAM, INVALID_RESPONSE_MESSAGE)
    logger.info("Relayed %s as %s -> %s", upload.original_name, filename, url)
    return UploadResult(
        url=url,
        filename=filename,
        size=upload.size_bytes,
        sizeFormatted=format_size(upload.size_bytes),
        format=extension,
        mimetype=upload.declared_mime_type,
    )

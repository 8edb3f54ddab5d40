"""File validation for relayed uploads."""

import os
from dataclasses import dataclass, field

from fastapi import Request

from app.config import ALLOWED_MIME_TYPES, MAX_UPLOAD_SIZE
from app.core.errors import ErrorKind, RelayError

BYTES_PER_MB = 1024 * 1024

NO_FILE_MESSAGE = "No file uploaded"
INVALID_TYPE_MESSAGE = "Invalid file type. Only GIF, WebP, MP4, and WebM are allowed."


@dataclass(frozen=True)
class ValidationPolicy:
    """Static upload rules, built once at startup."""

    allowed_mime_types: frozenset[str] = ALLOWED_MIME_TYPES
    max_size_bytes: int = MAX_UPLOAD_SIZE


DEFAULT_POLICY = ValidationPolicy()


def get_validation_policy(request: Request) -> ValidationPolicy:
    """FastAPI dependency returning the policy installed on app.state at startup."""
    return request.app.state.validation_policy


@dataclass(frozen=True)
class UploadRequest:
    """One incoming file, held in memory for the lifetime of the request."""

    content: bytes = field(repr=False)
    original_name: str
    declared_mime_type: str
    size_bytes: int


def format_size(size: int) -> str:
    """Render a byte count the way the API reports it, e.g. '2.00 MB'."""
    return f"{size / BYTES_PER_MB:.2f} MB"


def file_extension(filename: str) -> str:
    """Extension including the dot ('' when there is none). Case is preserved."""
    return os.path.splitext(filename)[1]


def base_mime_type(content_type: str | None) -> str:
    if not content_type:
        return ""
    return content_type.split(";")[0].strip().lower()


def check_type(content_type: str | None, policy: ValidationPolicy) -> RelayError | None:
    if base_mime_type(content_type) not in policy.allowed_mime_types:
        return RelayError(ErrorKind.UNSUPPORTED_MEDIA_TYPE, INVALID_TYPE_MESSAGE)
    return None


def check_size(size: int, policy: ValidationPolicy) -> RelayError | None:
    if size > policy.max_size_bytes:
        return RelayError(
            ErrorKind.PAYLOAD_TOO_LARGE,
            f"File too large. Size: {size / BYTES_PER_MB:.2f} MB. "
            f"Max: {policy.max_size_bytes / BYTES_PER_MB:g} MB",
        )
    return None


def validate_metadata(
    filename: str | None,
    content_type: str | None,
    size: int | None,
    policy: ValidationPolicy,
) -> RelayError | None:
    """
    Check presence, type and size, in that order, before any bytes are read.
    A size of None means the ingestion layer could not report one yet.
    """
    if not filename:
        return RelayError(ErrorKind.BAD_REQUEST, NO_FILE_MESSAGE)
    err = check_type(content_type, policy)
    if err:
        return err
    if size is not None:
        return check_size(size, policy)
    return None


def validate_upload(upload: UploadRequest | None, policy: ValidationPolicy) -> RelayError | None:
    """Full check on a materialized upload. Returns None when it may be relayed."""
    if upload is None:
        return RelayError(ErrorKind.BAD_REQUEST, NO_FILE_MESSAGE)
    return validate_metadata(upload.original_name, upload.declared_mime_type, upload.size_bytes, policy)

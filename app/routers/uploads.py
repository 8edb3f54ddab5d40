"""Upload API: validate files and relay them to the CDN."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, File, UploadFile
from fastapi.responses import JSONResponse

from app.core.errors import ErrorKind, RelayError, error_response
from app.core.upload_validation import (
    NO_FILE_MESSAGE,
    UploadRequest,
    ValidationPolicy,
    get_validation_policy,
    validate_metadata,
    validate_upload,
)
from app.schemas.upload import ErrorResponse, FileInfoResponse, UploadResponse
from app.services.relay import describe_upload, relay_upload
from app.storage import StorageBackend, get_storage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["uploads"])

_ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


async def _read_upload(file: UploadFile | None, policy: ValidationPolicy) -> UploadRequest | RelayError:
    """Reject on what the multipart parser already knows, then read and check again."""
    if file is None:
        return RelayError(ErrorKind.BAD_REQUEST, NO_FILE_MESSAGE)
    err = validate_metadata(file.filename, file.content_type, file.size, policy)
    if err:
        return err
    content = await file.read()
    upload = UploadRequest(
        content=content,
        original_name=file.filename or "",
        declared_mime_type=file.content_type or "",
        size_bytes=len(content),
    )
    return validate_upload(upload, policy) or upload


@router.post("/upload", response_model=UploadResponse, responses=_ERROR_RESPONSES)
async def upload_file(
    policy: Annotated[ValidationPolicy, Depends(get_validation_policy)],
    storage: Annotated[StorageBackend, Depends(get_storage)],
    file: UploadFile | None = File(None),
) -> UploadResponse | JSONResponse:
    """
    Relay one GIF, WebP, MP4 or WebM file (max 100 MB) to the CDN.
    Returns the public URL under data.url.
    """
    upload = await _read_upload(file, policy)
    if isinstance(upload, RelayError):
        logger.info("Upload rejected (%s): %s", upload.kind.value, upload.message)
        return error_response(upload)
    result = await relay_upload(upload, storage)
    if isinstance(result, RelayError):
        return error_response(result)
    return UploadResponse(data=result)


@router.post("/file-info", response_model=FileInfoResponse, responses=_ERROR_RESPONSES)
async def file_info(
    policy: Annotated[ValidationPolicy, Depends(get_validation_policy)],
    file: UploadFile | None = File(None),
) -> FileInfoResponse | JSONResponse:
    """Describe an upload (name, size, type, extension) without relaying it."""
    upload = await _read_upload(file, policy)
    if isinstance(upload, RelayError):
        logger.info("File info rejected (%s): %s", upload.kind.value, upload.message)
        return error_response(upload)
    return FileInfoResponse(data=describe_upload(upload))

"""Reject oversized uploads from their headers, before the body is read."""

import logging

from fastapi import Request
from fastapi.responses import JSONResponse

from app.core.errors import error_response
from app.core.upload_validation import check_size

logger = logging.getLogger(__name__)

UPLOAD_PATHS = frozenset({"/api/upload", "/api/file-info"})
# Multipart boundaries and part headers on top of the file bytes
MULTIPART_OVERHEAD = 64 * 1024


async def enforce_upload_size(request: Request, call_next):
    """
    HTTP middleware. A declared Content-Length above the cap is answered with
    the too-large envelope without touching the body. Requests without a
    usable Content-Length fall through to the post-parse checks.
    """
    if request.method != "POST" or request.url.path not in UPLOAD_PATHS:
        return await call_next(request)
    try:
        declared = int(request.headers.get("content-length", ""))
    except ValueError:
        return await call_next(request)

    policy = request.app.state.validation_policy
    if declared > policy.max_size_bytes + MULTIPART_OVERHEAD:
        err = check_size(declared, policy)
        logger.info("Upload rejected at ingestion (%s): %s", err.kind.value, err.message)
        response: JSONResponse = error_response(err)
        # The unread body is dropped with the connection
        response.headers["Connection"] = "close"
        return response
    return await call_next(request)

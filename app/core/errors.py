"""Error taxonomy and the JSON failure envelope."""

import logging
from dataclasses import dataclass
from enum import Enum

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"


class ErrorKind(str, Enum):
    BAD_REQUEST = "BadRequest"
    UNSUPPORTED_MEDIA_TYPE = "UnsupportedMediaType"
    PAYLOAD_TOO_LARGE = "PayloadTooLarge"
    UPSTREAM = "UpstreamError"
    NOT_FOUND = "NotFound"
    INTERNAL = "InternalError"


STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.BAD_REQUEST: 400,
    ErrorKind.UNSUPPORTED_MEDIA_TYPE: 400,
    ErrorKind.PAYLOAD_TOO_LARGE: 400,
    ErrorKind.UPSTREAM: 500,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.INTERNAL: 500,
}


@dataclass(frozen=True)
class RelayError:
    """A failed validation or relay. Returned, not raised."""

    kind: ErrorKind
    message: str

    @property
    def status_code(self) -> int:
        return STATUS_BY_KIND[self.kind]


def envelope_error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": message})


def error_response(error: RelayError) -> JSONResponse:
    return envelope_error(error.status_code, error.message)


async def _http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    # Express-style routing: a known path with the wrong method is still "not found"
    if exc.status_code in (404, 405):
        return error_response(RelayError(ErrorKind.NOT_FOUND, "Endpoint not found"))
    return envelope_error(exc.status_code, str(exc.detail))


async def _validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    first = errors[0] if errors else {}
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Invalid request")
    if location:
        message = f"{location}: {message}"
    logger.info("Rejected malformed request to %s: %s", request.url.path, message)
    return error_response(RelayError(ErrorKind.BAD_REQUEST, message))


async def _unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return error_response(RelayError(ErrorKind.INTERNAL, INTERNAL_ERROR_MESSAGE))


def register_error_handlers(app: FastAPI) -> None:
    """Keep every failure inside the {success: false, error} envelope."""
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(Exception, _unhandled_exception_handler)

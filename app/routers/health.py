"""Liveness endpoint."""

from datetime import datetime, timezone

from fastapi import APIRouter

from app.schemas.health import HealthResponse

router = APIRouter(prefix="/api", tags=["health"])

HEALTH_MESSAGE = "GIF/WebP to Video Converter API is running"


def _utc_timestamp() -> str:
    # e.g. 2024-05-01T12:00:00.123Z
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse(status="ok", message=HEALTH_MESSAGE, timestamp=_utc_timestamp())

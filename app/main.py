from contextlib import asynccontextmanager
import logging
from pathlib import Path

import httpx
import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse

from app.config import CORS_ORIGINS, HOST, IS_PRODUCTION, LOG_LEVEL, PORT, UPSTREAM_TIMEOUT_SECONDS
from app.core.errors import register_error_handlers
from app.core.ingestion import enforce_upload_size
from app.core.upload_validation import DEFAULT_POLICY
from app.routers import health, uploads

# Configure logging
logging.basicConfig(
    level=LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

INDEX_HTML = Path(__file__).parent / "static" / "index.html"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open one pooled HTTP client for the CDN leg and close it on shutdown."""
    app.state.http_client = httpx.AsyncClient(timeout=UPSTREAM_TIMEOUT_SECONDS)
    yield
    await app.state.http_client.aclose()


app = FastAPI(
    title="Media Relay API",
    description="Validate GIF/WebP/MP4/WebM uploads and relay them to a public CDN",
    version="0.1.0",
    lifespan=lifespan,
)
app.state.validation_policy = DEFAULT_POLICY

# Added before CORS so CORS is the outer layer
app.middleware("http")(enforce_upload_size)
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

# Include routers
app.include_router(health.router)
app.include_router(uploads.router)


@app.get("/", include_in_schema=False)
async def root():
    return FileResponse(INDEX_HTML, media_type="text/html")


def main() -> None:
    """Run the local server; in production the platform imports app.main:app instead."""
    if IS_PRODUCTION:
        logger.info("ENVIRONMENT=production, not starting a local server")
        return
    logger.info("Server running on http://localhost:%d", PORT)
    logger.info("Upload endpoint: http://localhost:%d/api/upload", PORT)
    uvicorn.run(app, host=HOST, port=PORT, log_level=LOG_LEVEL.lower())


if __name__ == "__main__":
    main()

"""Application configuration."""

import os

from dotenv import load_dotenv

# Load .env so PORT, CDN_UPLOAD_URL and friends are available
load_dotenv()

# Server
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "3000"))
# "production" means a platform-managed entrypoint imports app.main:app;
# the local uvicorn server is not started.
ENVIRONMENT = os.getenv("ENVIRONMENT", "development").lower()
IS_PRODUCTION = ENVIRONMENT == "production"

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Comma-separated; "*" allows every origin
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

# Upstream CDN
CDN_UPLOAD_URL = os.getenv("CDN_UPLOAD_URL", "https://cdn.dongtube.my.id/upload")
# Unset means no timeout on the outbound leg
_timeout = os.getenv("UPSTREAM_TIMEOUT_SECONDS", "").strip()
UPSTREAM_TIMEOUT_SECONDS = float(_timeout) if _timeout else None

# Upload limits
MAX_UPLOAD_SIZE = int(os.getenv("MAX_UPLOAD_SIZE", 100 * 1024 * 1024))  # 100 MB
ALLOWED_MIME_TYPES = frozenset({"image/gif", "image/webp", "video/mp4", "video/webm"})

"""Project-wide constants for convenient reuse."""

from __future__ import annotations

import os
import pathlib
import sys
from typing import Final

from yt_transcript.utils.env_loader import load_project_env

# Ensure .env is loaded exactly once at import time for the whole project
if "pytest" not in sys.modules:
    load_project_env()


# Repository root resolved relative to this file (utils/constant.py → package → repo)
REPO_ROOT: Final[pathlib.Path] = pathlib.Path(__file__).resolve().parents[2]

# Default path of the dotenv file containing runtime overrides
ENV_FILE: Final[pathlib.Path] = REPO_ROOT / ".env"

# Pacing applied before every outbound caption request (milliseconds).
# The effective delay grows by the multiplier per consecutive failed resolution.
RATE_LIMIT_BASE_DELAY_MS: Final[int] = int(os.getenv("RATE_LIMIT_BASE_DELAY_MS", "500"))
RATE_LIMIT_MAX_DELAY_MS: Final[int] = int(os.getenv("RATE_LIMIT_MAX_DELAY_MS", "5000"))
RATE_LIMIT_BACKOFF_MULTIPLIER: Final[float] = float(
    os.getenv("RATE_LIMIT_BACKOFF_MULTIPLIER", "1.5")
)

# Preferred caption languages for the caption scraper, in priority order.
TRANSCRIPT_LANGUAGES: Final[tuple[str, ...]] = tuple(
    code.strip()
    for code in os.getenv("TRANSCRIPT_LANGUAGES", "en").split(",")
    if code.strip()
)

# InnerTube (youtubei/v1) client settings
INNERTUBE_BASE_URL: Final[str] = os.getenv(
    "INNERTUBE_BASE_URL", "https://www.youtube.com/youtubei/v1"
)
INNERTUBE_CLIENT_NAME: Final[str] = os.getenv("INNERTUBE_CLIENT_NAME", "WEB")
INNERTUBE_CLIENT_VERSION: Final[str] = os.getenv(
    "INNERTUBE_CLIENT_VERSION", "2.20250101.00.00"
)
INNERTUBE_TIMEOUT_SEC: Final[float] = float(os.getenv("INNERTUBE_TIMEOUT_SEC", "15"))

# Public YouTube URL shapes
YOUTUBE_WATCH_URL: Final[str] = "https://www.youtube.com/watch?v={video_id}"
YOUTUBE_SHORT_URL: Final[str] = "https://youtu.be/{video_id}"
YOUTUBE_THUMBNAIL_URL: Final[str] = "https://img.youtube.com/vi/{video_id}/maxresdefault.jpg"

# REST API configuration
API_SERVER_NAME: Final[str] = os.getenv("API_SERVER_NAME", "0.0.0.0")
API_SERVER_PORT: Final[int] = int(os.getenv("API_SERVER_PORT", "8080"))
API_CORS_ORIGINS: Final[str] = os.getenv("API_CORS_ORIGINS", "")
# Overall deadline for a single transcript resolution behind an HTTP request.
API_REQUEST_TIMEOUT_SEC: Final[float] = float(os.getenv("API_REQUEST_TIMEOUT_SEC", "60"))

# CLI batch processing: concurrent resolutions per batch and pause between batches
BATCH_SIZE: Final[int] = int(os.getenv("BATCH_SIZE", "5"))
BATCH_DELAY_SEC: Final[float] = float(os.getenv("BATCH_DELAY_SEC", "2.0"))

# Export formats understood by the download endpoint and CLI
SUPPORTED_FORMATS: Final[tuple[str, ...]] = ("txt", "json", "csv", "srt", "vtt")

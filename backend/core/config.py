"""
Configuration management for the transcript extractor backend.
Loads configuration from environment variables and .env file.
"""
import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables from .env file
# Look for .env file in the project root or the backend directory
BACKEND_DIR = Path(__file__).parent.parent
PROJECT_ROOT = BACKEND_DIR.parent
ENV_FILE = PROJECT_ROOT / ".env"

# Load .env file if it exists
if ENV_FILE.exists():
    load_dotenv(ENV_FILE)
else:
    # Also try loading from backend directory
    backend_env = BACKEND_DIR / ".env"
    if backend_env.exists():
        load_dotenv(backend_env)

APP_NAME = "Instagram Transcript Extractor"
APP_VERSION = "1.0.0"

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Speech-to-text (OpenAI Whisper)
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY", None)
WHISPER_MODEL = os.getenv("WHISPER_MODEL", "whisper-1")
TRANSCRIPTION_LANGUAGE = os.getenv("TRANSCRIPTION_LANGUAGE", "en")
WHISPER_MAX_FILE_BYTES = 25 * 1024 * 1024  # Whisper upload limit

# Target platform
TARGET_DOMAIN = os.getenv("TARGET_DOMAIN", "instagram.com")

# Deadlines
EXTRACTION_DEADLINE_SEC = float(os.getenv("EXTRACTION_DEADLINE_SEC", "50"))
NAVIGATION_TIMEOUT_MS = int(os.getenv("NAVIGATION_TIMEOUT_MS", "20000"))
DOWNLOAD_TIMEOUT_SEC = float(os.getenv("DOWNLOAD_TIMEOUT_SEC", "30"))

# Headless browser profile (mobile layout exposes the post markup more simply)
BROWSER_VIEWPORT = {"width": 375, "height": 812}
BROWSER_USER_AGENT = os.getenv(
    "BROWSER_USER_AGENT",
    "Mozilla/5.0 (iPhone; CPU iPhone OS 14_4 like Mac OS X) AppleWebKit/605.1.15 "
    "(KHTML, like Gecko) Version/14.0 Mobile/15E148 Safari/604.1",
)

# Scratch storage for downloaded media.
# Serverless hosts only allow writes under /tmp.
IS_SERVERLESS = bool(os.getenv("VERCEL") or os.getenv("SERVERLESS"))
DATA_DIR = PROJECT_ROOT / "data"
_default_scratch = Path("/tmp/media") if IS_SERVERLESS else DATA_DIR / "media"
SCRATCH_DIR = Path(os.getenv("SCRATCH_DIR", str(_default_scratch)))

# CORS origins can be comma-separated list in env var
CORS_ORIGINS_STR = os.getenv("CORS_ORIGINS", "http://localhost:3000")
CORS_ORIGINS = [origin.strip() for origin in CORS_ORIGINS_STR.split(",") if origin.strip()]


class Placeholders:
    """Sentinel values standing in for fields that could not be resolved.

    Clients compare against these by exact value to tell real data from
    filler; changing any of them is a wire-format change.
    """

    CAPTION_NOT_FOUND = "No caption found"
    VIDEO_URL = "https://example.com/video.mp4"
    METRIC_UNAVAILABLE = "N/A"

    NO_VIDEO = "No video found on this post to transcribe."
    TRANSCRIPTION_UNAVAILABLE = (
        "Audio transcription is unavailable: no speech-to-text API key is configured."
    )
    TRANSCRIPTION_FAILED = "Failed to transcribe audio from the video."

    TIMEOUT_CAPTION = "Extraction is taking longer than expected. Please try again in a moment."
    LOADING = "Loading..."

    ERROR = "Error"


class HeuristicsConfig:
    """Selectors and markers used by the DOM heuristics."""

    # Caption candidates, in priority order
    CAPTION_SELECTORS = [
        "div._a9zs",       # post caption block
        "h1",              # top-level heading
        "article span",    # generic article span
    ]
    CAPTION_META_PROPERTY = "og:description"

    VIDEO_EXTENSIONS = (".mp4", ".mov", ".webm", ".m3u8")
    # Path fragments Instagram's CDN uses for video assets
    VIDEO_CDN_MARKERS = ("/o1/v/t16/", "/t50.2886-16/", "video.cdninstagram")
    # Schemes that can never be fetched server-side
    SKIPPED_URL_SCHEMES = ("blob:", "data:", "javascript:")

    # Engagement scan
    METRIC_MAX_TEXT_LENGTH = 40
    LIKE_KEYWORDS = ("like", "heart")
    VIEW_KEYWORDS = ("view", "play")
    COMMENT_KEYWORDS = ("comment",)


# Transcript segmentation
DEFAULT_WORDS_PER_SECOND = 2.5
SENTENCES_PER_PARAGRAPH = 3

"""
Extraction pipeline orchestration.

Page extraction, then (when a video was found) download and transcription,
all raced against a single deadline.
"""
import logging
import uuid
from pathlib import Path
from typing import Optional
from urllib.parse import urlparse

from core.config import EXTRACTION_DEADLINE_SEC, SCRATCH_DIR, TARGET_DOMAIN, Placeholders
from core.deadline import Ok, race_deadline
from core.errors import DownloadError, InvalidSourceUrlError, TranscriptionError
from core.openai_client import build_openai_client
from models.extraction_models import ExtractionResult
from services.ingestion.downloader import Downloader, is_downloadable_url
from services.ingestion.page_extractor import PageExtractor
from services.processing.transcriber import Transcriber

logger = logging.getLogger(__name__)


def validate_source_url(url: str, domain: str = TARGET_DOMAIN) -> str:
    """
    Check that `url` points at `domain` (or a subdomain of it).

    Returns:
        The stripped URL.

    Raises:
        InvalidSourceUrlError: with a message suitable for the client.
    """
    url = (url or "").strip()
    parsed = urlparse(url)
    host = (parsed.hostname or "").lower()
    domain = domain.lower()

    if parsed.scheme not in ("http", "https") or not host:
        raise InvalidSourceUrlError(f"Not a valid URL: {url!r}")
    if host != domain and not host.endswith("." + domain):
        raise InvalidSourceUrlError(f"Not a valid {domain} URL: {url}")
    return url


class ExtractionPipeline:
    """Orchestrates page extraction, download and transcription for one post."""

    def __init__(
        self,
        extractor: PageExtractor,
        downloader: Downloader,
        transcriber: Transcriber,
        scratch_dir: Path = SCRATCH_DIR,
        deadline_sec: float = EXTRACTION_DEADLINE_SEC,
        target_domain: str = TARGET_DOMAIN,
    ):
        self.extractor = extractor
        self.downloader = downloader
        self.transcriber = transcriber
        self.scratch_dir = Path(scratch_dir)
        self.deadline_sec = deadline_sec
        self.target_domain = target_domain

    async def run(self, source_url: str) -> ExtractionResult:
        """
        Extract under the deadline.

        A slow extraction yields the timeout placeholder record rather than
        an error. Validation and extraction failures propagate.
        """
        url = validate_source_url(source_url, self.target_domain)
        outcome = await race_deadline(
            self.extract(url),
            timeout=self.deadline_sec,
            fallback=ExtractionResult.timed_out(),
        )
        if isinstance(outcome, Ok):
            return outcome.value

        logger.warning(f"Extraction for {url} exceeded {self.deadline_sec}s, returning placeholders")
        return outcome.fallback

    async def extract(self, source_url: str) -> ExtractionResult:
        """
        Run the full pipeline with no deadline.

        Pipeline Stages:
        1. Validate the source URL
        2. Page extraction (failure here fails the whole extraction)
        3. Video download and transcription (failure degrades the transcript only)
        4. Assemble the result with placeholders for unresolved fields
        """
        # STAGE 1: Validation
        url = validate_source_url(source_url, self.target_domain)

        # STAGE 2: Page extraction
        page = await self.extractor.extract(url)

        # STAGE 3: Optional speech transcript
        speech_transcript = await self._speech_transcript(page.video_url)

        # STAGE 4: Assembly
        return ExtractionResult(
            caption=page.caption,
            view_count=page.view_count,
            like_count=page.like_count,
            comment_count=page.comment_count,
            video_url=page.video_url or Placeholders.VIDEO_URL,
            speech_transcript=speech_transcript,
        )

    async def _speech_transcript(self, video_url: Optional[str]) -> str:
        if not is_downloadable_url(video_url):
            return Placeholders.NO_VIDEO

        if not self.transcriber.available:
            logger.info("Skipping transcription: no speech-to-text credential configured")
            return Placeholders.TRANSCRIPTION_UNAVAILABLE

        scratch_path = self.scratch_dir / f"{uuid.uuid4()}.mp4"
        try:
            await self.downloader.download(video_url, scratch_path)
            transcript = await self.transcriber.transcribe(scratch_path)
        except (DownloadError, TranscriptionError) as e:
            logger.warning(f"Speech transcript unavailable for {video_url}: {e}")
            return Placeholders.TRANSCRIPTION_FAILED
        finally:
            self._remove_scratch(scratch_path)

        return transcript or Placeholders.TRANSCRIPTION_FAILED

    @staticmethod
    def _remove_scratch(path: Path) -> None:
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            logger.warning(f"Could not remove scratch file {path}: {e}")


def build_pipeline() -> ExtractionPipeline:
    """Wire the pipeline from configuration."""
    return ExtractionPipeline(
        extractor=PageExtractor(),
        downloader=Downloader(),
        transcriber=Transcriber(build_openai_client()),
    )

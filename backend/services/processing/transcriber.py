"""
Speech-to-text transcription via the OpenAI Whisper API.
"""
import logging
from pathlib import Path
from typing import Optional

from openai import AsyncOpenAI, OpenAIError

from core.config import TRANSCRIPTION_LANGUAGE, WHISPER_MAX_FILE_BYTES, WHISPER_MODEL
from core.errors import TranscriptionError

logger = logging.getLogger(__name__)


class Transcriber:
    """
    Sends a local audio/video file to Whisper and returns plain text.

    The client is passed in; `available` is fixed at construction and is
    False when no credential was configured.
    """

    def __init__(
        self,
        client: Optional[AsyncOpenAI],
        model: str = WHISPER_MODEL,
        language: str = TRANSCRIPTION_LANGUAGE,
        max_file_bytes: int = WHISPER_MAX_FILE_BYTES,
    ):
        self.client = client
        self.model = model
        self.language = language
        self.max_file_bytes = max_file_bytes
        self.available = client is not None

    async def transcribe(self, path: Path) -> str:
        """
        Transcribe `path` in the configured language.

        Raises:
            TranscriptionError: no client configured, file missing, empty
                or over the upload limit, or the API call failed.
        """
        if not self.available:
            raise TranscriptionError("Speech-to-text API key is not configured")

        path = Path(path)
        if not path.is_file():
            raise TranscriptionError(f"File to transcribe does not exist: {path}")

        size = path.stat().st_size
        if size == 0:
            raise TranscriptionError(f"File to transcribe is empty: {path}")
        if size > self.max_file_bytes:
            raise TranscriptionError(
                f"File is {size / (1024 * 1024):.1f} MB, over the "
                f"{self.max_file_bytes / (1024 * 1024):.0f} MB upload limit"
            )

        logger.info(f"Sending {size} bytes to {self.model} for transcription")
        try:
            with open(path, 'rb') as audio_file:
                response = await self.client.audio.transcriptions.create(
                    model=self.model,
                    file=audio_file,
                    language=self.language,
                )
        except OpenAIError as e:
            raise TranscriptionError(f"Transcription request failed: {e}") from e

        return (response.text or "").strip()

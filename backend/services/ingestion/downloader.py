"""
Media downloader using httpx.
"""
import logging
from pathlib import Path
from typing import Optional

import httpx

from core.config import BROWSER_USER_AGENT, DOWNLOAD_TIMEOUT_SEC, WHISPER_MAX_FILE_BYTES, Placeholders
from core.errors import DownloadError

logger = logging.getLogger(__name__)


def is_downloadable_url(url: Optional[str]) -> bool:
    """False for empty, non-HTTP and placeholder URLs."""
    if not url or url == Placeholders.VIDEO_URL:
        return False
    return url.startswith(("http://", "https://"))


class Downloader:
    """
    Fetches a remote media file into scratch storage. Single attempt, no retry.

    Files larger than `max_bytes` (the Whisper upload limit by default) are
    abandoned mid-stream.
    """

    def __init__(
        self,
        timeout: float = DOWNLOAD_TIMEOUT_SEC,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        max_bytes: int = WHISPER_MAX_FILE_BYTES,
    ):
        self.timeout = timeout
        self.transport = transport
        self.max_bytes = max_bytes

    async def download(self, url: str, destination: Path) -> Path:
        """
        Stream `url` to `destination`, creating parent directories.

        Returns:
            The destination path.

        Raises:
            DownloadError: placeholder or unusable URL, non-2xx status, body
                over `max_bytes`, or a transport/file-system failure.
        """
        if not is_downloadable_url(url):
            raise DownloadError(f"Refusing to download unresolved video URL: {url!r}")

        destination = Path(destination)
        logger.info(f"Downloading {url} to {destination}")

        try:
            destination.parent.mkdir(parents=True, exist_ok=True)
            async with httpx.AsyncClient(
                timeout=self.timeout,
                follow_redirects=True,
                headers={"User-Agent": BROWSER_USER_AGENT},
                transport=self.transport,
            ) as client:
                async with client.stream("GET", url) as response:
                    if not response.is_success:
                        raise DownloadError(
                            f"Failed to download {url}: HTTP {response.status_code} "
                            f"{response.reason_phrase}"
                        )
                    length = response.headers.get("Content-Length", "")
                    declared = int(length) if length.isdigit() else 0
                    if declared > self.max_bytes:
                        raise DownloadError(
                            f"Video at {url} is {declared} bytes, over the {self.max_bytes} byte limit"
                        )
                    size = 0
                    with open(destination, "wb") as f:
                        async for chunk in response.aiter_bytes():
                            size += len(chunk)
                            if size > self.max_bytes:
                                raise DownloadError(
                                    f"Video at {url} exceeds the {self.max_bytes} byte limit"
                                )
                            f.write(chunk)
        except DownloadError:
            _discard(destination)
            raise
        except (httpx.HTTPError, OSError) as e:
            _discard(destination)
            raise DownloadError(f"Failed to download {url}: {e}") from e

        logger.info(f"Downloaded {size} bytes to {destination}")
        return destination


def _discard(path: Path) -> None:
    try:
        path.unlink(missing_ok=True)
    except OSError as e:
        logger.warning(f"Could not remove partial download {path}: {e}")

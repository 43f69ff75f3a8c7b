"""
Data models for page extraction results.
"""
from dataclasses import dataclass
from typing import Optional

from core.config import Placeholders


@dataclass
class PageData:
    """What the DOM heuristics recovered from one rendered page"""
    caption: str
    video_url: Optional[str] = None  # None when no candidate was found
    view_count: str = Placeholders.METRIC_UNAVAILABLE
    like_count: str = Placeholders.METRIC_UNAVAILABLE
    comment_count: str = Placeholders.METRIC_UNAVAILABLE


@dataclass
class ExtractionResult:
    """Complete result for one post. Every field is always populated;
    unresolved fields hold a Placeholders value."""
    caption: str
    view_count: str
    like_count: str
    comment_count: str
    video_url: str
    speech_transcript: str

    @classmethod
    def timed_out(cls) -> "ExtractionResult":
        """Result returned while a slow extraction may still be running."""
        return cls(
            caption=Placeholders.TIMEOUT_CAPTION,
            view_count=Placeholders.LOADING,
            like_count=Placeholders.LOADING,
            comment_count=Placeholders.LOADING,
            video_url=Placeholders.VIDEO_URL,
            speech_transcript=Placeholders.LOADING,
        )

    @classmethod
    def failed(cls) -> "ExtractionResult":
        """Result paired with an error message."""
        return cls(
            caption=Placeholders.ERROR,
            view_count=Placeholders.ERROR,
            like_count=Placeholders.ERROR,
            comment_count=Placeholders.ERROR,
            video_url=Placeholders.VIDEO_URL,
            speech_transcript=Placeholders.ERROR,
        )

"""
Pydantic response models for API endpoints.
"""
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional

from models.extraction_models import ExtractionResult
from models.transcript_models import TranscriptSegment


class ExtractionResponse(BaseModel):
    """Response model for post extraction. Always complete; `error` is set on failure."""
    model_config = ConfigDict(populate_by_name=True)

    caption: str
    view_count: str = Field(..., alias="viewCount")
    like_count: str = Field(..., alias="likeCount")
    comment_count: str = Field(..., alias="commentCount")
    video_url: str = Field(..., alias="videoUrl")
    speech_transcript: str = Field(..., alias="speechTranscript")
    error: Optional[str] = None

    @classmethod
    def from_result(cls, result: ExtractionResult, error: Optional[str] = None) -> "ExtractionResponse":
        return cls(
            caption=result.caption,
            view_count=result.view_count,
            like_count=result.like_count,
            comment_count=result.comment_count,
            video_url=result.video_url,
            speech_transcript=result.speech_transcript,
            error=error,
        )

    @classmethod
    def from_error(cls, message: str) -> "ExtractionResponse":
        return cls.from_result(ExtractionResult.failed(), error=message)


class Segment(BaseModel):
    """Transcript sentence with estimated timing (seconds)."""
    model_config = ConfigDict(populate_by_name=True)

    text: str
    start_time: float = Field(..., alias="startTime")
    end_time: float = Field(..., alias="endTime")

    @classmethod
    def from_segment(cls, segment: TranscriptSegment) -> "Segment":
        return cls(text=segment.text, start_time=segment.start_time, end_time=segment.end_time)


class SegmentResponse(BaseModel):
    """Response model for transcript segmentation."""
    segments: List[Segment] = []
    paragraphs: List[str] = []

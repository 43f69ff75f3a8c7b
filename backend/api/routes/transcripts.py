"""
Transcript utility routes.
"""
from fastapi import APIRouter

from api.models.requests import SegmentRequest
from api.models.responses import Segment, SegmentResponse
from core.config import DEFAULT_WORDS_PER_SECOND
from services.processing.segmenter import group_paragraphs, segment_transcript

router = APIRouter()


@router.post("/segments", response_model=SegmentResponse)
async def segments(request: SegmentRequest):
    """
    Estimate per-sentence timings for a transcript.
    Used by the player to highlight the sentence being spoken.
    """
    rate = request.words_per_second or DEFAULT_WORDS_PER_SECOND
    return SegmentResponse(
        segments=[Segment.from_segment(s) for s in segment_transcript(request.transcript, rate)],
        paragraphs=group_paragraphs(request.transcript),
    )

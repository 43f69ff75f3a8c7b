"""
Naive time-stamped segmentation of a plain transcript.
"""
from typing import List

from core.config import DEFAULT_WORDS_PER_SECOND, SENTENCES_PER_PARAGRAPH
from models.transcript_models import TranscriptSegment
from services.processing.utils import count_words, split_sentences


def segment_transcript(
    transcript: str,
    words_per_second: float = DEFAULT_WORDS_PER_SECOND,
) -> List[TranscriptSegment]:
    """
    Split a transcript into sentences and lay them end to end on a timeline.

    Each sentence lasts words / words_per_second seconds, starting at 0.
    This is an estimate for playback highlighting; it does not align
    against the audio.
    """
    if words_per_second <= 0:
        raise ValueError("words_per_second must be positive")

    segments = []
    current_time = 0.0
    for sentence in split_sentences(transcript):
        duration = count_words(sentence) / words_per_second
        segments.append(TranscriptSegment(
            text=sentence,
            start_time=current_time,
            end_time=current_time + duration,
        ))
        current_time += duration
    return segments


def group_paragraphs(
    transcript: str,
    sentences_per_paragraph: int = SENTENCES_PER_PARAGRAPH,
) -> List[str]:
    """Join consecutive sentences into readable paragraphs."""
    sentences = split_sentences(transcript)
    return [
        " ".join(sentences[i:i + sentences_per_paragraph])
        for i in range(0, len(sentences), sentences_per_paragraph)
    ]

"""
Data models for speech transcripts.
"""
from dataclasses import dataclass


@dataclass
class TranscriptSegment:
    """Sentence with an estimated playback window.

    Times come from an assumed speaking rate, not from the audio,
    so they only approximate where the sentence is spoken.
    """
    text: str
    start_time: float  # seconds
    end_time: float

    @property
    def duration(self) -> float:
        return self.end_time - self.start_time

"""
Exception types raised by the extraction pipeline.
"""


class ExtractionError(Exception):
    """Base class for pipeline failures."""
    pass


class InvalidSourceUrlError(ExtractionError):
    """Raised when a source URL does not belong to the target platform."""
    pass


class DownloadError(ExtractionError):
    """Raised when a media file cannot be fetched to scratch storage."""
    pass


class TranscriptionError(ExtractionError):
    """Raised when speech-to-text cannot produce a transcript."""
    pass

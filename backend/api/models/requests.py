"""
Pydantic request models for API endpoints.
"""
from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from typing import Optional


class ExtractionRequest(BaseModel):
    """Request model for post extraction."""
    model_config = ConfigDict(str_strip_whitespace=True)

    source_url: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("sourceUrl", "igLink", "source_url"),
        description="Instagram post URL",
    )


class SegmentRequest(BaseModel):
    """Request model for transcript segmentation."""
    transcript: str = Field(..., description="Plain transcript text")
    words_per_second: Optional[float] = Field(
        default=None,
        gt=0,
        validation_alias=AliasChoices("wordsPerSecond", "words_per_second"),
        description="Assumed speaking rate",
    )

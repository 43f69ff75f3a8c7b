"""
Post extraction API route.

This endpoint always answers 200 with a complete record; failures are
reported in the `error` field alongside placeholder values.
"""
import logging
from functools import lru_cache

from fastapi import APIRouter, Depends, Request
from pydantic import ValidationError

from api.models.requests import ExtractionRequest
from api.models.responses import ExtractionResponse
from core.errors import InvalidSourceUrlError
from core.pipeline import ExtractionPipeline, build_pipeline

logger = logging.getLogger(__name__)

router = APIRouter()


@lru_cache(maxsize=1)
def get_pipeline() -> ExtractionPipeline:
    """Pipeline shared by requests; it holds configuration only, no per-request state."""
    return build_pipeline()


@router.post("/extract", response_model=ExtractionResponse, response_model_exclude_none=True)
async def extract(request: Request, pipeline: ExtractionPipeline = Depends(get_pipeline)):
    """
    Extract caption, metrics, video URL and speech transcript from a post.

    The body is parsed by hand so that malformed input gets the same
    200 + `error` response as every other failure instead of a 422.
    """
    try:
        body = await request.json()
    except ValueError:
        logger.warning("Rejected extraction request: body is not valid JSON")
        return ExtractionResponse.from_error("Request body must be valid JSON")

    if not isinstance(body, dict):
        logger.warning("Rejected extraction request: body is not a JSON object")
        return ExtractionResponse.from_error("Request body must be a JSON object")

    try:
        payload = ExtractionRequest.model_validate(body)
    except ValidationError:
        logger.warning("Rejected extraction request: missing sourceUrl")
        return ExtractionResponse.from_error("Instagram link is required (sourceUrl)")

    try:
        result = await pipeline.run(payload.source_url)
    except InvalidSourceUrlError as e:
        logger.info(f"Rejected extraction request: {e}")
        return ExtractionResponse.from_error(str(e))
    except Exception as e:
        logger.exception(f"Extraction failed for {payload.source_url}")
        return ExtractionResponse.from_error(f"Failed to extract data: {e}")

    return ExtractionResponse.from_result(result)

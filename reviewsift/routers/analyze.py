"""
Analyze endpoint — called by the single-page UI and the Python client.

POST /api/analyze
  200  AnalysisResult                  — verdict
  400  {"error": ...}                  — missing or non-string review text
  500  {"error": "API key missing"}    — GEMINI_API_KEY not configured
  500  AnalysisResult (trustScore 0)   — the analysis pipeline failed, or the
                                         body was not a JSON object
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from reviewsift.config import Settings, get_request_settings
from reviewsift.schemas.analysis import AnalysisRequest, ErrorResponse
from reviewsift.services.analyzer import analyze_review

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["analyze"])


def error_response(message: str, status_code: int) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message).model_dump(),
    )


@router.post("/analyze")
async def analyze(
    body: AnalysisRequest,
    settings: Settings = Depends(get_request_settings),
) -> JSONResponse:
    """
    Score one review for authenticity.

    Input problems are rejected before Gemini is called. Everything after that
    point answers with the AnalysisResult shape, success or failure.
    """
    review_text = body.review_text
    logger.info("Analyzing review, length: %s", len(review_text) if review_text else 0)

    if not review_text or not review_text.strip():
        return error_response("Review text required", status.HTTP_400_BAD_REQUEST)

    if not settings.has_api_key:
        logger.error("GEMINI_API_KEY is not configured.")
        return error_response("API key missing", status.HTTP_500_INTERNAL_SERVER_ERROR)

    result, status_code = await analyze_review(
        review_text, body.restaurant_name, settings=settings
    )
    return JSONResponse(status_code=status_code, content=result.to_response())

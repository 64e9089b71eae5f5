"""Pydantic schemas package."""

from reviewsift.schemas.analysis import (
    RESTAURANT_NOT_SPECIFIED,
    SUSPICION_THRESHOLD,
    AnalysisRequest,
    AnalysisResult,
    ErrorResponse,
    display_restaurant,
)

__all__ = [
    "RESTAURANT_NOT_SPECIFIED", "SUSPICION_THRESHOLD",
    "AnalysisRequest", "AnalysisResult", "ErrorResponse",
    "display_restaurant",
]

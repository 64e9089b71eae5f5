"""Pydantic schemas for the review analysis endpoint."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator
from pydantic.alias_generators import to_camel

SUSPICION_THRESHOLD = 70
RESTAURANT_NOT_SPECIFIED = "Not specified"


def display_restaurant(restaurant_name: Optional[str]) -> str:
    """Name echoed back in a verdict; blank or absent names read "Not specified"."""
    if restaurant_name and restaurant_name.strip():
        return restaurant_name
    return RESTAURANT_NOT_SPECIFIED


class AnalysisRequest(BaseModel):
    """
    Body for POST /api/analyze — sent by the UI and the Python client.

    Both fields are optional at the schema level: a missing review is answered
    with a 400 {"error": ...} body by the router, not a 422 validation error.
    Numbers are read as their text; any other non-string value counts as absent.
    """

    review_text: Optional[str] = None
    restaurant_name: Optional[str] = None

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @field_validator("review_text", "restaurant_name", mode="before")
    @classmethod
    def coerce_text(cls, value: Any) -> Optional[str]:
        if isinstance(value, str):
            return value
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return None


class AnalysisResult(BaseModel):
    """
    Authenticity verdict for a single review.

    Returned for successful analyses (200) and for pipeline failures (500),
    which carry trust_score=0 and a fixed remediation reasons list.
    is_suspicious is derived from trust_score and cannot be set directly.
    """

    trust_score: int = Field(..., ge=0, le=100)
    explanation: str
    reasons: list[str] = Field(..., min_length=1)
    restaurant: str

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @computed_field(alias="isSuspicious")  # type: ignore[prop-decorator]
    @property
    def is_suspicious(self) -> bool:
        return self.trust_score < SUSPICION_THRESHOLD

    def to_response(self) -> dict:
        """Return the camelCase JSON body sent over the wire."""
        return self.model_dump(by_alias=True)


class ErrorResponse(BaseModel):
    """Body for rejected requests (missing review) and configuration failures."""

    error: str

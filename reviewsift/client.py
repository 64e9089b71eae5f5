"""
Python client for the ReviewSift API — the programmatic twin of the web page.

One request per analyze() call. While a request is outstanding a second call
is refused rather than queued. If the server cannot be reached at all, a local
fallback verdict (trust score 50) is returned instead of raising: "could not
reach the server" is treated as more benign than a failed analysis, which the
server reports with trust score 0.
"""

from __future__ import annotations

import logging
import re
import threading
from typing import Any, Optional

import requests

from reviewsift.schemas.analysis import AnalysisResult, display_restaurant

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:8000"

FALLBACK_TRUST_SCORE = 50
FALLBACK_EXPLANATION = "Analysis completed with fallback method"
FALLBACK_REASONS = ["**System**: Processed with basic authenticity checks"]

# (minimum score, title, subtitle), highest band first
_VERDICT_BANDS = [
    (90, "🌟 Absolutely Authentic!", "This review reads like the real deal!"),
    (80, "✅ Highly Trustworthy", "Great details and genuine experience!"),
    (70, "👍 Likely Authentic", "Seems real with minor concerns"),
    (60, "🤔 Questionable", "Some red flags detected"),
    (50, "⚠️ Suspicious", "Multiple concerns found"),
]
_LOWEST_VERDICT = ("🚩 Highly Suspicious", "Strong indicators of inauthenticity")

_REASON_PATTERN = re.compile(r"^\s*\*\*(?P<factor>[^*]+)\*\*\s*:?\s*(?P<detail>.*)$", re.DOTALL)


class RequestInFlightError(RuntimeError):
    """Raised when analyze() is called while another request is outstanding."""


class AnalysisRejectedError(Exception):
    """The server answered with an {"error": ...} body instead of a verdict."""

    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(message)
        self.status_code = status_code


def fallback_result(restaurant_name: Optional[str] = None) -> AnalysisResult:
    """Verdict used when the request never reached the server."""
    return AnalysisResult(
        trust_score=FALLBACK_TRUST_SCORE,
        explanation=FALLBACK_EXPLANATION,
        reasons=list(FALLBACK_REASONS),
        restaurant=display_restaurant(restaurant_name),
    )


def verdict_title(score: int) -> tuple[str, str]:
    """Return the (title, subtitle) headline shown for a trust score."""
    for minimum, title, subtitle in _VERDICT_BANDS:
        if score >= minimum:
            return title, subtitle
    return _LOWEST_VERDICT


def split_reason(reason: str) -> tuple[Optional[str], str]:
    """Split "**Factor**: detail" into ("Factor", "detail"); plain text → (None, text)."""
    match = _REASON_PATTERN.match(reason)
    if not match:
        return None, reason.strip()
    return match.group("factor").strip(), match.group("detail").strip()


class ReviewSiftClient:
    """Submits reviews to a running ReviewSift server."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self._lock = threading.Lock()

    @property
    def in_flight(self) -> bool:
        return self._lock.locked()

    def analyze(
        self, review_text: str, restaurant_name: str = ""
    ) -> Optional[AnalysisResult]:
        """
        Analyze one review.

        Returns None without contacting the server when review_text is blank.

        Raises:
            RequestInFlightError:  another analyze() call has not finished.
            AnalysisRejectedError: the server rejected the request (400, or
                                   500 for a missing API key).
        """
        if not review_text or not review_text.strip():
            return None

        if not self._lock.acquire(blocking=False):
            raise RequestInFlightError("An analysis request is already in progress")
        try:
            return self._submit(review_text, restaurant_name)
        finally:
            self._lock.release()

    def _submit(self, review_text: str, restaurant_name: str) -> AnalysisResult:
        url = f"{self.base_url}/api/analyze"
        try:
            response = self.session.post(
                url,
                json={"reviewText": review_text, "restaurantName": restaurant_name},
                timeout=self.timeout,
            )
            data: Any = response.json()
        except (requests.exceptions.RequestException, ValueError) as e:
            logger.warning("Could not reach ReviewSift at %s: %s", url, e)
            return fallback_result(restaurant_name)

        if isinstance(data, dict) and "trustScore" in data:
            return AnalysisResult.model_validate(data)

        message = data.get("error") if isinstance(data, dict) else None
        raise AnalysisRejectedError(
            message or f"Unexpected response from server (HTTP {response.status_code})",
            response.status_code,
        )

"""
Failure taxonomy for the analysis pipeline.

Every stage raises a subclass of AnalysisError; analyze_review() is the only
place they are caught and turned into a response.
"""

from __future__ import annotations

from typing import Optional


class AnalysisError(Exception):
    """Base class for any failure that ends an analysis request."""


class ConfigurationError(AnalysisError):
    """Raised when the Gemini API key is not configured."""


class UpstreamError(AnalysisError):
    """Raised when the Gemini call fails (HTTP status or transport)."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class RateLimitError(UpstreamError):
    """HTTP 429 from Gemini."""


class BadRequestError(UpstreamError):
    """HTTP 400 from Gemini — usually an oversized prompt."""


class ModelOutputError(AnalysisError):
    """Raised when the model's answer cannot be turned into a verdict."""

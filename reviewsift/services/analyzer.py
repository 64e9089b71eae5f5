"""
Analyzer — turns a review into an authenticity verdict.

Pipeline for every request (no shared state between requests):

  build_authenticity_prompt  → bounded prompt from review + restaurant
  call_gemini                → one Gemini call, raw response dict
  extract                    → text path → JSON span → validated, clamped result

analyze_review() is the single boundary where any failure from those stages is
collapsed into the failure-shaped AnalysisResult (trust score 0, HTTP 500).
Field-level anomalies (non-numeric score, missing reasons) are not failures:
they are replaced with defaults.
"""

from __future__ import annotations

import json
import logging
import math
import re
from typing import Any, Optional

from reviewsift.config import Settings, get_request_settings
from reviewsift.schemas.analysis import AnalysisResult, display_restaurant
from reviewsift.services.errors import AnalysisError, ModelOutputError
from reviewsift.services.gemini import call_gemini
from reviewsift.utils.prompts import build_authenticity_prompt

logger = logging.getLogger(__name__)

DEFAULT_TRUST_SCORE = 50
DEFAULT_REASONS = ["Analysis completed by AI"]

FAILURE_TRUST_SCORE = 0
FAILURE_REASONS = [
    "❌ System encountered an error",
    "⚠️ Please try a shorter review",
    "🔧 If problem persists, check API quota",
]

# Greedy: first "{" to the last "}" anywhere in the text, newlines included.
_JSON_SPAN = re.compile(r"\{[\s\S]*\}")


# ── Extraction ────────────────────────────────────────────────────────────────


def extract_model_text(raw: Any) -> str:
    """Return candidates[0].content.parts[0].text or raise ModelOutputError."""
    try:
        text = raw["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        text = None

    if not isinstance(text, str) or not text:
        logger.error("Invalid response structure from Gemini: %s", raw)
        raise ModelOutputError("Invalid response from AI service")
    return text


def find_json_span(text: str) -> Optional[str]:
    """Return the substring from the first '{' to the last '}', if any."""
    match = _JSON_SPAN.search(text)
    return match.group(0) if match else None


def parse_analysis(text: str) -> dict[str, Any]:
    """
    Pull the JSON object out of the model's text and check it is usable.

    A trustScore of 0 is a valid verdict; only a missing or null score counts
    as incomplete. reasons is not required here; normalize_reasons() fills it.
    """
    span = find_json_span(text)
    if span is None:
        logger.error("No JSON in model response. First 200 chars: %s", text[:200])
        raise ModelOutputError("AI did not return valid format")

    try:
        analysis = json.loads(span)
    except json.JSONDecodeError as exc:
        logger.error("JSON parse error: %s", exc)
        raise ModelOutputError("Failed to parse AI response") from exc

    if not isinstance(analysis, dict):
        logger.error("Model JSON is not an object: %r", analysis)
        raise ModelOutputError("Failed to parse AI response")

    if analysis.get("trustScore") is None or not analysis.get("explanation"):
        logger.error("Incomplete analysis from model: keys=%s", list(analysis))
        raise ModelOutputError("Invalid analysis structure from AI")

    return analysis


# ── Normalisation ─────────────────────────────────────────────────────────────


def normalize_score(value: Any) -> int:
    """Coerce the model's score into an int within [0, 100]; non-numbers → 50."""
    if (
        isinstance(value, bool)
        or not isinstance(value, (int, float))
        or (isinstance(value, float) and not math.isfinite(value))
    ):
        logger.warning("Invalid trustScore %r — using default %d", value, DEFAULT_TRUST_SCORE)
        value = DEFAULT_TRUST_SCORE
    return int(round(max(0, min(100, value))))


def normalize_reasons(value: Any) -> list[str]:
    """Keep the model's reasons in order; anything but a non-empty list → default."""
    if not isinstance(value, list) or not value:
        return list(DEFAULT_REASONS)
    return [str(reason) for reason in value]


def build_result(analysis: dict[str, Any], restaurant_name: Optional[str]) -> AnalysisResult:
    return AnalysisResult(
        trust_score=normalize_score(analysis.get("trustScore")),
        explanation=str(analysis.get("explanation")),
        reasons=normalize_reasons(analysis.get("reasons")),
        restaurant=display_restaurant(restaurant_name),
    )


def extract(raw: Any, restaurant_name: Optional[str] = None) -> AnalysisResult:
    """Turn a raw Gemini response into a validated AnalysisResult."""
    text = extract_model_text(raw)
    logger.info("Gemini response received, length: %d", len(text))
    return build_result(parse_analysis(text), restaurant_name)


def failure_result(message: str, restaurant_name: Optional[str] = None) -> AnalysisResult:
    """The terminal verdict returned whenever the pipeline fails."""
    return AnalysisResult(
        trust_score=FAILURE_TRUST_SCORE,
        explanation=f"Analysis failed: {message}",
        reasons=list(FAILURE_REASONS),
        restaurant=display_restaurant(restaurant_name),
    )


# ── Orchestration ─────────────────────────────────────────────────────────────


async def analyze_review(
    review_text: str,
    restaurant_name: Optional[str] = None,
    settings: Optional[Settings] = None,
) -> tuple[AnalysisResult, int]:
    """
    Run prompt → Gemini → extraction for one review.

    Returns (result, http_status). Never raises: every failure becomes
    failure_result(...) with status 500. The caller is expected to have
    rejected an empty review already.
    """
    settings = settings or get_request_settings()

    try:
        prompt = build_authenticity_prompt(
            review_text, restaurant_name, max_chars=settings.review_max_chars
        )
        raw = await call_gemini(prompt, settings)
        result = extract(raw, restaurant_name)
    except AnalysisError as exc:
        logger.error("Analysis failed: %s", exc)
        return failure_result(str(exc), restaurant_name), 500
    except Exception as exc:
        logger.exception("Unexpected error during analysis")
        return failure_result(str(exc), restaurant_name), 500

    logger.info("Analysis successful — score: %d", result.trust_score)
    return result, 200

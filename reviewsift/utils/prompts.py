"""
Prompt template builders for Gemini calls.
All prompt strings live here — no hardcoded prompts elsewhere in the codebase.
"""

from __future__ import annotations

from typing import Optional

REVIEW_MAX_CHARS = 1500
TRUNCATION_MARKER = "... [truncated]"
UNKNOWN_RESTAURANT = "Unknown Restaurant"


def truncate_review(review_text: str, limit: int = REVIEW_MAX_CHARS) -> str:
    """Cut review_text to `limit` characters and append the truncation marker."""
    if len(review_text) <= limit:
        return review_text
    return review_text[:limit] + TRUNCATION_MARKER


# ── Authenticity ─────────────────────────────────────────────────────────────


def build_authenticity_prompt(
    review_text: str,
    restaurant_name: Optional[str] = None,
    max_chars: int = REVIEW_MAX_CHARS,
) -> str:
    """
    Build the prompt for the authenticity verdict.

    The review is interpolated as-is after truncation. The model is asked for
    a single JSON object with trustScore, explanation and reasons; a food
    mismatch with the restaurant type forces a score of 0.
    """
    review = truncate_review(review_text, max_chars)
    restaurant = restaurant_name if restaurant_name and restaurant_name.strip() else UNKNOWN_RESTAURANT

    return f"""Analyze this restaurant review for authenticity:

RESTAURANT: {restaurant}
REVIEW: "{review}"

FACTORS TO ANALYZE:
1. FOOD MATCH: Appropriate food for restaurant type?
2. SPECIFIC DETAILS: Specific dishes, experiences, details
3. AUTHENTIC LANGUAGE: Genuine vs generic/exaggerated
4. EMOTIONAL BALANCE: Reasonable vs overly emotional
5. PERSONAL EXPERIENCE: Actual customer experience

SCORING:
- Food mismatch = 0
- Otherwise score 0-100 based on above factors
- Be critical and analytical

Respond with JSON:
{{
  "trustScore": 0-100,
  "explanation": "Brief summary",
  "reasons": [
    "**Food Match**: Explanation",
    "**Specific Details**: Explanation",
    "**Authentic Language**: Explanation"
  ]
}}"""

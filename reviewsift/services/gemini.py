"""
Gemini service — wraps the Google Generative AI call used for verdicts.

Model : GEMINI_MODEL (default: gemini-2.0-flash)

Exactly one attempt per analysis. There is no fallback model and no retry:
an HTTP or transport failure is classified and raised to the caller.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional

import google.generativeai as genai
from google.api_core import exceptions as google_exceptions

from reviewsift.config import Settings, get_request_settings
from reviewsift.services.errors import (
    BadRequestError,
    ConfigurationError,
    RateLimitError,
    UpstreamError,
)

logger = logging.getLogger(__name__)


def classify_status(status_code: int) -> UpstreamError:
    """Map a non-2xx HTTP status from Gemini onto the matching error."""
    if status_code == 429:
        return RateLimitError(
            "API quota exceeded - please try again later", status_code=status_code
        )
    if status_code == 400:
        return BadRequestError(
            "Invalid request - review might be too long", status_code=status_code
        )
    return UpstreamError(f"API error: {status_code}", status_code=status_code)


def _generation_config(settings: Settings) -> genai.GenerationConfig:
    return genai.GenerationConfig(
        temperature=settings.gemini_temperature,
        max_output_tokens=settings.gemini_max_output_tokens,
        top_p=settings.gemini_top_p,
        top_k=settings.gemini_top_k,
    )


def _generate(prompt: str, settings: Settings) -> dict[str, Any]:
    """Blocking SDK call; returns the raw response rendered as a dict."""
    # REST transport: the key travels with the request, body is
    # {contents: [{parts: [{text}]}], generationConfig: {...}}.
    genai.configure(api_key=settings.gemini_api_key, transport="rest")
    model = genai.GenerativeModel(settings.gemini_model)
    # retry=None: the generated client otherwise retries 503s with backoff.
    response = model.generate_content(
        prompt,
        generation_config=_generation_config(settings),
        request_options={"retry": None},
    )
    return response.to_dict()


async def call_gemini(prompt: str, settings: Optional[Settings] = None) -> dict[str, Any]:
    """
    Send one prompt to Gemini and return the unvalidated response body.

    Raises:
        ConfigurationError: GEMINI_API_KEY is not set (no network call made).
        RateLimitError:     HTTP 429.
        BadRequestError:    HTTP 400.
        UpstreamError:      any other HTTP status or a transport failure.
    """
    settings = settings or get_request_settings()
    if not settings.has_api_key:
        raise ConfigurationError("API key missing")

    logger.info("Calling Gemini API (%s)...", settings.gemini_model)
    logger.debug("Gemini prompt:\n%s", prompt)

    try:
        raw = await asyncio.to_thread(_generate, prompt, settings)
    except google_exceptions.GoogleAPICallError as exc:
        if exc.code is None:
            logger.error("Gemini call failed without a status: %s", exc)
            raise UpstreamError(f"API error: {exc.message}") from exc
        status_code = int(exc.code)
        logger.error("Gemini API error %d: %s", status_code, exc.message)
        raise classify_status(status_code) from exc
    except Exception as exc:
        logger.error("Gemini request failed: %s", exc)
        raise UpstreamError(f"API request failed: {exc}") from exc

    logger.debug("Gemini response:\n%s", raw)
    return raw

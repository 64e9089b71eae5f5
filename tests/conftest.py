"""
Pytest configuration and shared fixtures.

Gemini is never called for real: the service tests mock the SDK, the endpoint
tests mock call_gemini.
"""

import json
from unittest.mock import AsyncMock, patch

import pytest
from fastapi.testclient import TestClient

from reviewsift.config import Settings, get_request_settings
from reviewsift.main import app


def gemini_response(text):
    """Build a raw Gemini response body whose answer text is `text`."""
    return {
        "candidates": [
            {
                "content": {"parts": [{"text": text}], "role": "model"},
                "finish_reason": 1,
            }
        ]
    }


def gemini_json_response(payload, prefix="", suffix=""):
    """Raw Gemini response whose text is `payload` as JSON, optionally wrapped in prose."""
    return gemini_response(f"{prefix}{json.dumps(payload)}{suffix}")


@pytest.fixture
def settings():
    """Settings with a test API key and default generation parameters."""
    return Settings(gemini_api_key="test-api-key", _env_file=None)


@pytest.fixture
def settings_without_key():
    """Settings with no API key configured."""
    return Settings(gemini_api_key=None, _env_file=None)


@pytest.fixture
def genuine_analysis():
    return {
        "trustScore": 85,
        "explanation": "Specific and genuine",
        "reasons": [
            "**Food Match**: appropriate",
            "**Specific Details**: lasagna mentioned",
        ],
    }


@pytest.fixture
def client(settings):
    """TestClient with the Gemini key configured."""
    app.dependency_overrides[get_request_settings] = lambda: settings
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def client_without_key(settings_without_key):
    """TestClient with GEMINI_API_KEY missing."""
    app.dependency_overrides[get_request_settings] = lambda: settings_without_key
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def mock_gemini():
    """Patch the Gemini call used by the analyzer; set .return_value / .side_effect."""
    with patch(
        "reviewsift.services.analyzer.call_gemini", new_callable=AsyncMock
    ) as mocked:
        yield mocked

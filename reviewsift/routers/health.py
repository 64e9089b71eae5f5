"""Health check endpoints — used by load balancers and uptime monitoring."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from reviewsift import __version__
from reviewsift.config import Settings, get_request_settings

router = APIRouter(tags=["health"])


@router.get("/health")
async def health() -> dict:
    """Liveness check: returns 200 if the process is running."""
    return {"status": "ok", "version": __version__}


@router.get("/ready")
async def ready(settings: Settings = Depends(get_request_settings)) -> JSONResponse:
    """
    Readiness check: checks that the Gemini API key is configured.
    Does not call Gemini: every analysis is exactly one upstream request.
    """
    key_ok = settings.has_api_key
    return JSONResponse(
        content={"gemini_api_key": "ok" if key_ok else "missing"},
        status_code=200 if key_ok else 503,
    )

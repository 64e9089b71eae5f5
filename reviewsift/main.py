"""
ReviewSift — FastAPI application entry point.
Lifespan: log startup config → warn if the Gemini key is missing.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from reviewsift import __version__
from reviewsift.config import settings
from reviewsift.routers import analyze, health, ui
from reviewsift.services.analyzer import failure_result

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Application lifespan handler.
    The API key is only checked here for an early warning; requests still
    fail individually while it is missing.
    """
    logger.info("Starting ReviewSift (env=%s, model=%s)", settings.app_env, settings.gemini_model)
    if not settings.has_api_key:
        logger.warning("GEMINI_API_KEY is not set — analysis requests will fail.")

    yield

    logger.info("Shutting down ReviewSift.")


app = FastAPI(
    title="ReviewSift",
    description="Restaurant review authenticity analysis backed by Gemini.",
    version=__version__,
    lifespan=lifespan,
)

# ── CORS ─────────────────────────────────────────────────────────────────────

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ── Routers ──────────────────────────────────────────────────────────────────

app.include_router(health.router)
app.include_router(analyze.router)
app.include_router(ui.router)


# ── Exception handlers ───────────────────────────────────────────────────────

@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """A body that is not a JSON object fails like any other pipeline error."""
    logger.warning("Unreadable request body on %s: %s", request.url.path, exc.errors())
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=failure_result("Invalid request body").to_response(),
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Return a machine-readable error for any unhandled exception."""
    logger.exception("Unhandled exception on %s %s", request.method, request.url)
    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error"},
    )

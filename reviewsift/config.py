"""Application configuration loaded from environment variables."""

from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Centralised settings — no hardcoded values anywhere else."""

    # Google AI. Optional at boot; each analysis request fails without it.
    gemini_api_key: Optional[str] = None
    gemini_model: str = "gemini-2.0-flash"
    gemini_temperature: float = 0.1
    gemini_max_output_tokens: int = 800
    gemini_top_p: float = 0.8
    gemini_top_k: int = 40

    # Prompt
    review_max_chars: int = 1500

    # Security
    allowed_origins: str = "http://localhost:3000,http://localhost:8000"

    # App
    app_env: str = "development"
    log_level: str = "INFO"

    # Derived
    @property
    def allowed_origins_list(self) -> list[str]:
        """Return ALLOWED_ORIGINS as a list."""
        return [o.strip() for o in self.allowed_origins.split(",") if o.strip()]

    @property
    def has_api_key(self) -> bool:
        return bool(self.gemini_api_key and self.gemini_api_key.strip())

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached Settings instance."""
    return Settings()


def get_request_settings() -> Settings:
    """Settings read fresh from the environment, so GEMINI_API_KEY is checked per request."""
    return Settings()


settings = get_settings()

"""
Runtime configuration for the question paper service.

Values come from environment variables. Entry points (paper_api.py, the CLI)
call load_dotenv() first so a local .env file is honoured.
Tests build GenerationSettings directly to pin temperature / truncation.
"""

import os
from functools import lru_cache
from typing import Optional

from pydantic import BaseModel, Field


DEFAULT_MODEL = "gpt-3.5-turbo"
DEFAULT_TEMPERATURE = 0.7
DEFAULT_MAX_SOURCE_CHARS = 8000
DEFAULT_MAX_UPLOAD_SIZE = 10 * 1024 * 1024  # 10MB


class GenerationSettings(BaseModel):
    openai_api_key: str = ""
    model: str = DEFAULT_MODEL
    temperature: float = Field(DEFAULT_TEMPERATURE, ge=0.0, le=2.0)
    max_tokens: Optional[int] = Field(None, ge=1)
    # Study material is cut to this many characters before it goes into a prompt
    max_source_chars: int = Field(DEFAULT_MAX_SOURCE_CHARS, ge=1)
    max_upload_size: int = Field(DEFAULT_MAX_UPLOAD_SIZE, ge=1)
    cors_origins: str = "*"
    port: int = 3001

    @property
    def cors_origin_list(self) -> list:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


def _optional_int(value: Optional[str]) -> Optional[int]:
    return int(value) if value else None


def load_settings() -> GenerationSettings:
    """Build settings from the current environment."""
    return GenerationSettings(
        openai_api_key=os.getenv("OPENAI_API_KEY", ""),
        model=os.getenv("GPT_MODEL", DEFAULT_MODEL),
        temperature=float(os.getenv("GPT_TEMPERATURE", DEFAULT_TEMPERATURE)),
        max_tokens=_optional_int(os.getenv("GPT_MAX_TOKENS")),
        max_source_chars=int(os.getenv("MAX_SOURCE_CHARS", DEFAULT_MAX_SOURCE_CHARS)),
        max_upload_size=int(os.getenv("MAX_UPLOAD_SIZE", DEFAULT_MAX_UPLOAD_SIZE)),
        cors_origins=os.getenv("CORS_ORIGINS", "*"),
        port=int(os.getenv("PORT", 3001)),
    )


@lru_cache()
def get_settings() -> GenerationSettings:
    """Cached settings instance; call get_settings.cache_clear() after env changes."""
    return load_settings()

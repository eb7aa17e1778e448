"""
Configuration for the BigO Lens backend.
"""
from __future__ import annotations

import logging
from functools import lru_cache
from typing import Literal, Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Server
    HOST: str = Field(default="0.0.0.0")
    PORT: int = Field(default=5000)
    DEBUG: bool = Field(default=False)
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(default="INFO")

    # Gemini
    GEMINI_API_KEY: str = Field(
        default="",
        validation_alias=AliasChoices("GEMINI_API_KEY", "GOOGLE_API_KEY"),
    )
    GEMINI_MODEL: str = Field(default="gemini-2.5-flash-lite")
    MAX_TOKENS: int = Field(default=1024)
    TEMPERATURE: float = Field(default=0.2)
    GEMINI_TIMEOUT_SECONDS: Optional[float] = Field(default=None)

    # Analyze endpoint cooldown, process-wide
    ANALYZE_COOLDOWN_MS: int = Field(default=3000, ge=0)

    # Listing
    RECENT_ANALYSES_LIMIT: int = Field(default=10, ge=1)

    # CORS
    ALLOWED_ORIGINS: str = Field(default="http://localhost:5000,http://localhost:5173")

    # Request limits
    MAX_REQUEST_SIZE: int = Field(default=1_048_576)  # 1 MB

    @property
    def api_key_configured(self) -> bool:
        return bool(self.GEMINI_API_KEY.strip())

    @property
    def cooldown_seconds(self) -> float:
        return self.ANALYZE_COOLDOWN_MS / 1000

    @property
    def cors_origins(self) -> list[str]:
        origins = [o.strip() for o in self.ALLOWED_ORIGINS.split(",") if o.strip()]
        if "*" in origins:
            return ["*"]
        return origins


@lru_cache()
def get_settings() -> Settings:
    return Settings()


settings = get_settings()


# Logging setup
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL),
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("google").setLevel(logging.WARNING)

logger = logging.getLogger("bigolens")

"""Configuration for the scoreboard API."""

from __future__ import annotations

import os
from functools import lru_cache

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .config_sports import get_ranked_leagues


class ScoringWeights(BaseModel):
    """Relative weights for the interest score sub-factors."""

    competitiveness: float = Field(default=0.35, ge=0.0)
    prominence: float = Field(default=0.25, ge=0.0)
    timing: float = Field(default=0.25, ge=0.0)
    stakes: float = Field(default=0.15, ge=0.0)
    # Hours from kickoff at which the timing factor halves
    timing_half_life_hours: float = Field(default=24.0, gt=0.0)
    # Share of prominence carried by the national broadcast flag
    broadcast_share: float = Field(default=0.3, ge=0.0, le=1.0)


class Settings(BaseSettings):
    """Environment-driven settings with sensible defaults for local dev."""

    model_config = SettingsConfigDict(
        env_file=os.path.join(os.path.dirname(__file__), "..", ".env"),
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="allow",
    )

    environment: str = Field(default="development", alias="ENVIRONMENT")
    log_level: str | None = Field(default=None, alias="LOG_LEVEL")
    espn_base_url: str = Field(
        default="https://site.api.espn.com/apis/site/v2/sports",
        alias="ESPN_BASE_URL",
    )
    request_timeout_seconds: float = Field(default=10.0, alias="REQUEST_TIMEOUT_SECONDS")
    important_leagues_raw: str | None = Field(default=None, alias="IMPORTANT_LEAGUES")
    allowed_cors_origins_raw: str | None = Field(default=None, alias="ALLOWED_CORS_ORIGINS")
    scoring: ScoringWeights = Field(default_factory=ScoringWeights)

    @property
    def important_leagues(self) -> list[str]:
        """League codes pooled by the important-games endpoint."""
        if not self.important_leagues_raw:
            return get_ranked_leagues()
        return [
            code.strip().upper()
            for code in self.important_leagues_raw.split(",")
            if code.strip()
        ]

    @property
    def allowed_cors_origins(self) -> list[str]:
        """Allow local dev ports for the web UI unless overridden."""
        if self.allowed_cors_origins_raw:
            return [
                origin.strip()
                for origin in self.allowed_cors_origins_raw.split(",")
                if origin.strip()
            ]
        return [
            "http://localhost:3000",
            "http://127.0.0.1:3000",
            "http://localhost:5173",
            "http://127.0.0.1:5173",
        ]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


settings = get_settings()

"""Fail-fast environment validation for the API service."""

from __future__ import annotations

from functools import lru_cache
from urllib.parse import urlparse

from .config import Settings, get_settings
from .config_sports import LEAGUE_CONFIG

ALLOWED_ENVIRONMENTS = {"development", "staging", "production"}


def _validate_environment_value(environment: str) -> None:
    if environment not in ALLOWED_ENVIRONMENTS:
        allowed = ", ".join(sorted(ALLOWED_ENVIRONMENTS))
        raise RuntimeError(f"ENVIRONMENT must be one of: {allowed}.")


def _validate_base_url(name: str, value: str) -> None:
    parsed = urlparse(value)
    if parsed.scheme not in {"http", "https"} or not parsed.hostname:
        raise RuntimeError(f"{name} must be a valid http(s) URL.")


def _validate_important_leagues(codes: list[str]) -> None:
    if not codes:
        raise RuntimeError("IMPORTANT_LEAGUES must name at least one league.")
    unknown = [code for code in codes if code not in LEAGUE_CONFIG]
    if unknown:
        valid = ", ".join(LEAGUE_CONFIG.keys())
        raise RuntimeError(
            f"IMPORTANT_LEAGUES has unknown leagues {unknown}. Valid leagues: {valid}"
        )


def check_settings(settings: Settings) -> None:
    """Validate a settings object, raising RuntimeError on the first problem."""
    _validate_environment_value(settings.environment)
    _validate_base_url("ESPN_BASE_URL", settings.espn_base_url)
    _validate_important_leagues(settings.important_leagues)

    if settings.environment == "production":
        origins = settings.allowed_cors_origins
        if any("localhost" in origin or "127.0.0.1" in origin for origin in origins):
            raise RuntimeError("ALLOWED_CORS_ORIGINS must not include localhost in production.")


@lru_cache(maxsize=1)
def validate_env() -> None:
    """Validate environment-driven settings before the API starts."""
    check_settings(get_settings())

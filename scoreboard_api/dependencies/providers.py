"""Request-scoped providers for the data source and scoring policy."""

from __future__ import annotations

from collections.abc import Iterator

from fastapi import Depends

from ..config import Settings, get_settings
from ..config_sports import LeagueConfig, get_league_config
from ..datasource.base import EventDataSource
from ..datasource.espn import ESPNClient
from ..events.scoring import EventScorer, ScoringPolicy
from ..utils.datetime_utils import now_utc


def get_data_source(settings: Settings = Depends(get_settings)) -> Iterator[EventDataSource]:
    """Open an ESPN client for the duration of one request."""
    client = ESPNClient(
        base_url=settings.espn_base_url,
        timeout=settings.request_timeout_seconds,
    )
    try:
        yield client
    finally:
        client.close()


def get_scoring_policy(settings: Settings = Depends(get_settings)) -> EventScorer:
    """Build the interest policy with the clock resolved once per request."""
    return ScoringPolicy(reference_time=now_utc(), weights=settings.scoring)


def get_important_leagues(settings: Settings = Depends(get_settings)) -> list[LeagueConfig]:
    return [get_league_config(code) for code in settings.important_leagues]

"""Team schedule endpoint."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, Query

from ..config_sports import LeagueConfig, find_league
from ..datasource.base import EventDataSource
from ..dependencies import get_data_source
from ..exceptions import BadRequest
from .responses import team_events_response
from .schemas import ListLayout

logger = logging.getLogger(__name__)

router = APIRouter(tags=["sports"])


def _require(value: str | None, name: str) -> str:
    if value is None or not value.strip():
        raise BadRequest(f"Missing required query parameter '{name}'")
    return value.strip()


def resolve_league(sport: str | None, league: str | None) -> LeagueConfig:
    """Validate the sport/league pair. Raises BadRequest if unknown."""
    try:
        return find_league(_require(sport, "sport"), _require(league, "league"))
    except ValueError as exc:
        raise BadRequest(str(exc)) from exc


def parse_layout(layout: str | None) -> ListLayout:
    if layout is None or not layout.strip():
        return ListLayout.LIST
    try:
        return ListLayout(layout.strip().lower())
    except ValueError as exc:
        raise BadRequest(f"Unknown layout '{layout}'") from exc


@router.get("/sports")
def get_team_events(
    sport: str | None = Query(None),
    league: str | None = Query(None),
    team: str | None = Query(None),
    layout: str | None = Query(None),
    data_source: EventDataSource = Depends(get_data_source),
) -> dict[str, Any]:
    """List a team's events with team metadata."""
    league_config = resolve_league(sport, league)
    team_slug = _require(team, "team")
    list_layout = parse_layout(layout)

    profile = data_source.find_team(league_config, team_slug)
    events = data_source.fetch_team_schedule(league_config, profile)

    logger.info(
        "Team schedule served",
        extra={"league": league_config.code, "team": profile.slug, "events": len(events)},
    )
    return team_events_response(league_config, profile, events, list_layout)

"""Important-games ranking endpoint."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Query

from ..config_sports import LeagueConfig
from ..datasource.base import EventDataSource
from ..dependencies import get_data_source, get_important_leagues, get_scoring_policy
from ..events.scoring import EventScorer
from ..events.selection import select_top
from ..exceptions import BadRequest
from .responses import important_games_response

router = APIRouter(tags=["important"])


def parse_count(count: str | None) -> int:
    """Parse the requested number of games. Must be a positive integer."""
    if count is None or not count.strip():
        raise BadRequest("Missing required query parameter 'count'")
    text = count.strip()
    if not (text.isascii() and text.isdigit()):
        raise BadRequest(f"count must be a positive integer, got '{count}'")
    value = int(text)
    if value <= 0:
        raise BadRequest("count must be positive")
    return value


@router.get("/important")
def get_important_games(
    count: str | None = Query(None),
    data_source: EventDataSource = Depends(get_data_source),
    scorer: EventScorer = Depends(get_scoring_policy),
    leagues: list[LeagueConfig] = Depends(get_important_leagues),
) -> dict[str, Any]:
    """Return the ``count`` most interesting events across pooled leagues."""
    requested = parse_count(count)
    events = data_source.fetch_league_events(leagues)
    ranked = select_top(events, requested, scorer)
    return important_games_response(ranked)

"""Response assembly for the sports and important-games endpoints.

Every builder returns a fresh dict per call. Insertion order is the wire
order, so ``result`` always comes first and ranked games keep their
``game0``, ``game1``, ... sequence.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from ..config_sports import LeagueConfig
from ..events.models import Event, TeamProfile
from ..events.nuggets import generate_nugget
from ..events.selection import ScoredEvent
from ..exceptions import BadRequest, ScoreboardError
from .schemas import EventSummary, ListLayout, RankedEventSummary, ResultCode

SCORE_DECIMALS = 2


def _summary_fields(event: Event) -> dict[str, Any]:
    return {
        "id": event.event_id,
        "name": event.name,
        "gameName": event.name,
        "shortName": event.short_name,
        "homeTeamName": event.home_team,
        "awayTeamName": event.away_team,
        "homeScore": event.home_score,
        "awayScore": event.away_score,
        "date": event.start_time.isoformat(),
        "sport": event.sport,
        "league": event.league,
        "status": event.status.value,
    }


def event_summary(event: Event) -> dict[str, Any]:
    """Serialize one event for a team schedule."""
    return EventSummary(**_summary_fields(event)).model_dump()


def ranked_event_summary(scored: ScoredEvent) -> dict[str, Any]:
    """Serialize one ranked event with its interest score and nugget."""
    return RankedEventSummary(
        **_summary_fields(scored.event),
        interestScore=round(scored.score, SCORE_DECIMALS),
        nugget=generate_nugget(scored),
    ).model_dump()


def _numbered(items: Sequence[dict[str, Any]]) -> dict[str, dict[str, Any]]:
    return {f"game{index}": item for index, item in enumerate(items)}


def team_events_response(
    league: LeagueConfig,
    team: TeamProfile,
    events: Sequence[Event],
    layout: ListLayout = ListLayout.LIST,
) -> dict[str, Any]:
    """Render a team's schedule, preserving upstream order."""
    response: dict[str, Any] = {
        "result": ResultCode.SUCCESS.value,
        "displayName": team.display_name,
        "abbreviation": team.abbreviation,
        "logo": team.logo,
        "color": team.color,
        "sport": league.sport,
        "league": league.code,
    }
    summaries = [event_summary(event) for event in events]
    if layout == ListLayout.NUMBERED:
        response.update(_numbered(summaries))
    else:
        response["eventList"] = summaries
    return response


def important_games_response(ranked: Sequence[ScoredEvent]) -> dict[str, Any]:
    """Render ranked events as game0..gameN in descending score order."""
    response: dict[str, Any] = {"result": ResultCode.SUCCESS.value}
    response.update(_numbered([ranked_event_summary(scored) for scored in ranked]))
    return response


def result_code_for(exc: ScoreboardError) -> ResultCode:
    if isinstance(exc, BadRequest):
        return ResultCode.BAD_REQUEST
    return ResultCode.DATASOURCE


def error_response(code: ResultCode, message: str | None = None) -> dict[str, Any]:
    response: dict[str, Any] = {"result": code.value}
    if message:
        response["message"] = message
    return response

"""Normalize raw ESPN payloads into Event/TeamProfile models.

ESPN serves two event shapes: the league scoreboard (string scores,
``records[].summary``) and the team schedule (``score.value`` objects,
``record[].displayValue``). Both are accepted here.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from typing import Any

from ..config_sports import LeagueConfig
from ..events.models import Event, EventStatus, TeamProfile
from ..exceptions import EventNormalizationError
from ..utils.datetime_utils import parse_iso_datetime
from ..utils.parsing import as_dict, first_dict, iter_dicts, parse_int, parse_record

logger = logging.getLogger(__name__)

POSTSEASON_TYPE = 3

NATIONAL_NETWORKS = frozenset(
    {
        "ABC",
        "CBS",
        "ESPN",
        "ESPN2",
        "FOX",
        "FS1",
        "NBC",
        "TNT",
        "TBS",
        "NBA TV",
        "NFL NET",
        "MLB NET",
        "NHL NET",
        "PRIME VIDEO",
        "PEACOCK",
    }
)

STATUS_MAP: dict[str, EventStatus] = {
    "pre": EventStatus.SCHEDULED,
    "in": EventStatus.IN_PROGRESS,
    "post": EventStatus.FINAL,
}


def slugify(value: str) -> str:
    """Lowercase, hyphen-separated slug ("Boston Celtics" -> "boston-celtics")."""
    return re.sub(r"[^a-z0-9]+", "-", value.lower()).strip("-")


def _competitors(competition: dict[str, Any]) -> tuple[dict[str, Any], dict[str, Any]]:
    home: dict[str, Any] | None = None
    away: dict[str, Any] | None = None
    for competitor in iter_dicts(competition.get("competitors")):
        side = competitor.get("homeAway")
        if side == "home":
            home = competitor
        elif side == "away":
            away = competitor
    if home is None or away is None:
        raise EventNormalizationError("event is missing home/away competitors")
    return home, away


def _team_name(competitor: dict[str, Any]) -> str | None:
    team = as_dict(competitor.get("team"))
    name = team.get("displayName") or team.get("name")
    return name if isinstance(name, str) else None


def _score(competitor: dict[str, Any]) -> int | None:
    score = competitor.get("score")
    if isinstance(score, dict):
        return parse_int(score.get("value", score.get("displayValue")))
    return parse_int(score)


def _win_pct(competitor: dict[str, Any]) -> float | None:
    records = competitor.get("records") or competitor.get("record")
    if not isinstance(records, list):
        return None
    chosen = next(
        (entry for entry in iter_dicts(records) if entry.get("type") in ("total", "overall")),
        first_dict(records),
    )
    if chosen is None:
        return None
    return parse_record(chosen.get("summary") or chosen.get("displayValue"))


def _status(raw: dict[str, Any], competition: dict[str, Any]) -> EventStatus:
    status = as_dict(competition.get("status")) or as_dict(raw.get("status"))
    state = as_dict(status.get("type")).get("state")
    if not isinstance(state, str):
        return EventStatus.SCHEDULED
    return STATUS_MAP.get(state, EventStatus.SCHEDULED)


def _is_national_broadcast(competition: dict[str, Any]) -> bool:
    for broadcast in iter_dicts(competition.get("broadcasts")):
        market = broadcast.get("market")
        if isinstance(market, dict):
            market = market.get("type")
        if isinstance(market, str) and market.lower() == "national":
            return True
        names = broadcast.get("names")
        names = list(names) if isinstance(names, list) else []
        names.append(as_dict(broadcast.get("media")).get("shortName"))
        if any(isinstance(name, str) and name.upper() in NATIONAL_NETWORKS for name in names):
            return True
    return False


def _is_postseason(raw: dict[str, Any]) -> bool:
    for key in ("seasonType", "season"):
        season = raw.get(key)
        if isinstance(season, dict) and parse_int(season.get("type")) == POSTSEASON_TYPE:
            return True
    return False


def normalize_event(raw: dict[str, Any], league: LeagueConfig) -> Event:
    """Convert one ESPN event into an Event.

    Raises:
        EventNormalizationError: if required fields (teams, start time) are missing.
    """
    if not isinstance(raw, dict):
        raise EventNormalizationError("event payload must be an object")
    competition = first_dict(raw.get("competitions")) or {}
    home, away = _competitors(competition)
    status = _status(raw, competition)
    has_started = status != EventStatus.SCHEDULED

    return Event.build(
        event_id=str(raw.get("id") or ""),
        home_team=_team_name(home),
        away_team=_team_name(away),
        start_time=parse_iso_datetime(raw.get("date") or competition.get("date")),
        sport=league.sport,
        league=league.code,
        home_score=_score(home) if has_started else None,
        away_score=_score(away) if has_started else None,
        short_name=raw.get("shortName"),
        status=status,
        home_win_pct=_win_pct(home),
        away_win_pct=_win_pct(away),
        national_broadcast=_is_national_broadcast(competition),
        postseason=_is_postseason(raw),
        conference_game=bool(competition.get("conferenceCompetition")),
        neutral_site=bool(competition.get("neutralSite")),
    )


def normalize_events(raw_events: Iterable[Any], league: LeagueConfig) -> list[Event]:
    """Normalize a batch, dropping malformed events and duplicate identifiers."""
    events: list[Event] = []
    seen: set[str] = set()
    for raw in raw_events:
        try:
            event = normalize_event(raw, league)
        except (EventNormalizationError, TypeError, AttributeError) as exc:
            # Unexpected nesting in one event must not fail the whole batch
            logger.warning(
                "Skipping malformed event",
                extra={"league": league.code, "error": f"{type(exc).__name__}: {exc}"},
            )
            continue
        if event.event_id in seen:
            logger.warning(
                "Skipping duplicate event",
                extra={"league": league.code, "event_id": event.event_id},
            )
            continue
        seen.add(event.event_id)
        events.append(event)
    return events


def normalize_team(raw: dict[str, Any]) -> TeamProfile:
    """Convert an ESPN team object into a TeamProfile.

    Raises:
        EventNormalizationError: if the id or display name is missing or
            any field has the wrong type.
    """
    if not isinstance(raw, dict):
        raise EventNormalizationError("team payload must be an object")
    team_id = raw.get("id")
    display_name = raw.get("displayName") or raw.get("name")
    if not team_id or not isinstance(display_name, str) or not display_name.strip():
        raise EventNormalizationError("team is missing id or displayName")
    logo = raw.get("logo")
    if not logo:
        logo = as_dict(first_dict(raw.get("logos"))).get("href")
    slug = raw.get("slug")
    if not isinstance(slug, str) or not slug.strip():
        slug = slugify(display_name)
    return TeamProfile.build(
        team_id=str(team_id),
        slug=slug,
        display_name=display_name,
        abbreviation=raw.get("abbreviation"),
        logo=logo,
        color=raw.get("color"),
    )

"""ESPN site API client.

Uses the public site API: https://site.api.espn.com/apis/site/v2/sports
- /{sport}/{league}/teams                 team catalogue (slug, logo, color)
- /{sport}/{league}/teams/{id}/schedule   one team's season schedule
- /{sport}/{league}/scoreboard            current slate for a league
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

import httpx

from ..config_sports import LeagueConfig
from ..events.models import Event, TeamProfile
from ..exceptions import BadRequest, DataSourceUnavailable, EventNormalizationError
from ..utils.parsing import iter_dicts
from .normalize import normalize_events, normalize_team, slugify

logger = logging.getLogger(__name__)

USER_AGENT = "scoreboard-api/1.0"
TEAM_LIST_LIMIT = 1000


def _truncate_body(body: str | None, limit: int = 200) -> str | None:
    if not body:
        return None
    if len(body) <= limit:
        return body
    return f"{body[:limit]}..."


class ESPNClient:
    """Synchronous ESPN client; one instance per request."""

    def __init__(
        self,
        base_url: str,
        timeout: float,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.client = httpx.Client(
            base_url=base_url,
            timeout=timeout,
            headers={"User-Agent": USER_AGENT},
            transport=transport,
        )

    def close(self) -> None:
        self.client.close()

    def __enter__(self) -> ESPNClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # -------------------------------------------------------------------------
    # HTTP helpers
    # -------------------------------------------------------------------------
    def _get_json(self, path: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        try:
            response = self.client.get(path, params=params)
        except httpx.HTTPError as exc:
            logger.warning("ESPN request failed", extra={"path": path, "error": str(exc)})
            raise DataSourceUnavailable(f"ESPN request to {path} failed") from exc

        if response.status_code != 200:
            logger.warning(
                "ESPN returned an error status",
                extra={
                    "path": path,
                    "status": response.status_code,
                    "body": _truncate_body(response.text),
                },
            )
            raise DataSourceUnavailable(
                f"ESPN request to {path} returned HTTP {response.status_code}"
            )

        try:
            payload = response.json()
        except ValueError as exc:
            raise DataSourceUnavailable(f"ESPN response for {path} is not JSON") from exc
        if not isinstance(payload, dict):
            raise DataSourceUnavailable(f"ESPN response for {path} is not an object")
        return payload

    @staticmethod
    def _league_path(league: LeagueConfig) -> str:
        return f"/{league.sport}/{league.league}"

    # -------------------------------------------------------------------------
    # Teams
    # -------------------------------------------------------------------------
    def fetch_teams(self, league: LeagueConfig) -> list[TeamProfile]:
        """Fetch the team catalogue for a league."""
        payload = self._get_json(
            f"{self._league_path(league)}/teams", params={"limit": TEAM_LIST_LIMIT}
        )
        teams: list[TeamProfile] = []
        for sport in iter_dicts(payload.get("sports")):
            for league_entry in iter_dicts(sport.get("leagues")):
                for entry in iter_dicts(league_entry.get("teams")):
                    raw_team = entry.get("team")
                    if not isinstance(raw_team, dict):
                        continue
                    try:
                        teams.append(normalize_team(raw_team))
                    except EventNormalizationError as exc:
                        logger.warning(
                            "Skipping malformed team",
                            extra={"league": league.code, "error": str(exc)},
                        )
        if not teams:
            raise DataSourceUnavailable(f"ESPN returned no teams for {league.code}")
        return teams

    def find_team(self, league: LeagueConfig, team_slug: str) -> TeamProfile:
        """Resolve a team slug ("boston-celtics") or abbreviation ("BOS")."""
        wanted = team_slug.strip().lower()
        for team in self.fetch_teams(league):
            candidates = {team.slug.lower(), slugify(team.display_name)}
            if team.abbreviation:
                candidates.add(team.abbreviation.lower())
            if wanted in candidates:
                return team
        raise BadRequest(f"Unknown team '{team_slug}' for {league.code}")

    # -------------------------------------------------------------------------
    # Events
    # -------------------------------------------------------------------------
    def _events_from_payload(
        self, payload: dict[str, Any], league: LeagueConfig, source: str
    ) -> list[Event]:
        raw_events = payload.get("events")
        if not isinstance(raw_events, list):
            raise DataSourceUnavailable(f"ESPN {source} payload has no events list")
        events = normalize_events(raw_events, league)
        if raw_events and not events:
            raise DataSourceUnavailable(f"ESPN {source} payload had no usable events")
        return events

    def fetch_team_schedule(self, league: LeagueConfig, team: TeamProfile) -> list[Event]:
        """Fetch and normalize one team's schedule, in upstream order."""
        payload = self._get_json(f"{self._league_path(league)}/teams/{team.team_id}/schedule")
        events = self._events_from_payload(payload, league, "schedule")
        logger.info(
            "Fetched team schedule",
            extra={"league": league.code, "team": team.slug, "events": len(events)},
        )
        return events

    def fetch_scoreboard(self, league: LeagueConfig) -> list[Event]:
        """Fetch and normalize the current scoreboard for one league."""
        payload = self._get_json(f"{self._league_path(league)}/scoreboard")
        return self._events_from_payload(payload, league, "scoreboard")

    def fetch_league_events(self, leagues: Sequence[LeagueConfig]) -> list[Event]:
        """Pool scoreboards across leagues, skipping leagues that fail."""
        events: list[Event] = []
        failed: list[str] = []
        for league in leagues:
            try:
                events.extend(self.fetch_scoreboard(league))
            except DataSourceUnavailable as exc:
                failed.append(league.code)
                logger.warning(
                    "Skipping league scoreboard",
                    extra={"league": league.code, "error": str(exc)},
                )
        logger.info(
            "Pooled league scoreboards",
            extra={
                "leagues": [league.code for league in leagues],
                "failed": failed,
                "events": len(events),
            },
        )
        return events

"""Data source contract consumed by the routers."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from ..config_sports import LeagueConfig
from ..events.models import Event, TeamProfile


class EventDataSource(Protocol):
    """Supplies normalized events per team or per league.

    Implementations raise ``BadRequest`` for unknown teams and
    ``DataSourceUnavailable`` when the provider cannot be reached or
    returns nothing usable.
    """

    def find_team(self, league: LeagueConfig, team_slug: str) -> TeamProfile: ...

    def fetch_team_schedule(self, league: LeagueConfig, team: TeamProfile) -> list[Event]: ...

    def fetch_league_events(self, leagues: Sequence[LeagueConfig]) -> list[Event]: ...

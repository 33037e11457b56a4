"""pytest configuration and fixtures."""

from __future__ import annotations

import json
import os
from collections.abc import Callable
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import httpx
import pytest

# Set required environment variables for testing before any imports
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("ESPN_BASE_URL", "https://espn.test/sports")

from scoreboard_api.events.models import Event, EventStatus  # noqa: E402
from scoreboard_api.events.scoring import ScoringPolicy  # noqa: E402

FIXTURES_DIR = Path(__file__).resolve().parent / "fixtures"
BASE_URL = "https://espn.test/sports"
REFERENCE_TIME = datetime(2024, 3, 10, 20, 0, tzinfo=timezone.utc)

DEFAULT_ROUTES: dict[str, str] = {
    "/sports/basketball/nba/teams": "nba_teams.json",
    "/sports/basketball/nba/teams/2/schedule": "celtics_schedule.json",
    "/sports/basketball/nba/scoreboard": "nba_scoreboard.json",
    "/sports/hockey/nhl/scoreboard": "nhl_scoreboard.json",
}


def load_fixture(name: str) -> dict[str, Any]:
    return json.loads((FIXTURES_DIR / name).read_text(encoding="utf-8"))


@pytest.fixture
def fixture_payload() -> Callable[[str], dict[str, Any]]:
    return load_fixture


@pytest.fixture
def espn_transport() -> Callable[..., httpx.MockTransport]:
    """Build a mock ESPN transport.

    ``routes`` maps request paths to fixture file names, payloads, integer
    status codes or exceptions to raise. Unknown paths return 404.
    """

    def _build(routes: dict[str, Any] | None = None) -> httpx.MockTransport:
        table: dict[str, Any] = dict(DEFAULT_ROUTES)
        if routes:
            table.update(routes)

        def handler(request: httpx.Request) -> httpx.Response:
            target = table.get(request.url.path)
            if target is None:
                return httpx.Response(404, json={"code": 404, "message": "Not Found"})
            if isinstance(target, int):
                return httpx.Response(target, text="upstream error")
            if isinstance(target, Exception):
                raise target
            if isinstance(target, str):
                return httpx.Response(200, json=load_fixture(target))
            return httpx.Response(200, json=target)

        return httpx.MockTransport(handler)

    return _build


@pytest.fixture
def policy() -> ScoringPolicy:
    return ScoringPolicy(reference_time=REFERENCE_TIME)


@pytest.fixture
def make_event() -> Callable[..., Event]:
    """Create an Event with sensible defaults."""

    def _make(**kwargs: Any) -> Event:
        defaults: dict[str, Any] = {
            "event_id": "evt-1",
            "home_team": "Boston Celtics",
            "away_team": "Philadelphia 76ers",
            "start_time": REFERENCE_TIME,
            "sport": "basketball",
            "league": "NBA",
            "status": EventStatus.SCHEDULED,
        }
        defaults.update(kwargs)
        return Event(**defaults)

    return _make

"""Integration tests for the sports and important-games endpoints."""

from __future__ import annotations

import copy
from collections.abc import Iterator
from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from scoreboard_api.config_sports import get_league_config
from scoreboard_api.datasource.espn import ESPNClient
from scoreboard_api.dependencies import (
    get_data_source,
    get_important_leagues,
    get_scoring_policy,
)
from scoreboard_api.events.scoring import ScoringPolicy
from scoreboard_api.exceptions import BadRequest
from scoreboard_api.main import app
from scoreboard_api.routers.important import parse_count

BASE_URL = "https://espn.test/sports"
REFERENCE_TIME = datetime(2024, 3, 10, 20, 0, tzinfo=timezone.utc)


class _RecordingDataSource:
    """Data source that records calls and never returns events."""

    def __init__(self) -> None:
        self.calls: list[str] = []

    def find_team(self, league, slug):
        self.calls.append("find_team")
        raise AssertionError("find_team should not be called")

    def fetch_team_schedule(self, league, team):
        self.calls.append("fetch_team_schedule")
        return []

    def fetch_league_events(self, leagues):
        self.calls.append("fetch_league_events")
        return []


@pytest.fixture
def upstream() -> dict:
    """Route overrides for the mocked ESPN upstream, editable per test."""
    return {}


@pytest.fixture
def client(espn_transport, upstream):
    """TestClient wired to a mocked ESPN upstream."""

    def override_data_source() -> Iterator[ESPNClient]:
        source = ESPNClient(BASE_URL, timeout=5.0, transport=espn_transport(upstream))
        try:
            yield source
        finally:
            source.close()

    app.dependency_overrides[get_data_source] = override_data_source
    app.dependency_overrides[get_scoring_policy] = lambda: ScoringPolicy(
        reference_time=REFERENCE_TIME
    )
    app.dependency_overrides[get_important_leagues] = lambda: [
        get_league_config("NBA"),
        get_league_config("NHL"),
    ]

    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def recording_client():
    source = _RecordingDataSource()
    app.dependency_overrides[get_data_source] = lambda: source
    app.dependency_overrides[get_scoring_policy] = lambda: ScoringPolicy(
        reference_time=REFERENCE_TIME
    )
    app.dependency_overrides[get_important_leagues] = lambda: [get_league_config("NBA")]
    yield TestClient(app), source
    app.dependency_overrides.clear()


class TestSportsEndpoint:
    def test_team_schedule(self, client):
        response = client.get(
            "/sports", params={"sport": "basketball", "league": "nba", "team": "boston-celtics"}
        )

        assert response.status_code == 200
        body = response.json()
        assert body["result"] == "success"
        assert body["displayName"] == "Boston Celtics"
        assert body["abbreviation"] == "BOS"
        assert body["color"] == "008348"
        assert body["sport"] == "basketball"
        assert body["league"] == "NBA"

        events = body["eventList"]
        assert len(events) == 3
        assert events[0]["name"] == "Philadelphia 76ers at Boston Celtics"
        assert events[0]["homeScore"] == 117
        assert events[1]["homeTeamName"] == "Miami Heat"
        assert events[2]["status"] == "scheduled"
        assert list(body)[0] == "result"

    def test_numbered_layout(self, client):
        response = client.get(
            "/sports",
            params={
                "sport": "basketball",
                "league": "NBA",
                "team": "bos",
                "layout": "numbered",
            },
        )
        body = response.json()
        assert body["result"] == "success"
        assert "eventList" not in body
        assert body["game0"]["id"] == "401584701"
        assert body["game2"]["id"] == "401584750"
        assert "game3" not in body

    @pytest.mark.parametrize(
        "params",
        [
            {"sport": "quidditch", "league": "nhl", "team": "boston-bruins"},
            {"sport": "hockey", "league": "canadianhockey", "team": "boston-bruins"},
            {"sport": "basketball", "league": "nba", "team": "springfield-atoms"},
            {"sport": "basketball", "league": "nba"},
            {"league": "nba", "team": "boston-celtics"},
            {"sport": "basketball", "league": "nba", "team": "boston-celtics", "layout": "grid"},
            {},
        ],
    )
    def test_bad_requests(self, client, params):
        response = client.get("/sports", params=params)
        assert response.status_code == 200
        assert response.json()["result"] == "error_bad_request"

    def test_unknown_league_never_reaches_upstream(self, recording_client):
        test_client, source = recording_client
        response = test_client.get(
            "/sports", params={"sport": "quidditch", "league": "nhl", "team": "x"}
        )
        assert response.json()["result"] == "error_bad_request"
        assert source.calls == []

    def test_upstream_failure(self, client, upstream):
        upstream.update({"/sports/basketball/nba/teams": 500})
        response = client.get(
            "/sports", params={"sport": "basketball", "league": "nba", "team": "boston-celtics"}
        )
        assert response.status_code == 200
        assert response.json()["result"] == "error_datasource"

    def test_schedule_failure(self, client, upstream):
        upstream.update({"/sports/basketball/nba/teams/2/schedule": 502})
        response = client.get(
            "/sports", params={"sport": "basketball", "league": "nba", "team": "boston-celtics"}
        )
        assert response.json()["result"] == "error_datasource"


class TestImportantEndpoint:
    def test_top_five(self, client):
        response = client.get("/important", params={"count": "5"})

        assert response.status_code == 200
        body = response.json()
        assert body["result"] == "success"
        assert [key for key in body if key != "result"] == [f"game{i}" for i in range(5)]
        assert body["game0"]["id"] == "nhl-1"
        assert body["game1"]["id"] == "nba-1"
        assert body["game4"]["id"] == "nhl-3"
        assert {body["game2"]["id"], body["game3"]["id"]} == {"nhl-2", "nba-2"}

        scores = [body[f"game{i}"]["interestScore"] for i in range(5)]
        assert scores == sorted(scores, reverse=True)
        assert all(0 <= score <= 100 for score in scores)
        assert all(body[f"game{i}"]["nugget"] for i in range(5))

    def test_count_larger_than_pool(self, client):
        body = client.get("/important", params={"count": "50"}).json()
        assert body["result"] == "success"
        assert len(body) == 1 + 6
        assert body["game5"]["id"] == "nba-3"

    def test_failed_league_is_skipped(self, client, upstream):
        upstream.update({"/sports/basketball/nba/scoreboard": 500})
        body = client.get("/important", params={"count": "2"}).json()
        assert body["result"] == "success"
        assert body["game0"]["league"] == "NHL"
        assert body["game1"]["league"] == "NHL"

    def test_all_leagues_failed(self, client, upstream):
        upstream.update(
            {
                "/sports/basketball/nba/scoreboard": 500,
                "/sports/hockey/nhl/scoreboard": 503,
            }
        )
        response = client.get("/important", params={"count": "3"})
        assert response.status_code == 200
        assert response.json()["result"] == "error_datasource"

    @pytest.mark.parametrize("count", ["abc", "-1", "0", "2.5", "", "+5", "1_000", "\u0665"])
    def test_invalid_count(self, recording_client, count):
        test_client, source = recording_client
        response = test_client.get("/important", params={"count": count})
        assert response.status_code == 200
        assert response.json()["result"] == "error_bad_request"
        assert source.calls == []

    def test_missing_count(self, recording_client):
        test_client, source = recording_client
        assert test_client.get("/important").json()["result"] == "error_bad_request"
        assert source.calls == []

    def test_empty_pool_is_datasource_error(self, recording_client):
        test_client, source = recording_client
        body = test_client.get("/important", params={"count": "3"}).json()
        assert body["result"] == "error_datasource"
        assert source.calls == ["fetch_league_events"]


class TestAppSurface:
    def test_healthz(self, client):
        response = client.get("/healthz")
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

    def test_unknown_route(self, client):
        response = client.get("/scores")
        assert response.status_code == 404
        assert response.json() == {"result": "error_not_found"}


class TestMalformedUpstream:
    def test_wrongly_nested_events_are_dropped(self, client, upstream, fixture_payload):
        payload = copy.deepcopy(fixture_payload("nba_scoreboard.json"))
        string_status = copy.deepcopy(payload["events"][0])
        string_status["id"] = "nba-9"
        string_status["competitions"][0]["status"] = {"type": "STATUS_FINAL"}
        string_team = copy.deepcopy(payload["events"][0])
        string_team["id"] = "nba-10"
        string_team["competitions"][0]["competitors"][0]["team"] = "Celtics"
        payload["events"].extend([string_status, string_team, "garbage"])
        upstream.update({"/sports/basketball/nba/scoreboard": payload})

        response = client.get("/important", params={"count": "50"})

        assert response.status_code == 200
        body = response.json()
        assert body["result"] == "success"
        ids = {game["id"] for key, game in body.items() if key != "result"}
        assert "nba-9" in ids
        assert "nba-10" not in ids
        assert len(ids) == 7

    def test_wrongly_nested_team_catalogue(self, client, upstream, fixture_payload):
        payload = copy.deepcopy(fixture_payload("nba_teams.json"))
        payload["sports"].insert(0, "basketball")
        league = payload["sports"][1]["leagues"][0]
        league["teams"].insert(0, "celtics")
        league["teams"].append({"team": {"id": "99", "displayName": "Bad", "slug": 99, "color": 1}})
        upstream.update({"/sports/basketball/nba/teams": payload})

        response = client.get(
            "/sports", params={"sport": "basketball", "league": "nba", "team": "boston-celtics"}
        )

        assert response.status_code == 200
        assert response.json()["result"] == "success"

    def test_unusable_team_catalogue_is_datasource_error(self, client, upstream):
        upstream.update({"/sports/basketball/nba/teams": {"sports": ["basketball", 7]}})
        response = client.get(
            "/sports", params={"sport": "basketball", "league": "nba", "team": "boston-celtics"}
        )
        assert response.status_code == 200
        assert response.json()["result"] == "error_datasource"

    def test_wrongly_nested_schedule_event(self, client, upstream, fixture_payload):
        payload = copy.deepcopy(fixture_payload("celtics_schedule.json"))
        payload["events"][1]["competitions"][0]["competitors"] = "BOS vs MIA"
        upstream.update({"/sports/basketball/nba/teams/2/schedule": payload})

        body = client.get(
            "/sports", params={"sport": "basketball", "league": "nba", "team": "boston-celtics"}
        ).json()

        assert body["result"] == "success"
        assert [event["id"] for event in body["eventList"]] == ["401584701", "401584750"]


class TestParseCount:
    @pytest.mark.parametrize(("raw", "expected"), [("5", 5), (" 12 ", 12), ("007", 7)])
    def test_accepts_plain_digits(self, raw, expected):
        assert parse_count(raw) == expected

    @pytest.mark.parametrize("raw", ["+5", "1_000", "1e3", "-0", "\u0665"])
    def test_rejects_other_integer_spellings(self, raw):
        with pytest.raises(BadRequest):
            parse_count(raw)

from __future__ import annotations

import argparse
import json
import logging

import uvicorn

from .config import settings
from .config_sports import get_league_config
from .datasource.espn import ESPNClient
from .events.scoring import ScoringPolicy
from .events.selection import select_top
from .exceptions import ScoreboardError
from .logging_config import configure_logging
from .routers.important import parse_count
from .routers.responses import error_response, important_games_response, result_code_for
from .utils.datetime_utils import now_utc

logger = logging.getLogger(__name__)


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Sports schedule and important-games API.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve = subparsers.add_parser("serve", help="Run the HTTP API.")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8000)

    rank = subparsers.add_parser("rank", help="Print the most interesting events as JSON.")
    rank.add_argument("--count", default="5", help="Number of events to print.")
    rank.add_argument(
        "--league",
        action="append",
        dest="leagues",
        help="League code to pool (repeatable). Defaults to IMPORTANT_LEAGUES.",
    )
    return parser.parse_args(argv)


def _rank(count: str, league_codes: list[str]) -> dict:
    requested = parse_count(count)
    leagues = [get_league_config(code) for code in league_codes]
    policy = ScoringPolicy(reference_time=now_utc(), weights=settings.scoring)
    with ESPNClient(settings.espn_base_url, settings.request_timeout_seconds) as client:
        events = client.fetch_league_events(leagues)
    return important_games_response(select_top(events, requested, policy))


def main(argv: list[str] | None = None) -> None:
    configure_logging(
        service="scoreboard-api-cli",
        environment=settings.environment,
        log_level=settings.log_level,
    )
    args = _parse_args(argv)

    if args.command == "serve":
        uvicorn.run("scoreboard_api.main:app", host=args.host, port=args.port)
        return

    try:
        payload = _rank(args.count, args.leagues or settings.important_leagues)
    except ValueError as exc:
        logger.error("rank_cli_failed", extra={"error": str(exc)})
        raise SystemExit(2) from exc
    except ScoreboardError as exc:
        payload = error_response(result_code_for(exc), str(exc))
        print(json.dumps(payload, indent=2))
        raise SystemExit(1) from exc
    print(json.dumps(payload, indent=2))


if __name__ == "__main__":
    main()

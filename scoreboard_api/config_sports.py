"""
Single Source of Truth (SSOT) for supported sports/leagues.

Request validation, the ESPN client and the scoring policy all reference
this configuration. Never hardcode league strings elsewhere.

To add a new league:
1. Add an entry to LEAGUE_CONFIG with its ESPN path segments
2. Schedules and ranking pick it up with no other code changes
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class LeagueConfig:
    """Configuration for a single league/sport."""

    code: str  # "NBA", "NHL", "NFL"
    display_name: str  # "NBA Basketball"
    sport: str  # ESPN sport path segment, "basketball"
    league: str  # ESPN league path segment, "nba"

    # Final margin at or above which a game no longer counts as close
    close_margin: float = 10.0

    # Include in the important-games pool by default
    ranked: bool = True


# Master configuration for all leagues
LEAGUE_CONFIG: dict[str, LeagueConfig] = {
    "NBA": LeagueConfig(
        code="NBA",
        display_name="NBA Basketball",
        sport="basketball",
        league="nba",
        close_margin=15.0,
    ),
    "WNBA": LeagueConfig(
        code="WNBA",
        display_name="WNBA Basketball",
        sport="basketball",
        league="wnba",
        close_margin=15.0,
        ranked=False,
    ),
    "NCAAB": LeagueConfig(
        code="NCAAB",
        display_name="NCAA Men's Basketball",
        sport="basketball",
        league="mens-college-basketball",
        close_margin=15.0,
        ranked=False,
    ),
    "NFL": LeagueConfig(
        code="NFL",
        display_name="NFL Football",
        sport="football",
        league="nfl",
        close_margin=17.0,
    ),
    "NCAAF": LeagueConfig(
        code="NCAAF",
        display_name="NCAA Football",
        sport="football",
        league="college-football",
        close_margin=17.0,
        ranked=False,
    ),
    "MLB": LeagueConfig(
        code="MLB",
        display_name="MLB Baseball",
        sport="baseball",
        league="mlb",
        close_margin=5.0,
    ),
    "NHL": LeagueConfig(
        code="NHL",
        display_name="NHL Hockey",
        sport="hockey",
        league="nhl",
        close_margin=3.0,
    ),
}

DEFAULT_CLOSE_MARGIN = 10.0


def get_league_config(league_code: str) -> LeagueConfig:
    """
    Get configuration for a specific league.

    Raises:
        ValueError: If league_code is not in LEAGUE_CONFIG
    """
    code = league_code.upper()
    if code not in LEAGUE_CONFIG:
        valid = ", ".join(LEAGUE_CONFIG.keys())
        raise ValueError(f"Unknown league '{league_code}'. Valid leagues: {valid}")
    return LEAGUE_CONFIG[code]


def find_league(sport: str, league: str) -> LeagueConfig:
    """
    Resolve a (sport, league) query pair to its configuration.

    Matching is case-insensitive; ``league`` may be either the ESPN path
    segment ("nba") or the league code ("NBA").

    Raises:
        ValueError: If no configured league matches
    """
    sport_key = sport.strip().lower()
    league_key = league.strip().lower()
    for cfg in LEAGUE_CONFIG.values():
        if cfg.sport != sport_key:
            continue
        if league_key in (cfg.league, cfg.code.lower()):
            return cfg
    raise ValueError(f"Unknown sport/league '{sport}/{league}'")


def get_ranked_leagues() -> list[str]:
    """Get leagues included in the important-games pool by default."""
    return [code for code, cfg in LEAGUE_CONFIG.items() if cfg.ranked]


def close_margin_table() -> dict[str, float]:
    """Map league code to its close-game margin."""
    return {code: cfg.close_margin for code, cfg in LEAGUE_CONFIG.items()}

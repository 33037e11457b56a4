"""FastAPI dependencies for the scoreboard API."""

from .providers import get_data_source, get_important_leagues, get_scoring_policy

__all__ = ["get_data_source", "get_important_leagues", "get_scoring_policy"]

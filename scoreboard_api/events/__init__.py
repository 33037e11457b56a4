"""Event model, interest scoring and top-K selection."""

from .models import Event, EventStatus, TeamProfile
from .nuggets import generate_nugget
from .scoring import ScoreBreakdown, ScoringPolicy
from .selection import ScoredEvent, rank_events, select_top

__all__ = [
    "Event",
    "EventStatus",
    "ScoreBreakdown",
    "ScoredEvent",
    "ScoringPolicy",
    "TeamProfile",
    "generate_nugget",
    "rank_events",
    "select_top",
]

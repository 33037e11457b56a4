"""Top-K selection over scored events."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from ..exceptions import DataSourceUnavailable, ScoringFailure
from .models import Event
from .scoring import EventScorer, ScoreBreakdown

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScoredEvent:
    event: Event
    breakdown: ScoreBreakdown

    @property
    def score(self) -> float:
        return self.breakdown.total


def _ranking_key(scored: ScoredEvent) -> tuple[float, float, str]:
    # Highest score first, then earliest start, then identifier.
    return (
        -scored.score,
        scored.event.start_time.timestamp(),
        scored.event.event_id,
    )


def score_events(events: Iterable[Event], scorer: EventScorer) -> list[ScoredEvent]:
    """Score every event, dropping the ones that cannot be scored."""
    scored: list[ScoredEvent] = []
    for event in events:
        try:
            breakdown = scorer.breakdown(event)
        except ScoringFailure as exc:
            logger.warning(
                "Dropping unscorable event",
                extra={"event_id": exc.event_id, "reason": exc.reason},
            )
            continue
        scored.append(ScoredEvent(event=event, breakdown=breakdown))
    return scored


def rank_events(events: Iterable[Event], scorer: EventScorer) -> list[ScoredEvent]:
    """Score and fully order events by interest."""
    return sorted(score_events(events, scorer), key=_ranking_key)


def select_top(events: Iterable[Event], k: int, scorer: EventScorer) -> list[ScoredEvent]:
    """Return the ``k`` most interesting events in deterministic order.

    Returns every scorable event when fewer than ``k`` exist.

    Raises:
        ValueError: if ``k`` is negative.
        DataSourceUnavailable: if the candidate pool is empty.
    """
    if k < 0:
        raise ValueError("k must be non-negative")
    pool = list(events)
    if not pool:
        raise DataSourceUnavailable("No events available to rank")

    ranked = rank_events(pool, scorer)
    selected = ranked[:k]
    logger.info(
        "Selected top events",
        extra={
            "requested": k,
            "pool_size": len(pool),
            "scored": len(ranked),
            "selected": len(selected),
        },
    )
    return selected

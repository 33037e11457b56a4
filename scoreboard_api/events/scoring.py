"""Interest scoring for normalized events.

The default policy combines four sub-factors, each normalized to 0-1:

- competitiveness: closeness of team strength (win percentages) and, once
  a game has a score, closeness of the margin relative to the league's
  close-game margin.
- prominence: average team win percentage blended with a national
  broadcast flag. Adding records to a broadcast-only event never lowers it.
- timing: proximity of the start time to the policy's reference time.
  Live games get full credit.
- stakes: postseason games score highest, conference games half.

The final score is the weighted mean of the factors that are available for
an event, scaled to 0-100. Missing factors drop out of both numerator and
denominator so sparse events are still ranked on what they have.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Protocol

from ..config import ScoringWeights
from ..config_sports import DEFAULT_CLOSE_MARGIN, close_margin_table
from ..exceptions import ScoringFailure
from ..utils.datetime_utils import ensure_utc, hours_between
from .models import Event, EventStatus

logger = logging.getLogger(__name__)

SCORE_SCALE = 100.0
CONFERENCE_STAKES = 0.5
POSTSEASON_STAKES = 1.0

FACTOR_NAMES = ("competitiveness", "prominence", "timing", "stakes")


def _normalize(value: float, minimum: float, maximum: float) -> float:
    """Normalize a value to a 0-1 range with clamping."""
    if maximum <= minimum:
        raise ValueError("maximum must be greater than minimum")
    normalized = (value - minimum) / (maximum - minimum)
    return max(0.0, min(1.0, normalized))


def _mean(values: list[float]) -> float | None:
    if not values:
        return None
    return sum(values) / len(values)


def _strength_closeness(event: Event) -> float | None:
    """Closeness of the two teams' win percentages."""
    if event.home_win_pct is None or event.away_win_pct is None:
        return None
    return 1.0 - _normalize(abs(event.home_win_pct - event.away_win_pct), 0.0, 1.0)


def _margin_closeness(event: Event, close_margin: float) -> float | None:
    """Closeness of the current or final score margin."""
    if event.status == EventStatus.SCHEDULED or event.margin is None:
        return None
    return 1.0 - _normalize(float(event.margin), 0.0, close_margin)


def _team_quality(event: Event) -> float | None:
    """Average win percentage of the teams with known records."""
    known = [pct for pct in (event.home_win_pct, event.away_win_pct) if pct is not None]
    average = _mean(known)
    if average is None:
        return None
    return _normalize(average, 0.0, 1.0)


@dataclass(frozen=True)
class ScoreBreakdown:
    """Sub-factor values behind an interest score. None means unavailable."""

    event_id: str
    competitiveness: float | None
    prominence: float | None
    timing: float | None
    stakes: float | None
    total: float

    def factors(self) -> dict[str, float | None]:
        return {name: getattr(self, name) for name in FACTOR_NAMES}


class EventScorer(Protocol):
    """Anything that can explain and score an event."""

    def breakdown(self, event: Event) -> ScoreBreakdown: ...

    def score(self, event: Event) -> float: ...


@dataclass(frozen=True)
class ScoringPolicy:
    """Default weighted interest policy.

    ``reference_time`` is resolved once when the policy is built so that
    scoring never reads the clock.
    """

    reference_time: datetime
    weights: ScoringWeights = field(default_factory=ScoringWeights)
    close_margins: Mapping[str, float] = field(default_factory=close_margin_table)

    def __post_init__(self) -> None:
        object.__setattr__(self, "reference_time", ensure_utc(self.reference_time))

    def competitiveness(self, event: Event) -> float | None:
        close_margin = self.close_margins.get(event.league.upper(), DEFAULT_CLOSE_MARGIN)
        parts = [
            part
            for part in (_strength_closeness(event), _margin_closeness(event, close_margin))
            if part is not None
        ]
        return _mean(parts)

    def prominence(self, event: Event) -> float | None:
        quality = _team_quality(event)
        if quality is None:
            if not event.national_broadcast:
                return None
            # Unknown records count as zero quality
            quality = 0.0
        share = self.weights.broadcast_share
        return (1.0 - share) * quality + share * float(event.national_broadcast)

    def timing(self, event: Event) -> float:
        if event.status == EventStatus.IN_PROGRESS:
            return 1.0
        hours = hours_between(event.start_time, self.reference_time)
        return 1.0 / (1.0 + hours / self.weights.timing_half_life_hours)

    def stakes(self, event: Event) -> float:
        if event.postseason:
            return POSTSEASON_STAKES
        if event.conference_game:
            return CONFERENCE_STAKES
        return 0.0

    def breakdown(self, event: Event) -> ScoreBreakdown:
        """Compute every sub-factor and the combined 0-100 score.

        Raises:
            ScoringFailure: when no weighted factor is available or the
                result is not a finite number.
        """
        factors = {
            "competitiveness": self.competitiveness(event),
            "prominence": self.prominence(event),
            "timing": self.timing(event),
            "stakes": self.stakes(event),
        }
        weighted_sum = 0.0
        weight_total = 0.0
        for name, value in factors.items():
            weight = getattr(self.weights, name)
            if value is None or weight <= 0:
                continue
            weighted_sum += weight * value
            weight_total += weight

        if weight_total <= 0:
            raise ScoringFailure(event.event_id, "no weighted factors available")

        total = weighted_sum / weight_total * SCORE_SCALE
        if not math.isfinite(total):
            raise ScoringFailure(event.event_id, f"non-finite score {total!r}")

        logger.debug(
            "Computed interest score",
            extra={
                "event_id": event.event_id,
                "league": event.league,
                **factors,
                "normalized_score": total,
            },
        )

        return ScoreBreakdown(event_id=event.event_id, total=total, **factors)

    def score(self, event: Event) -> float:
        """Score an event for importance ordering."""
        return self.breakdown(event).total

"""Generate short, template-driven explanation nuggets for ranked events."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from .models import EventStatus
from .selection import ScoredEvent


@dataclass(frozen=True)
class NuggetTemplate:
    text: str
    required_tags: frozenset[str]


DEFAULT_NUGGET = "One of the better matchups on the board."

TIGHT_MATCHUP_THRESHOLD = 0.85
MARQUEE_THRESHOLD = 0.65
NAIL_BITER_THRESHOLD = 0.8


def _normalize_tags(tags: Iterable[str]) -> set[str]:
    return {
        tag.strip().lower().replace(" ", "_")
        for tag in tags
        if isinstance(tag, str) and tag.strip()
    }


def _event_tags(scored: ScoredEvent) -> set[str]:
    event = scored.event
    breakdown = scored.breakdown
    event_tags: set[str] = set()
    if event.postseason:
        event_tags.add("postseason")
    if event.conference_game:
        event_tags.add("conference_clash")
    if event.national_broadcast:
        event_tags.add("national_broadcast")
    if event.status == EventStatus.IN_PROGRESS:
        event_tags.add("live_now")
    if event.status == EventStatus.FINAL:
        event_tags.add("final")
    if (
        breakdown.competitiveness is not None
        and breakdown.competitiveness >= TIGHT_MATCHUP_THRESHOLD
    ):
        event_tags.add("tight_matchup")
    if breakdown.prominence is not None and breakdown.prominence >= MARQUEE_THRESHOLD:
        event_tags.add("marquee_teams")
    if (
        event.status != EventStatus.SCHEDULED
        and breakdown.competitiveness is not None
        and breakdown.competitiveness >= NAIL_BITER_THRESHOLD
    ):
        event_tags.add("nail_biter")
    return event_tags


TEMPLATES: tuple[NuggetTemplate, ...] = (
    NuggetTemplate(
        text="Playoff game going down to the wire right now.",
        required_tags=frozenset({"postseason", "live_now", "nail_biter"}),
    ),
    NuggetTemplate(
        text="Postseason clash between two evenly matched sides.",
        required_tags=frozenset({"postseason", "tight_matchup"}),
    ),
    NuggetTemplate(
        text="Postseason positioning is on the line in this matchup.",
        required_tags=frozenset({"postseason"}),
    ),
    NuggetTemplate(
        text="Live and close. Worth tuning in now.",
        required_tags=frozenset({"live_now", "nail_biter"}),
    ),
    NuggetTemplate(
        text="That one came down to the final stretch.",
        required_tags=frozenset({"final", "nail_biter"}),
    ),
    NuggetTemplate(
        text="National spotlight on two of the league's best.",
        required_tags=frozenset({"national_broadcast", "marquee_teams"}),
    ),
    NuggetTemplate(
        text="Conference rivals with records this close.",
        required_tags=frozenset({"conference_clash", "tight_matchup"}),
    ),
    NuggetTemplate(
        text="Evenly matched on paper.",
        required_tags=frozenset({"tight_matchup"}),
    ),
    NuggetTemplate(
        text="Two winning teams meet.",
        required_tags=frozenset({"marquee_teams"}),
    ),
)


def generate_nugget(scored: ScoredEvent, tags: Iterable[str] = ()) -> str:
    """Generate a short, non-spoiler nugget from templates."""
    normalized_tags = _normalize_tags(tags)
    normalized_tags |= _event_tags(scored)

    for template in TEMPLATES:
        if template.required_tags.issubset(normalized_tags):
            return template.text

    return DEFAULT_NUGGET

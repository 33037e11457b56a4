"""Pydantic models for normalized events."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from ..exceptions import EventNormalizationError
from ..utils.datetime_utils import ensure_utc


class EventStatus(str, Enum):
    SCHEDULED = "scheduled"
    IN_PROGRESS = "in_progress"
    FINAL = "final"


def _invalid_fields(label: str, exc: ValidationError) -> EventNormalizationError:
    fields = sorted(".".join(str(part) for part in error["loc"]) for error in exc.errors())
    return EventNormalizationError(f"{label} has invalid fields: {', '.join(fields)}")


class TeamProfile(BaseModel):
    model_config = ConfigDict(frozen=True)

    team_id: str
    slug: str
    display_name: str
    abbreviation: str | None = None
    logo: str | None = None
    color: str | None = None

    @classmethod
    def build(cls, **fields: Any) -> TeamProfile:
        try:
            return cls(**fields)
        except ValidationError as exc:
            raise _invalid_fields(f"Team {fields.get('team_id')!r}", exc) from exc


class Event(BaseModel):
    """One scheduled or completed contest, independent of upstream schema."""

    model_config = ConfigDict(frozen=True)

    event_id: str
    home_team: str
    away_team: str
    start_time: datetime
    sport: str
    league: str
    home_score: int | None = None
    away_score: int | None = None
    short_name: str | None = None
    status: EventStatus = EventStatus.SCHEDULED
    home_win_pct: float | None = None
    away_win_pct: float | None = None
    national_broadcast: bool = False
    postseason: bool = False
    conference_game: bool = False
    neutral_site: bool = False

    @field_validator("event_id", "home_team", "away_team")
    @classmethod
    def _require_text(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value

    @field_validator("start_time")
    @classmethod
    def _to_utc(cls, value: datetime) -> datetime:
        return ensure_utc(value)

    @classmethod
    def build(cls, **fields: Any) -> Event:
        """Construct an event, reporting missing/invalid fields as EventNormalizationError."""
        try:
            return cls(**fields)
        except ValidationError as exc:
            raise _invalid_fields(f"Event {fields.get('event_id')!r}", exc) from exc

    @property
    def name(self) -> str:
        return f"{self.away_team} at {self.home_team}"

    @property
    def has_scores(self) -> bool:
        return self.home_score is not None and self.away_score is not None

    @property
    def margin(self) -> int | None:
        if not self.has_scores:
            return None
        return abs(self.home_score - self.away_score)

"""Pydantic schemas for event summaries in API responses."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel


class ResultCode(str, Enum):
    SUCCESS = "success"
    BAD_REQUEST = "error_bad_request"
    DATASOURCE = "error_datasource"


class ListLayout(str, Enum):
    LIST = "list"
    NUMBERED = "numbered"


class EventSummary(BaseModel):
    id: str
    name: str
    gameName: str
    shortName: str | None = None
    homeTeamName: str
    awayTeamName: str
    homeScore: int | None = None
    awayScore: int | None = None
    date: str
    sport: str
    league: str
    status: str


class RankedEventSummary(EventSummary):
    interestScore: float
    nugget: str

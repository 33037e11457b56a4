"""Error taxonomy shared by the data source, ranking and routers."""

from __future__ import annotations


class ScoreboardError(Exception):
    """Base class for errors surfaced to API callers."""

    result_code = "error"


class BadRequest(ScoreboardError):
    """Malformed or unknown query parameters."""

    result_code = "error_bad_request"


class DataSourceUnavailable(ScoreboardError):
    """The upstream provider failed or returned no usable data."""

    result_code = "error_datasource"


class ScoringFailure(Exception):
    """A single event could not be scored. Recovered by dropping the event."""

    def __init__(self, event_id: str, reason: str) -> None:
        super().__init__(f"Cannot score event {event_id}: {reason}")
        self.event_id = event_id
        self.reason = reason


class EventNormalizationError(ValueError):
    """Upstream event data is missing required fields."""

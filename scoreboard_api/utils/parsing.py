"""
Generic, format-agnostic parsing utilities.

This module must NOT depend on the upstream payload layout so it can be
used for any JSON source.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any


def parse_int(value: str | int | float | None) -> int | None:
    """Parse a value to an integer, handling common edge cases.

    Accepts strings, ints, floats, or None. Returns None for empty strings or "-".
    """
    if value in (None, "", "-"):
        return None
    try:
        return int(float(value))
    except (ValueError, TypeError):
        return None


def parse_record(summary: str | None) -> float | None:
    """Parse a "W-L" or "W-L-T" record summary into a win percentage.

    Ties (and NHL overtime losses) count as half a win. Returns None for
    missing, malformed or empty (0-0) records.
    """
    if not summary or not isinstance(summary, str):
        return None
    parts = summary.strip().split("-")
    if len(parts) not in (2, 3):
        return None
    values = [parse_int(part) for part in parts]
    if any(value is None or value < 0 for value in values):
        return None
    wins, losses = values[0], values[1]
    ties = values[2] if len(values) == 3 else 0
    played = wins + losses + ties
    if played == 0:
        return None
    return (wins + 0.5 * ties) / played


def as_dict(value: Any) -> dict[str, Any]:
    """Return ``value`` if it is a dict, else an empty dict."""
    return value if isinstance(value, dict) else {}


def iter_dicts(items: Any) -> Iterator[dict[str, Any]]:
    """Yield the dict entries of a list; anything else yields nothing."""
    if not isinstance(items, list):
        return
    for item in items:
        if isinstance(item, dict):
            yield item


def first_dict(items: Any) -> dict[str, Any] | None:
    """Return the first dict in a list, or None."""
    return next(iter_dicts(items), None)

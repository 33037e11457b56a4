"""Upstream data source adapter."""

from .base import EventDataSource
from .espn import ESPNClient

__all__ = ["ESPNClient", "EventDataSource"]

"""API routers."""

from . import important, sports

__all__ = ["important", "sports"]

"""Interactive incremental search."""

from .engine import BACKWARD, FORWARD, SearchHit, SearchSession, SearchSnapshot

__all__ = ["BACKWARD", "FORWARD", "SearchHit", "SearchSession", "SearchSnapshot"]

"""Mini README: Windowed trip aggregates for the operations dashboard."""

from .summary import summarise_trips

__all__ = ["summarise_trips"]

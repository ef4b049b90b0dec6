"""Mini README: Trips and the costing engine that prices them.

``costing`` turns a trip's facts into base value, driver freight and helper
bonus; ``records`` holds the persisted ``Trip`` with its frozen snapshot.
"""

from .costing import (
    JobType,
    TripCost,
    TripStatus,
    base_value_for,
    compute_trip_cost,
    helper_bonus_for,
    is_weekend,
    parse_trip_date,
)
from .records import Trip, build_trip

__all__ = [
    "JobType",
    "Trip",
    "TripCost",
    "TripStatus",
    "base_value_for",
    "build_trip",
    "compute_trip_cost",
    "helper_bonus_for",
    "is_weekend",
    "parse_trip_date",
]

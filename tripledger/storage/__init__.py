"""Mini README: File-backed persistence for staff, trips, payments and rates.

``JsonStore`` keeps one JSON document per collection inside the configured
data directory and hands back domain records. It seeds a demo crew on first
use and merges stored rates over the defaults.
"""

from .json_store import DEMO_STAFF, JsonStore

__all__ = ["DEMO_STAFF", "JsonStore"]

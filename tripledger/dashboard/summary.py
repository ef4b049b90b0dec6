"""Mini README: Dashboard aggregates over a date window.

``summarise_trips`` totals the frozen trip costs, distance and weekend
trips inside a window and groups them for the dashboard charts: cost per
day, trip count per job type and the busiest clients. It reads snapshot
costs only, so the figures match what was billed at the time.
"""

from __future__ import annotations

from collections import Counter, defaultdict
from typing import Any, Dict, Iterable, List, Optional

from ..finance import DateWindow, current_month_window
from ..logging_utils import get_logger
from ..trips import Trip

LOGGER = get_logger(__name__)

MAX_COST_POINTS = 15
TOP_CLIENTS = 5


def summarise_trips(trips: Iterable[Trip], window: Optional[DateWindow] = None) -> Dict[str, Any]:
    """Aggregate trips dated inside ``window`` (current month to date by default)."""

    window = window or current_month_window()
    selected: List[Trip] = [trip for trip in trips if window.contains(trip.date)]

    cost_by_day: Dict[str, float] = defaultdict(float)
    job_mix: Counter = Counter()
    clients: Counter = Counter()
    for trip in sorted(selected, key=lambda item: item.date):
        cost_by_day[trip.date.isoformat()] += trip.total_cost
        job_mix[trip.job_type.value] += 1
        clients[trip.client_name] += 1

    summary = {
        "window": {"start": window.start.isoformat(), "end": window.end.isoformat()},
        "tripCount": len(selected),
        "totalCost": sum(trip.total_cost for trip in selected),
        "totalKm": sum(trip.distance_km for trip in selected),
        "weekendTrips": sum(1 for trip in selected if trip.is_weekend),
        "costByDay": [
            {"date": day, "cost": cost} for day, cost in list(cost_by_day.items())[:MAX_COST_POINTS]
        ],
        "jobTypes": [{"jobType": key, "count": count} for key, count in job_mix.items()],
        "topClients": [
            {"clientName": name, "count": count} for name, count in clients.most_common(TOP_CLIENTS)
        ],
    }
    LOGGER.debug(
        "Dashboard summary %s..%s -> trips=%s cost=%.2f",
        window.start,
        window.end,
        summary["tripCount"],
        summary["totalCost"],
    )
    return summary

"""Mini README: Persisted trip records.

Structure:
    * Trip - dataclass carrying the trip facts plus the cost snapshot frozen
      when it was saved.
    * build_trip - combine submitted facts with a ``TripCost`` snapshot.

The snapshot (``base_value``, ``driver_km_cost``, ``total_cost``) is a
historical fact; nothing in the package recomputes it when rates change.
Older exports stored a single ``driverId``; ``from_dict`` folds it into
``driver_ids`` so business logic only ever sees the list.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from .costing import JobType, TripCost, TripStatus, is_weekend, parse_trip_date


@dataclass(slots=True)
class Trip:
    """A freight job and its cost snapshot."""

    trip_id: str
    date: date
    client_name: str
    origin: str
    destination: str
    distance_km: float
    job_type: JobType
    status: TripStatus
    driver_ids: List[str]
    helper_ids: List[str] = field(default_factory=list)
    is_weekend: bool = False
    base_value: float = 0.0
    driver_km_cost: float = 0.0
    total_cost: float = 0.0
    notes: Optional[str] = None
    legacy_driver_id: Optional[str] = None

    @property
    def assigned_driver_ids(self) -> Tuple[str, ...]:
        """Drivers on the trip, falling back to the legacy single id."""

        if self.driver_ids:
            return tuple(self.driver_ids)
        if self.legacy_driver_id:
            return (self.legacy_driver_id,)
        return ()

    @property
    def helper_bonus_total(self) -> float:
        return self.total_cost - self.base_value - self.driver_km_cost

    @property
    def is_finished(self) -> bool:
        return self.status is TripStatus.FINISHED

    def as_dict(self) -> Dict[str, object]:
        payload: Dict[str, object] = {
            "id": self.trip_id,
            "date": self.date.isoformat(),
            "clientName": self.client_name,
            "origin": self.origin,
            "destination": self.destination,
            "distanceKm": self.distance_km,
            "jobType": self.job_type.value,
            "status": self.status.value,
            "driverIds": list(self.driver_ids),
            "helperIds": list(self.helper_ids),
            "isWeekend": self.is_weekend,
            "baseValue": self.base_value,
            "driverKmCost": self.driver_km_cost,
            "totalCost": self.total_cost,
        }
        if self.notes:
            payload["notes"] = self.notes
        if self.legacy_driver_id:
            payload["driverId"] = self.legacy_driver_id
        return payload

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> "Trip":
        """Load a stored trip, normalising the legacy single-driver field."""

        legacy = data.get("driverId")
        legacy_driver_id = str(legacy) if legacy else None
        trip_date = parse_trip_date(str(data["date"]))
        driver_ids = [str(item) for item in (data.get("driverIds") or [])]
        if not driver_ids and legacy_driver_id:
            driver_ids = [legacy_driver_id]
        return cls(
            trip_id=str(data["id"]),
            date=trip_date,
            client_name=str(data.get("clientName", "")),
            origin=str(data.get("origin", "")),
            destination=str(data.get("destination", "")),
            distance_km=float(data.get("distanceKm") or 0.0),
            job_type=JobType.from_str(str(data.get("jobType", JobType.OTHER.value))),
            status=TripStatus.from_str(str(data.get("status", TripStatus.OPEN.value))),
            driver_ids=driver_ids,
            helper_ids=[str(item) for item in (data.get("helperIds") or [])],
            is_weekend=bool(data["isWeekend"]) if "isWeekend" in data else is_weekend(trip_date),
            base_value=float(data.get("baseValue") or 0.0),
            driver_km_cost=float(data.get("driverKmCost") or 0.0),
            total_cost=float(data.get("totalCost") or 0.0),
            notes=str(data["notes"]) if data.get("notes") else None,
            legacy_driver_id=legacy_driver_id,
        )


def build_trip(
    *,
    trip_id: str,
    trip_date: date,
    client_name: str,
    origin: str,
    destination: str,
    distance_km: float,
    job_type: JobType,
    status: TripStatus,
    driver_ids: Iterable[str],
    helper_ids: Iterable[str],
    cost: TripCost,
    notes: Optional[str] = None,
) -> Trip:
    """Freeze ``cost`` onto a new trip record."""

    return Trip(
        trip_id=trip_id,
        date=trip_date,
        client_name=client_name,
        origin=origin,
        destination=destination,
        distance_km=distance_km,
        job_type=job_type,
        status=status,
        driver_ids=list(driver_ids),
        helper_ids=list(helper_ids),
        is_weekend=cost.is_weekend,
        base_value=cost.base,
        driver_km_cost=cost.freight,
        total_cost=cost.total,
        notes=notes,
    )

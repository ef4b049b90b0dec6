"""Mini README: Trip costing engine.

Structure:
    * JobType / TripStatus - closed enumerations with separate display labels.
    * parse_trip_date / is_weekend - calendar-date helpers.
    * base_value_for / helper_bonus_for - weekend-only rate lookups.
    * TripCost - the base, freight, bonus and total figures of one trip.
    * compute_trip_cost - pure function pricing a trip against given rates.

Rules: base value and helper bonus are earned only on Saturdays and Sundays
and only for MRI or CT jobs. Driver freight is distance times each driver's
per-kilometre rate on any day. Every assigned helper receives the same flat
bonus. Unknown drivers and missing rates contribute 0.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Dict, Sequence, Union

from ..logging_utils import get_logger
from ..rates import RateSettings
from ..staff import StaffDirectory

LOGGER = get_logger(__name__)

DateLike = Union[str, date]


class JobType(str, Enum):
    """Kinds of freight job; only MRI and CT carry base value and bonus."""

    MRI = "mri"
    CT = "ct"
    OTHER = "other"

    @property
    def label(self) -> str:
        return _JOB_LABELS[self]

    @classmethod
    def from_str(cls, value: str) -> "JobType":
        """Coerce a storage key, label or legacy display string into a job type."""

        try:
            normalised = value.strip().lower()
            return _JOB_LOOKUP.get(normalised) or cls(normalised)
        except (ValueError, AttributeError) as error:
            raise ValueError(f"Unsupported job type: {value}") from error


_JOB_LABELS = {JobType.MRI: "MRI", JobType.CT: "CT scan", JobType.OTHER: "Other"}
_JOB_LOOKUP = {
    "ressonância magnética": JobType.MRI,
    "tomografia": JobType.CT,
    "outro": JobType.OTHER,
    "ct scan": JobType.CT,
}


class TripStatus(str, Enum):
    """Trip lifecycle; only finished trips are billable."""

    OPEN = "open"
    IN_PROGRESS = "in_progress"
    FINISHED = "finished"

    @property
    def label(self) -> str:
        return _STATUS_LABELS[self]

    @classmethod
    def from_str(cls, value: str) -> "TripStatus":
        """Coerce a storage key, label or legacy display string into a status."""

        try:
            normalised = value.strip().lower()
            return _STATUS_LOOKUP.get(normalised) or cls(normalised)
        except (ValueError, AttributeError) as error:
            raise ValueError(f"Unsupported trip status: {value}") from error


_STATUS_LABELS = {
    TripStatus.OPEN: "Open",
    TripStatus.IN_PROGRESS: "In progress",
    TripStatus.FINISHED: "Finished",
}
_STATUS_LOOKUP = {
    "em aberto": TripStatus.OPEN,
    "em andamento": TripStatus.IN_PROGRESS,
    "finalizado": TripStatus.FINISHED,
    "in progress": TripStatus.IN_PROGRESS,
}


def parse_trip_date(value: DateLike) -> date:
    """Read a ``YYYY-MM-DD`` calendar date; no clock time or timezone is involved."""

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return date.fromisoformat(value.strip()[:10])
    raise ValueError("Trip dates must be ISO strings or date instances.")


def is_weekend(trip_date: DateLike) -> bool:
    """Return ``True`` for Saturdays and Sundays."""

    return parse_trip_date(trip_date).weekday() >= 5


def base_value_for(job_type: JobType, weekend: bool, rates: RateSettings) -> float:
    """Job base value: the MRI or CT rate on weekends, otherwise 0."""

    if not weekend:
        return 0.0
    if job_type is JobType.MRI:
        return rates.mri_rate
    if job_type is JobType.CT:
        return rates.ct_rate
    return 0.0


def helper_bonus_for(job_type: JobType, weekend: bool, rates: RateSettings) -> float:
    """Flat bonus owed to each helper on a trip."""

    if not weekend:
        return 0.0
    if job_type is JobType.MRI:
        return rates.helper_bonus_mri
    if job_type is JobType.CT:
        return rates.helper_bonus_ct
    return 0.0


@dataclass(frozen=True, slots=True)
class TripCost:
    """Monetary figures for one trip at the moment it was priced."""

    base: float
    freight: float
    bonus: float
    total: float
    is_weekend: bool

    def as_dict(self) -> Dict[str, object]:
        return {
            "base": self.base,
            "freight": self.freight,
            "bonus": self.bonus,
            "total": self.total,
            "isWeekend": self.is_weekend,
        }


def compute_trip_cost(
    trip_date: DateLike,
    job_type: JobType,
    driver_ids: Sequence[str],
    helper_ids: Sequence[str],
    distance_km: float,
    directory: StaffDirectory,
    rates: RateSettings,
) -> TripCost:
    """Price a trip. Pure: no validation, no I/O, inputs are left untouched."""

    weekend = is_weekend(trip_date)
    base = base_value_for(job_type, weekend, rates)
    freight = sum(distance_km * directory.km_rate_for(driver_id) for driver_id in driver_ids)
    bonus = len(helper_ids) * helper_bonus_for(job_type, weekend, rates)
    total = base + freight + bonus
    LOGGER.debug(
        "Priced trip date=%s job=%s weekend=%s base=%.2f freight=%.2f bonus=%.2f",
        trip_date,
        job_type.value,
        weekend,
        base,
        freight,
        bonus,
    )
    return TripCost(
        base=base,
        freight=float(freight),
        bonus=bonus,
        total=total,
        is_weekend=weekend,
    )

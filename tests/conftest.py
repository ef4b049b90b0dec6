"""Mini README: Shared fixtures for the trip ledger tests.

Structure:
    * rates - default rate settings (MRI 150, CT 100, bonuses 60/40).
    * crew / directory - two drivers and two helpers.
    * make_trip - factory for finished trips with sensible defaults.

Calendar anchors: 2024-06-01 is a Saturday, 2024-06-02 a Sunday and
2024-06-03 a Monday.
"""

from __future__ import annotations

from datetime import date
from typing import Callable, List, Optional

import pytest

from tripledger.rates import RateSettings
from tripledger.staff import StaffDirectory, StaffMember, StaffRole
from tripledger.trips import JobType, Trip, TripStatus

SATURDAY = date(2024, 6, 1)
SUNDAY = date(2024, 6, 2)
MONDAY = date(2024, 6, 3)


@pytest.fixture
def rates() -> RateSettings:
    return RateSettings()


@pytest.fixture
def crew() -> List[StaffMember]:
    return [
        StaffMember(staff_id="d1", name="Carlos Silva", role=StaffRole.DRIVER, km_rate=2.50),
        StaffMember(staff_id="d2", name="Roberto Santos", role=StaffRole.DRIVER, km_rate=3.20),
        StaffMember(staff_id="h1", name="João Souza", role=StaffRole.HELPER),
        StaffMember(staff_id="h2", name="Pedro Alves", role=StaffRole.HELPER),
    ]


@pytest.fixture
def directory(crew: List[StaffMember]) -> StaffDirectory:
    return StaffDirectory(crew)


@pytest.fixture
def make_trip() -> Callable[..., Trip]:
    counter = {"value": 0}

    def _make(
        *,
        trip_date: date = MONDAY,
        job_type: JobType = JobType.MRI,
        status: TripStatus = TripStatus.FINISHED,
        driver_ids: Optional[List[str]] = None,
        helper_ids: Optional[List[str]] = None,
        distance_km: float = 100.0,
        **overrides: object,
    ) -> Trip:
        counter["value"] += 1
        fields = dict(
            trip_id=f"trip-{counter['value']}",
            date=trip_date,
            client_name="Clínica Saúde",
            origin="Garage",
            destination="Central Hospital",
            distance_km=distance_km,
            job_type=job_type,
            status=status,
            driver_ids=list(driver_ids) if driver_ids is not None else ["d1"],
            helper_ids=list(helper_ids) if helper_ids is not None else [],
            is_weekend=trip_date.weekday() >= 5,
        )
        fields.update(overrides)
        return Trip(**fields)

    return _make

"""Mini README: Tests for staff balance reconciliation.

Covers the finished-only filter, helper weekend eligibility, driver
freight at the current km rate, the legacy single-driver field, payment
netting, monotonicity, windowed statements and per-role statements.
"""

from __future__ import annotations

from datetime import date, datetime

import pytest

from tripledger.finance import (
    BalanceMode,
    DateWindow,
    Payment,
    compute_balance,
    compute_role_balances,
    current_month_window,
)
from tripledger.staff import StaffMember, StaffRole
from tripledger.trips import JobType, TripStatus

SATURDAY = date(2024, 6, 1)
MONDAY = date(2024, 6, 3)


def _payment(payment_id: str, staff_id: str, amount: float, when: datetime) -> Payment:
    return Payment(payment_id=payment_id, staff_id=staff_id, amount=amount, recorded_at=when)


def test_driver_scenario_earns_distance_times_rate(crew, make_trip, rates) -> None:
    """One finished 100 km weekday trip at 2.50/km earns 250."""

    driver = crew[0]
    statement = compute_balance(driver, [make_trip(trip_date=MONDAY)], [], rates)

    assert statement.earned == pytest.approx(250.0)
    assert statement.paid == 0
    assert statement.balance == pytest.approx(250.0)


def test_helper_scenario_only_weekend_trips_earn(crew, make_trip, rates) -> None:
    """A helper earns the MRI bonus on the weekend trip and nothing on the weekday one."""

    helper = crew[2]
    weekend = make_trip(trip_date=SATURDAY, helper_ids=["h1"])
    weekday = make_trip(trip_date=MONDAY, helper_ids=["h1"])

    statement = compute_balance(helper, [weekend, weekday], [], rates)

    assert statement.earned == pytest.approx(60.0)
    assert [earning.trip.trip_id for earning in statement.trip_breakdown] == [weekend.trip_id]


@pytest.mark.parametrize("status", [TripStatus.OPEN, TripStatus.IN_PROGRESS])
def test_unfinished_trips_never_count(crew, make_trip, rates, status) -> None:
    """Open and in-progress trips are excluded for drivers and helpers alike."""

    trip = make_trip(trip_date=SATURDAY, status=status, helper_ids=["h1"])

    assert compute_balance(crew[0], [trip], [], rates).earned == 0
    assert compute_balance(crew[2], [trip], [], rates).earned == 0


def test_payments_are_netted_against_earnings(crew, make_trip, rates) -> None:
    """Payments of 100 and 50 against 300 earned leave 150 outstanding."""

    driver = crew[0]
    trip = make_trip(distance_km=120)
    payments = [
        _payment("p1", "d1", 100.0, datetime(2024, 6, 4, 9, 0)),
        _payment("p2", "d1", 50.0, datetime(2024, 6, 10, 9, 0)),
        _payment("p3", "d2", 999.0, datetime(2024, 6, 10, 9, 0)),
    ]

    statement = compute_balance(driver, [trip], payments, rates)

    assert statement.earned == pytest.approx(300.0)
    assert statement.paid == pytest.approx(150.0)
    assert statement.balance == pytest.approx(150.0)
    assert [payment.payment_id for payment in statement.payment_breakdown] == ["p2", "p1"]


def test_adding_then_removing_a_payment_restores_the_balance(crew, make_trip, rates) -> None:
    driver = crew[0]
    trips = [make_trip(distance_km=200)]
    payments = [_payment("p1", "d1", 80.0, datetime(2024, 6, 4))]

    before = compute_balance(driver, trips, payments, rates).balance
    extra = _payment("p2", "d1", 45.5, datetime(2024, 6, 5))
    during = compute_balance(driver, trips, payments + [extra], rates).balance
    after = compute_balance(driver, trips, payments, rates).balance

    assert during == pytest.approx(before - 45.5)
    assert after == before


def test_overpaid_member_has_negative_balance(crew, make_trip, rates) -> None:
    statement = compute_balance(
        crew[0], [make_trip(distance_km=10)], [_payment("p1", "d1", 40.0, datetime(2024, 6, 4))], rates
    )

    assert statement.balance == pytest.approx(-15.0)
    assert statement.is_settled


def test_member_without_trips_or_payments_owes_nothing(crew, rates) -> None:
    statement = compute_balance(crew[1], [], [], rates)

    assert statement.earned == 0
    assert statement.paid == 0
    assert statement.trip_breakdown == []


def test_earnings_use_live_rates_not_trip_snapshots(crew, make_trip, rates) -> None:
    """Statements recompute from current rates even when the trip stored other figures."""

    trip = make_trip(trip_date=SATURDAY, helper_ids=["h1"], base_value=1.0, total_cost=1.0)
    raised = rates.merged_with({"helperBonusMRI": 75})
    driver = StaffMember(staff_id="d1", name="Carlos", role=StaffRole.DRIVER, km_rate=4.0)

    assert compute_balance(crew[2], [trip], [], raised).earned == pytest.approx(75.0)
    assert compute_balance(driver, [trip], [], rates).earned == pytest.approx(400.0)


def test_legacy_single_driver_field_is_honoured(crew, make_trip, rates) -> None:
    trip = make_trip(driver_ids=[], legacy_driver_id="d2", distance_km=10)

    assert compute_balance(crew[1], [trip], [], rates).earned == pytest.approx(32.0)
    assert compute_balance(crew[0], [trip], [], rates).earned == 0


def test_helper_not_on_trip_earns_nothing(crew, make_trip, rates) -> None:
    trip = make_trip(trip_date=SATURDAY, job_type=JobType.CT, helper_ids=["h2"])

    assert compute_balance(crew[2], [trip], [], rates).earned == 0
    assert compute_balance(crew[3], [trip], [], rates).earned == pytest.approx(40.0)


def test_windowed_mode_limits_trips_and_payments(crew, make_trip, rates) -> None:
    driver = crew[0]
    trips = [
        make_trip(trip_date=date(2024, 5, 20), distance_km=100),
        make_trip(trip_date=date(2024, 6, 3), distance_km=10),
    ]
    payments = [
        _payment("p1", "d1", 100.0, datetime(2024, 5, 25, 12, 0)),
        _payment("p2", "d1", 5.0, datetime(2024, 6, 4, 12, 0)),
    ]
    window = DateWindow(start=date(2024, 6, 1), end=date(2024, 6, 30))

    windowed = compute_balance(driver, trips, payments, rates, mode=BalanceMode.WINDOWED, window=window)
    all_time = compute_balance(driver, trips, payments, rates, mode=BalanceMode.ALL_TIME, window=window)

    assert windowed.earned == pytest.approx(25.0)
    assert windowed.paid == pytest.approx(5.0)
    assert windowed.window == window
    assert all_time.earned == pytest.approx(275.0)
    assert all_time.paid == pytest.approx(105.0)
    assert all_time.window is None


def test_windowed_mode_defaults_to_current_month(crew, rates) -> None:
    statement = compute_balance(crew[0], [], [], rates, mode=BalanceMode.WINDOWED)

    assert statement.window == current_month_window()


def test_current_month_window_runs_from_the_first() -> None:
    window = current_month_window(date(2024, 6, 17))

    assert window.start == date(2024, 6, 1)
    assert window.end == date(2024, 6, 17)


def test_window_rejects_inverted_range() -> None:
    with pytest.raises(ValueError):
        DateWindow(start=date(2024, 6, 2), end=date(2024, 6, 1))


def test_role_statements_cover_active_members_only(crew, make_trip, rates) -> None:
    crew[1].active = False
    trips = [make_trip(driver_ids=["d1", "d2"], distance_km=10)]

    statements = compute_role_balances(StaffRole.DRIVER, crew, trips, [], rates)

    assert [statement.member.staff_id for statement in statements] == ["d1"]
    assert statements[0].as_dict()["balance"] == pytest.approx(25.0)


def test_trip_breakdown_is_newest_first(crew, make_trip, rates) -> None:
    older = make_trip(trip_date=date(2024, 6, 1))
    newer = make_trip(trip_date=date(2024, 6, 8))

    statement = compute_balance(crew[0], [older, newer], [], rates)

    assert [earning.trip.trip_id for earning in statement.trip_breakdown] == [
        newer.trip_id,
        older.trip_id,
    ]

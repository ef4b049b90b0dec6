"""Mini README: Tests for the operations desk.

The desk is where submissions are validated before persistence. These tests
cover trip submit/edit/delete with frozen snapshots, payment recording and
cancellation, staff maintenance and rate updates.
"""

from __future__ import annotations

from datetime import date, datetime
from itertools import count

import pytest

from tripledger.errors import RecordNotFoundError, ValidationError
from tripledger.finance import BalanceMode
from tripledger.operations import IdGenerator, OperationsDesk, StaffDraft, TripDraft, parse_window
from tripledger.staff import REMOVED_PLACEHOLDER, StaffRole
from tripledger.storage import JsonStore
from tripledger.trips import JobType, TripStatus

SATURDAY = date(2024, 6, 1)
MONDAY = date(2024, 6, 3)


@pytest.fixture
def desk(tmp_path) -> OperationsDesk:
    ids = count(1)
    return OperationsDesk(
        JsonStore(tmp_path),
        id_generator=lambda: f"id-{next(ids)}",
        now=lambda: datetime(2024, 6, 10, 12, 0),
    )


def _draft(**overrides: object) -> TripDraft:
    fields = dict(
        trip_date=SATURDAY,
        client_name="Clínica Saúde",
        origin="Garage",
        destination="Central Hospital",
        distance_km=100.0,
        job_type=JobType.MRI,
        status=TripStatus.FINISHED,
        driver_ids=["1"],
        helper_ids=["3"],
    )
    fields.update(overrides)
    return TripDraft(**fields)


def test_submit_trip_prices_and_persists(desk) -> None:
    trip = desk.submit_trip(_draft())

    assert trip.trip_id == "id-1"
    assert trip.is_weekend is True
    assert trip.base_value == pytest.approx(150.0)
    assert trip.driver_km_cost == pytest.approx(250.0)
    assert trip.total_cost == pytest.approx(150.0 + 250.0 + 60.0)
    assert desk.store.get_trips() == [trip]


def test_trip_without_drivers_is_rejected_before_saving(desk) -> None:
    with pytest.raises(ValidationError, match="at least one driver"):
        desk.submit_trip(_draft(driver_ids=[]))

    assert desk.store.get_trips() == []


@pytest.mark.parametrize(
    "overrides",
    [
        {"distance_km": -1.0},
        {"client_name": "  "},
        {"driver_ids": ["3"]},
        {"helper_ids": ["1"]},
        {"driver_ids": ["ghost"]},
    ],
)
def test_invalid_trip_drafts_are_rejected(desk, overrides) -> None:
    with pytest.raises(ValidationError):
        desk.submit_trip(_draft(**overrides))


def test_duplicate_crew_ids_are_counted_once(desk) -> None:
    trip = desk.submit_trip(_draft(driver_ids=["1", "1"], helper_ids=["3", "3"]))

    assert trip.driver_ids == ["1"]
    assert trip.total_cost == pytest.approx(460.0)


def test_snapshot_survives_rate_changes(desk) -> None:
    """Changing rates later never rewrites what a saved trip cost."""

    trip = desk.submit_trip(_draft())
    desk.update_rates({"mriRate": 500, "helperBonusMRI": 100})

    stored = desk.get_trip(trip.trip_id)

    assert stored.total_cost == pytest.approx(460.0)
    assert desk.preview_trip_cost(_draft()).total == pytest.approx(500 + 250 + 100)


def test_edit_keeps_id_and_reprices(desk) -> None:
    trip = desk.submit_trip(_draft())

    edited = desk.edit_trip(trip.trip_id, _draft(trip_date=MONDAY))

    assert edited.trip_id == trip.trip_id
    assert edited.total_cost == pytest.approx(250.0)
    assert [item.trip_id for item in desk.store.get_trips()] == [trip.trip_id]


def test_edit_and_delete_unknown_trip(desk) -> None:
    with pytest.raises(RecordNotFoundError):
        desk.edit_trip("missing", _draft())
    with pytest.raises(RecordNotFoundError):
        desk.delete_trip("missing")


def test_delete_trip_removes_it(desk) -> None:
    trip = desk.submit_trip(_draft())

    desk.delete_trip(trip.trip_id)

    assert desk.list_trips() == []


@pytest.mark.parametrize("amount", [0, -10.0])
def test_non_positive_payments_are_rejected(desk, amount) -> None:
    with pytest.raises(ValidationError):
        desk.record_payment("1", amount)

    assert desk.store.get_payments() == []


def test_payment_for_unknown_staff_is_rejected(desk) -> None:
    with pytest.raises(RecordNotFoundError):
        desk.record_payment("ghost", 10.0)


def test_payment_lowers_balance_and_cancel_restores_it(desk) -> None:
    desk.submit_trip(_draft())
    before = desk.balance_for("1").balance

    payment = desk.record_payment("1", 100.0, "Pix")
    during = desk.balance_for("1").balance
    desk.cancel_payment(payment.payment_id)
    after = desk.balance_for("1").balance

    assert payment.recorded_at == datetime(2024, 6, 10, 12, 0)
    assert during == pytest.approx(before - 100.0)
    assert after == before


def test_cancel_unknown_payment(desk) -> None:
    with pytest.raises(RecordNotFoundError):
        desk.cancel_payment("missing")


def test_role_balances_for_helpers(desk) -> None:
    desk.submit_trip(_draft())
    desk.submit_trip(_draft(trip_date=MONDAY))

    statements = {item.member.staff_id: item for item in desk.role_balances(StaffRole.HELPER)}

    assert statements["3"].earned == pytest.approx(60.0)
    assert statements["4"].earned == 0


def test_windowed_role_balances(desk) -> None:
    desk.submit_trip(_draft(trip_date=date(2024, 5, 4)))
    desk.submit_trip(_draft(trip_date=SATURDAY, distance_km=10))
    window = parse_window("2024-06-01", "2024-06-30")

    statements = desk.role_balances(StaffRole.DRIVER, mode=BalanceMode.WINDOWED, window=window)

    carlos = next(item for item in statements if item.member.staff_id == "1")
    assert carlos.earned == pytest.approx(25.0)


def test_parse_window_requires_both_bounds() -> None:
    assert parse_window(None, None) is None
    with pytest.raises(ValidationError):
        parse_window("2024-06-01", None)
    with pytest.raises(ValidationError):
        parse_window("2024-06-30", "2024-06-01")


def test_staff_create_edit_and_remove(desk) -> None:
    created = desk.save_staff_member(
        StaffDraft(name="Ana Lima", role=StaffRole.HELPER, km_rate=5.0, plate="ZZZ")
    )
    assert created.km_rate is None
    assert created.plate is None

    edited = desk.save_staff_member(
        StaffDraft(name="Ana Lima", role=StaffRole.DRIVER, km_rate=2.0), staff_id=created.staff_id
    )
    assert edited.km_rate == pytest.approx(2.0)

    desk.remove_staff_member(created.staff_id)
    assert created.staff_id not in desk.directory()


def test_removed_driver_degrades_to_placeholder(desk) -> None:
    trip = desk.submit_trip(_draft())

    desk.remove_staff_member("1")

    assert desk.directory().display_name(trip.driver_ids[0]) == REMOVED_PLACEHOLDER
    assert desk.get_trip(trip.trip_id).total_cost == pytest.approx(460.0)


def test_staff_validation(desk) -> None:
    with pytest.raises(ValidationError):
        desk.save_staff_member(StaffDraft(name="", role=StaffRole.DRIVER))
    with pytest.raises(ValidationError):
        desk.save_staff_member(StaffDraft(name="Rui", role=StaffRole.DRIVER, km_rate=-1))
    with pytest.raises(RecordNotFoundError):
        desk.save_staff_member(StaffDraft(name="Rui", role=StaffRole.DRIVER), staff_id="missing")


def test_invalid_rate_update_is_a_validation_error(desk) -> None:
    with pytest.raises(ValidationError):
        desk.update_rates({"ctRate": -5})


def test_id_generator_is_unique_within_a_tick() -> None:
    generator = IdGenerator(clock=lambda: 1717200000.0)

    assert [generator(), generator(), generator()] == [
        "1717200000000",
        "1717200000001",
        "1717200000002",
    ]

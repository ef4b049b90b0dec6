"""Mini README: Operations desk, the layer between callers and the core.

Structure:
    * TripDraft / StaffDraft - raw submissions from a form or API body.
    * validate_trip_draft / validate_payment_amount - business validation.
    * IdGenerator - timestamp-derived identifiers, unique per process.
    * OperationsDesk - submit/edit/delete trips, save/remove staff,
      record/cancel payments, save rates and produce statements.

The costing and ledger functions never reject input. Everything that must
be refused before it is persisted (a trip without drivers, a zero payment,
a negative distance) is checked here and raised as ``ValidationError``.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional

from .dashboard import summarise_trips
from .errors import RecordNotFoundError, ValidationError
from .finance import (
    BalanceMode,
    DateWindow,
    Payment,
    StaffBalance,
    compute_balance,
    compute_role_balances,
)
from .logging_utils import get_logger
from .rates import RateSettings
from .staff import StaffDirectory, StaffMember, StaffRole
from .storage import JsonStore
from .trips import (
    JobType,
    Trip,
    TripCost,
    TripStatus,
    build_trip,
    compute_trip_cost,
    parse_trip_date,
)

LOGGER = get_logger(__name__)


@dataclass(slots=True)
class TripDraft:
    """Trip facts as submitted, before costing."""

    trip_date: date
    client_name: str
    origin: str
    destination: str
    distance_km: float
    job_type: JobType = JobType.MRI
    status: TripStatus = TripStatus.OPEN
    driver_ids: List[str] = field(default_factory=list)
    helper_ids: List[str] = field(default_factory=list)
    notes: Optional[str] = None


@dataclass(slots=True)
class StaffDraft:
    name: str
    role: StaffRole
    phone: Optional[str] = None
    vehicle_type: Optional[str] = None
    plate: Optional[str] = None
    km_rate: Optional[float] = None
    active: bool = True


def _unique(ids: Iterable[str]) -> List[str]:
    """Drop repeated ids, keeping first-seen order."""

    return list(dict.fromkeys(ids))


def validate_trip_draft(draft: TripDraft, directory: StaffDirectory) -> None:
    """Reject drafts a trip form would not let through."""

    problems: List[str] = []
    for label, value in (
        ("client name", draft.client_name),
        ("origin", draft.origin),
        ("destination", draft.destination),
    ):
        if not value or not value.strip():
            problems.append(f"A {label} is required.")
    if draft.distance_km < 0:
        problems.append("Distance cannot be negative.")
    if not draft.driver_ids:
        problems.append("Select at least one driver.")
    for driver_id in draft.driver_ids:
        member = directory.get(driver_id)
        if member is None:
            problems.append(f"Driver {driver_id} does not exist.")
        elif member.role is not StaffRole.DRIVER:
            problems.append(f"{member.name} is not a driver.")
    for helper_id in draft.helper_ids:
        member = directory.get(helper_id)
        if member is None:
            problems.append(f"Helper {helper_id} does not exist.")
        elif member.role is not StaffRole.HELPER:
            problems.append(f"{member.name} is not a helper.")
    if problems:
        raise ValidationError(" ".join(problems))


def validate_payment_amount(amount: float) -> None:
    if amount is None or not amount > 0:
        raise ValidationError("Payment amount must be greater than zero.")


def validate_staff_draft(draft: StaffDraft) -> None:
    if not draft.name or not draft.name.strip():
        raise ValidationError("A name is required.")
    if draft.km_rate is not None and draft.km_rate < 0:
        raise ValidationError("The km rate cannot be negative.")


class IdGenerator:
    """Millisecond timestamps as ids, bumped when two land in the same tick."""

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._clock = clock
        self._last = 0

    def __call__(self) -> str:
        candidate = int(self._clock() * 1000)
        if candidate <= self._last:
            candidate = self._last + 1
        self._last = candidate
        return str(candidate)


class OperationsDesk:
    """Validate operator actions and apply them to the store."""

    def __init__(
        self,
        store: JsonStore,
        *,
        id_generator: Optional[Callable[[], str]] = None,
        now: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.store = store
        self._next_id = id_generator or IdGenerator()
        self._now = now

    # -- reads ---------------------------------------------------------

    def directory(self) -> StaffDirectory:
        return StaffDirectory(self.store.get_staff())

    def rates(self) -> RateSettings:
        return self.store.get_settings()

    def list_trips(self) -> List[Trip]:
        """Trips newest first."""

        return sorted(self.store.get_trips(), key=lambda trip: (trip.date, trip.trip_id), reverse=True)

    def get_trip(self, trip_id: str) -> Trip:
        for trip in self.store.get_trips():
            if trip.trip_id == trip_id:
                return trip
        raise RecordNotFoundError(f"Trip {trip_id} not found")

    # -- trips ---------------------------------------------------------

    def preview_trip_cost(self, draft: TripDraft) -> TripCost:
        """Live estimate shown while a trip is being filled in."""

        return compute_trip_cost(
            draft.trip_date,
            draft.job_type,
            _unique(draft.driver_ids),
            _unique(draft.helper_ids),
            draft.distance_km,
            self.directory(),
            self.rates(),
        )

    def _priced_trip(self, trip_id: str, draft: TripDraft) -> Trip:
        directory = self.directory()
        driver_ids = _unique(draft.driver_ids)
        helper_ids = _unique(draft.helper_ids)
        validate_trip_draft(draft, directory)
        cost = compute_trip_cost(
            draft.trip_date,
            draft.job_type,
            driver_ids,
            helper_ids,
            draft.distance_km,
            directory,
            self.rates(),
        )
        return build_trip(
            trip_id=trip_id,
            trip_date=parse_trip_date(draft.trip_date),
            client_name=draft.client_name.strip(),
            origin=draft.origin.strip(),
            destination=draft.destination.strip(),
            distance_km=float(draft.distance_km),
            job_type=draft.job_type,
            status=draft.status,
            driver_ids=driver_ids,
            helper_ids=helper_ids,
            cost=cost,
            notes=draft.notes,
        )

    def submit_trip(self, draft: TripDraft) -> Trip:
        trip = self._priced_trip(self._next_id(), draft)
        self.store.save_trip(trip)
        LOGGER.info("Submitted trip %s total=%.2f", trip.trip_id, trip.total_cost)
        return trip

    def edit_trip(self, trip_id: str, draft: TripDraft) -> Trip:
        """Replace a trip, keeping its id and re-pricing it against current rates."""

        self.get_trip(trip_id)
        trip = self._priced_trip(trip_id, draft)
        self.store.delete_trip(trip_id)
        self.store.save_trip(trip)
        LOGGER.info("Edited trip %s total=%.2f", trip_id, trip.total_cost)
        return trip

    def delete_trip(self, trip_id: str) -> None:
        self.get_trip(trip_id)
        self.store.delete_trip(trip_id)

    # -- staff ---------------------------------------------------------

    def save_staff_member(self, draft: StaffDraft, staff_id: Optional[str] = None) -> StaffMember:
        """Create a member, or replace ``staff_id`` in place when editing."""

        validate_staff_draft(draft)
        is_driver = draft.role is StaffRole.DRIVER
        member = StaffMember(
            staff_id=staff_id or self._next_id(),
            name=draft.name.strip(),
            role=draft.role,
            active=draft.active,
            phone=draft.phone or None,
            vehicle_type=draft.vehicle_type if is_driver else None,
            plate=draft.plate if is_driver else None,
            km_rate=(draft.km_rate or 0.0) if is_driver else None,
        )
        staff = self.store.get_staff()
        if staff_id is None:
            staff.append(member)
        else:
            if not any(existing.staff_id == staff_id for existing in staff):
                raise RecordNotFoundError(f"Staff member {staff_id} not found")
            staff = [member if existing.staff_id == staff_id else existing for existing in staff]
        self.store.save_staff(staff)
        return member

    def remove_staff_member(self, staff_id: str) -> None:
        if staff_id not in self.directory():
            raise RecordNotFoundError(f"Staff member {staff_id} not found")
        self.store.delete_staff(staff_id)
        LOGGER.info("Removed staff member %s; their trips and payments are kept", staff_id)

    # -- payments ------------------------------------------------------

    def record_payment(self, staff_id: str, amount: float, notes: Optional[str] = None) -> Payment:
        validate_payment_amount(amount)
        if staff_id not in self.directory():
            raise RecordNotFoundError(f"Staff member {staff_id} not found")
        payment = Payment(
            payment_id=self._next_id(),
            staff_id=staff_id,
            amount=float(amount),
            recorded_at=self._now(),
            notes=notes or None,
        )
        self.store.save_payment(payment)
        return payment

    def cancel_payment(self, payment_id: str) -> None:
        if not any(payment.payment_id == payment_id for payment in self.store.get_payments()):
            raise RecordNotFoundError(f"Payment {payment_id} not found")
        self.store.delete_payment(payment_id)

    # -- statements ----------------------------------------------------

    def role_balances(
        self,
        role: StaffRole,
        mode: BalanceMode = BalanceMode.ALL_TIME,
        window: Optional[DateWindow] = None,
    ) -> List[StaffBalance]:
        return compute_role_balances(
            role,
            self.store.get_staff(),
            self.store.get_trips(),
            self.store.get_payments(),
            self.rates(),
            mode=mode,
            window=window,
        )

    def balance_for(
        self,
        staff_id: str,
        mode: BalanceMode = BalanceMode.ALL_TIME,
        window: Optional[DateWindow] = None,
    ) -> StaffBalance:
        member = self.directory().get(staff_id)
        if member is None:
            raise RecordNotFoundError(f"Staff member {staff_id} not found")
        return compute_balance(
            member,
            self.store.get_trips(),
            self.store.get_payments(),
            self.rates(),
            mode=mode,
            window=window,
        )

    def dashboard(self, window: Optional[DateWindow] = None) -> Dict[str, Any]:
        return summarise_trips(self.store.get_trips(), window)

    # -- settings ------------------------------------------------------

    def update_rates(self, changes: Mapping[str, Any]) -> RateSettings:
        """Apply ``changes`` over the current rates; existing trips keep their snapshot."""

        try:
            updated = self.rates().merged_with(changes)
        except ValueError as error:
            raise ValidationError(str(error)) from error
        self.store.save_settings(updated)
        return updated


def parse_window(start: Optional[str], end: Optional[str]) -> Optional[DateWindow]:
    """Build a window from optional ISO bounds; both or neither must be given."""

    if not start and not end:
        return None
    if not start or not end:
        raise ValidationError("A window needs both a start and an end date.")
    try:
        return DateWindow(start=parse_trip_date(start), end=parse_trip_date(end))
    except ValueError as error:
        raise ValidationError(str(error)) from error


def resolve_balance_mode(mode: Optional[BalanceMode], window: Optional[DateWindow]) -> BalanceMode:
    """Pick the statement mode; explicit bounds imply a windowed statement."""

    if mode is None:
        return BalanceMode.WINDOWED if window else BalanceMode.ALL_TIME
    if mode is BalanceMode.ALL_TIME and window is not None:
        raise ValidationError("An all-time statement cannot take start or end dates.")
    return mode

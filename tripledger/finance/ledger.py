"""Mini README: Balance ledger for drivers and helpers.

Structure:
    * Payment - dataclass for an amount paid to a staff member.
    * BalanceMode / DateWindow - all-time versus windowed statements.
    * TripEarning - one finished trip's contribution to a statement.
    * StaffBalance - earned, paid and outstanding balance with breakdowns.
    * compute_balance - statement for a single member.
    * compute_role_balances - statements for every active member of a role.

Earnings are recomputed live. Drivers earn distance times their *current*
km rate; helpers earn the *current* weekend bonus for the job type. Trip
cost snapshots are therefore not reused here, which can make a statement
differ from the trip's stored total after rates change.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Dict, Iterable, List, Optional

from ..logging_utils import get_logger
from ..rates import RateSettings
from ..staff import StaffMember, StaffRole
from ..trips import Trip, helper_bonus_for

LOGGER = get_logger(__name__)


@dataclass(slots=True)
class Payment:
    """Money handed to a staff member against their balance."""

    payment_id: str
    staff_id: str
    amount: float
    recorded_at: datetime
    notes: Optional[str] = None

    def as_dict(self) -> Dict[str, object]:
        payload: Dict[str, object] = {
            "id": self.payment_id,
            "staffId": self.staff_id,
            "amount": self.amount,
            "date": self.recorded_at.isoformat(),
        }
        if self.notes:
            payload["notes"] = self.notes
        return payload

    @classmethod
    def from_dict(cls, data: Dict[str, object]) -> "Payment":
        return cls(
            payment_id=str(data["id"]),
            staff_id=str(data["staffId"]),
            amount=float(data["amount"]),
            recorded_at=_parse_timestamp(data["date"]),
            notes=str(data["notes"]) if data.get("notes") else None,
        )


def _parse_timestamp(value: object) -> datetime:
    """Parse ISO timestamps, including the trailing ``Z`` browsers emit."""

    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        return datetime.fromisoformat(text)
    raise ValueError("Payment dates must be ISO strings or datetime instances.")


class BalanceMode(str, Enum):
    """Accounting horizon of a statement."""

    ALL_TIME = "all_time"
    WINDOWED = "windowed"


@dataclass(frozen=True, slots=True)
class DateWindow:
    """Inclusive calendar range."""

    start: date
    end: date

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise ValueError("Window start must not be after its end.")

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end


def current_month_window(today: Optional[date] = None) -> DateWindow:
    """First day of the current month through ``today``."""

    today = today or date.today()
    return DateWindow(start=today.replace(day=1), end=today)


@dataclass(slots=True)
class TripEarning:
    """A trip counted in a statement and what it earned the member."""

    trip: Trip
    amount: float

    def as_dict(self) -> Dict[str, object]:
        return {
            "tripId": self.trip.trip_id,
            "date": self.trip.date.isoformat(),
            "clientName": self.trip.client_name,
            "jobType": self.trip.job_type.value,
            "distanceKm": self.trip.distance_km,
            "amount": self.amount,
        }


@dataclass(slots=True)
class StaffBalance:
    """Earned versus paid for one member."""

    member: StaffMember
    mode: BalanceMode
    window: Optional[DateWindow]
    earned: float
    paid: float
    trip_breakdown: List[TripEarning] = field(default_factory=list)
    payment_breakdown: List[Payment] = field(default_factory=list)

    @property
    def balance(self) -> float:
        """Positive when money is still owed to the member."""

        return self.earned - self.paid

    @property
    def is_settled(self) -> bool:
        return self.balance <= 0

    def as_dict(self) -> Dict[str, object]:
        return {
            "staffId": self.member.staff_id,
            "name": self.member.name,
            "role": self.member.role.value,
            "mode": self.mode.value,
            "window": (
                {"start": self.window.start.isoformat(), "end": self.window.end.isoformat()}
                if self.window
                else None
            ),
            "earned": self.earned,
            "paid": self.paid,
            "balance": self.balance,
            "trips": [earning.as_dict() for earning in self.trip_breakdown],
            "payments": [payment.as_dict() for payment in self.payment_breakdown],
        }


def _earning_for(member: StaffMember, trip: Trip, rates: RateSettings) -> Optional[float]:
    """Amount ``trip`` earns ``member``, or ``None`` when it does not qualify."""

    if not trip.is_finished:
        return None
    if member.role is StaffRole.HELPER:
        if not trip.is_weekend or member.staff_id not in trip.helper_ids:
            return None
        return helper_bonus_for(trip.job_type, trip.is_weekend, rates)
    if member.staff_id not in trip.assigned_driver_ids:
        return None
    return trip.distance_km * member.effective_km_rate


def compute_balance(
    member: StaffMember,
    trips: Iterable[Trip],
    payments: Iterable[Payment],
    rates: RateSettings,
    mode: BalanceMode = BalanceMode.ALL_TIME,
    window: Optional[DateWindow] = None,
) -> StaffBalance:
    """Net a member's live earnings on finished trips against their payments.

    In ``WINDOWED`` mode only trips dated inside the window and payments
    recorded inside it are summed; without an explicit window the current
    month to date is used.
    """

    if mode is BalanceMode.WINDOWED:
        window = window or current_month_window()
    else:
        window = None

    earnings: List[TripEarning] = []
    for trip in trips:
        if window and not window.contains(trip.date):
            continue
        amount = _earning_for(member, trip, rates)
        if amount is not None:
            earnings.append(TripEarning(trip=trip, amount=amount))

    member_payments = [
        payment
        for payment in payments
        if payment.staff_id == member.staff_id
        and (window is None or window.contains(payment.recorded_at.date()))
    ]

    earned = sum(earning.amount for earning in earnings)
    paid = sum(payment.amount for payment in member_payments)
    earnings.sort(key=lambda earning: (earning.trip.date, earning.trip.trip_id), reverse=True)
    member_payments.sort(key=lambda payment: _sortable(payment.recorded_at), reverse=True)
    LOGGER.debug(
        "Balance for %s (%s): earned=%.2f paid=%.2f trips=%s payments=%s",
        member.staff_id,
        mode.value,
        earned,
        paid,
        len(earnings),
        len(member_payments),
    )
    return StaffBalance(
        member=member,
        mode=mode,
        window=window,
        earned=float(earned),
        paid=float(paid),
        trip_breakdown=earnings,
        payment_breakdown=member_payments,
    )


def _sortable(moment: datetime) -> float:
    # Naive and aware timestamps cannot be compared directly.
    return moment.timestamp()


def compute_role_balances(
    role: StaffRole,
    staff: Iterable[StaffMember],
    trips: Iterable[Trip],
    payments: Iterable[Payment],
    rates: RateSettings,
    mode: BalanceMode = BalanceMode.ALL_TIME,
    window: Optional[DateWindow] = None,
) -> List[StaffBalance]:
    """Statements for every active member holding ``role``."""

    trips = list(trips)
    payments = list(payments)
    return [
        compute_balance(member, trips, payments, rates, mode=mode, window=window)
        for member in staff
        if member.active and member.role is role
    ]

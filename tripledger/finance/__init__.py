"""Mini README: Staff balance reconciliation.

This package nets what each driver or helper has earned on finished trips
against the payments recorded for them. Balances are always derived from
the records passed in; no running total is stored anywhere, so cancelling
a payment simply means computing again without it.
"""

from .ledger import (
    BalanceMode,
    DateWindow,
    Payment,
    StaffBalance,
    TripEarning,
    compute_balance,
    compute_role_balances,
    current_month_window,
)

__all__ = [
    "BalanceMode",
    "DateWindow",
    "Payment",
    "StaffBalance",
    "TripEarning",
    "compute_balance",
    "compute_role_balances",
    "current_month_window",
]

"""Mini README: Stateless quote calculator for ad hoc freight jobs.

The estimator never touches stored trips or staff. It prices vehicles,
extra helpers, cargo insurance, crane equipment and miscellaneous costs,
then applies tax and margin and rounds the sale price up.
"""

from .estimator import (
    CRANE_PRICES,
    CRANE_TRUCK_PRICE,
    HELPER_PRICE,
    VEHICLE_RATES,
    BudgetInput,
    BudgetQuote,
    CraneLine,
    VehicleLine,
    estimate_budget,
)

__all__ = [
    "CRANE_PRICES",
    "CRANE_TRUCK_PRICE",
    "HELPER_PRICE",
    "VEHICLE_RATES",
    "BudgetInput",
    "BudgetQuote",
    "CraneLine",
    "VehicleLine",
    "estimate_budget",
]

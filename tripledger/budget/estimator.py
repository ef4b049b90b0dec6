"""Mini README: Budget/quote estimator.

Structure:
    * VEHICLE_RATES / CRANE_PRICES - static price tables keyed by type name.
    * HELPER_PRICE / CRANE_TRUCK_PRICE - fixed unit prices.
    * VehicleLine / CraneLine - line items entered by the operator.
    * BudgetInput - every figure the quote depends on.
    * BudgetQuote - intermediate totals and the suggested sale price.
    * estimate_budget - pure calculation.

Order of computation: vehicles, helpers, insurance, equipment, subtotal,
tax on the subtotal, final cost, margin on the final cost, then the sale
price rounded up to a whole currency unit. Unknown vehicle or crane types
price at 0 so a half-filled form still produces a quote.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Dict, List

from ..logging_utils import get_logger

LOGGER = get_logger(__name__)

# Per-kilometre rate for each vehicle class.
VEHICLE_RATES: Dict[str, float] = {
    "Carreta": 7.00,
    "Truck": 6.00,
    "Toco": 4.00,
    "Vuc": 3.00,
    "Carro de Apoio": 2.40,
    "Van": 2.00,
    "Fiorino": 1.90,
}

# Flat hire price for each crane capacity.
CRANE_PRICES: Dict[str, float] = {
    "30 ton": 8100.0,
    "50 ton": 9150.0,
    "70 ton": 10350.0,
    "90 ton": 12520.0,
    "110 ton": 24900.0,
    "120 ton": 26500.0,
    "160 ton": 27800.0,
    "200 ton": 37000.0,
    "220 ton": 47320.0,
    "250 ton": 63000.0,
    "300 ton": 86100.0,
    "500 ton": 170000.0,
}

HELPER_PRICE = 350.0
CRANE_TRUCK_PRICE = 2500.0


@dataclass(slots=True)
class VehicleLine:
    vehicle_type: str
    quantity: float = 1
    km: float = 0.0

    @property
    def total(self) -> float:
        return self.quantity * self.km * VEHICLE_RATES.get(self.vehicle_type, 0.0)


@dataclass(slots=True)
class CraneLine:
    crane_type: str
    quantity: float = 1

    @property
    def total(self) -> float:
        return self.quantity * CRANE_PRICES.get(self.crane_type, 0.0)


@dataclass(slots=True)
class BudgetInput:
    """Everything the quote depends on, with the form's default percentages."""

    vehicles: List[VehicleLine] = field(default_factory=list)
    helper_count: float = 0
    merchandise_value: float = 0.0
    insurance_percent: float = 0.5
    crane_truck_count: float = 0
    cranes: List[CraneLine] = field(default_factory=list)
    others_value: float = 0.0
    tax_rate: float = 18.0
    margin_percent: float = 30.0


@dataclass(frozen=True, slots=True)
class BudgetQuote:
    vehicle_total: float
    helper_total: float
    insurance_total: float
    equipment_total: float
    others_total: float
    sub_total: float
    tax_amount: float
    final_cost: float
    sale_price_exact: float
    sale_price_rounded: int

    @property
    def profit(self) -> float:
        """Difference between the rounded sale price and the final cost."""

        return self.sale_price_rounded - self.final_cost

    def as_dict(self) -> Dict[str, float]:
        return {
            "vehicleTotal": self.vehicle_total,
            "helperTotal": self.helper_total,
            "insuranceTotal": self.insurance_total,
            "equipmentTotal": self.equipment_total,
            "othersTotal": self.others_total,
            "subTotal": self.sub_total,
            "taxAmount": self.tax_amount,
            "finalCost": self.final_cost,
            "salePriceExact": self.sale_price_exact,
            "salePriceRounded": self.sale_price_rounded,
            "profit": self.profit,
        }


def estimate_budget(budget: BudgetInput) -> BudgetQuote:
    """Compute the quote for ``budget``."""

    vehicle_total = sum((line.total for line in budget.vehicles), 0.0)
    helper_total = budget.helper_count * HELPER_PRICE
    insurance_total = budget.merchandise_value * (budget.insurance_percent / 100)
    equipment_total = budget.crane_truck_count * CRANE_TRUCK_PRICE + sum(
        (line.total for line in budget.cranes), 0.0
    )
    sub_total = vehicle_total + helper_total + insurance_total + equipment_total + budget.others_value
    tax_amount = sub_total * (budget.tax_rate / 100)
    final_cost = sub_total + tax_amount
    sale_price_exact = final_cost * (1 + budget.margin_percent / 100)
    # Always round up: a quote is never allowed to undercharge.
    sale_price_rounded = math.ceil(sale_price_exact)

    unknown = [line.vehicle_type for line in budget.vehicles if line.vehicle_type not in VEHICLE_RATES]
    unknown += [line.crane_type for line in budget.cranes if line.crane_type not in CRANE_PRICES]
    if unknown:
        LOGGER.debug("Unpriced line item types contributed zero: %s", unknown)

    return BudgetQuote(
        vehicle_total=vehicle_total,
        helper_total=float(helper_total),
        insurance_total=insurance_total,
        equipment_total=float(equipment_total),
        others_total=float(budget.others_value),
        sub_total=sub_total,
        tax_amount=tax_amount,
        final_cost=final_cost,
        sale_price_exact=sale_price_exact,
        sale_price_rounded=sale_price_rounded,
    )

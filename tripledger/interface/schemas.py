"""Mini README: Request bodies accepted by the JSON API.

Structure:
    * StaffPayload, TripPayload, PaymentPayload - operator submissions.
    * BudgetPayload with VehiclePayload / CranePayload - estimator input.

Bodies use the camelCase keys of the front end. Enum-like fields arrive as
plain strings and are coerced by the domain ``from_str`` helpers so legacy
labels keep working; business rules are checked by the operations desk,
which answers with HTTP 400 rather than a schema error.
"""

from __future__ import annotations

from datetime import date
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..budget import BudgetInput, CraneLine, VehicleLine
from ..errors import ValidationError
from ..operations import StaffDraft, TripDraft
from ..staff import StaffRole
from ..trips import JobType, TripStatus


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class StaffPayload(_CamelModel):
    name: str
    role: str = StaffRole.DRIVER.value
    active: bool = True
    phone: Optional[str] = None
    vehicle_type: Optional[str] = Field(None, alias="vehicleType")
    plate: Optional[str] = None
    km_rate: Optional[float] = Field(None, alias="kmRate")

    def to_draft(self) -> StaffDraft:
        try:
            role = StaffRole.from_str(self.role)
        except ValueError as error:
            raise ValidationError(str(error)) from error
        return StaffDraft(
            name=self.name,
            role=role,
            phone=self.phone,
            vehicle_type=self.vehicle_type,
            plate=self.plate,
            km_rate=self.km_rate,
            active=self.active,
        )


class TripPayload(_CamelModel):
    trip_date: date = Field(alias="date")
    client_name: str = Field("", alias="clientName")
    origin: str = ""
    destination: str = ""
    distance_km: float = Field(0.0, alias="distanceKm")
    job_type: str = Field(JobType.MRI.value, alias="jobType")
    status: str = TripStatus.OPEN.value
    driver_ids: List[str] = Field(default_factory=list, alias="driverIds")
    helper_ids: List[str] = Field(default_factory=list, alias="helperIds")
    notes: Optional[str] = None

    def to_draft(self) -> TripDraft:
        try:
            job_type = JobType.from_str(self.job_type)
            status = TripStatus.from_str(self.status)
        except ValueError as error:
            raise ValidationError(str(error)) from error
        return TripDraft(
            trip_date=self.trip_date,
            client_name=self.client_name,
            origin=self.origin,
            destination=self.destination,
            distance_km=self.distance_km,
            job_type=job_type,
            status=status,
            driver_ids=list(self.driver_ids),
            helper_ids=list(self.helper_ids),
            notes=self.notes,
        )


class PaymentPayload(_CamelModel):
    staff_id: str = Field(alias="staffId")
    amount: float
    notes: Optional[str] = None


class VehiclePayload(_CamelModel):
    vehicle_type: str = Field("Truck", alias="type")
    quantity: float = 1
    km: float = 0.0


class CranePayload(_CamelModel):
    crane_type: str = Field("30 ton", alias="type")
    quantity: float = 1


class BudgetPayload(_CamelModel):
    vehicles: List[VehiclePayload] = Field(default_factory=list)
    helper_count: float = Field(0, alias="helperCount")
    merchandise_value: float = Field(0.0, alias="merchandiseValue")
    insurance_percent: float = Field(0.5, alias="insurancePercent")
    crane_truck_count: float = Field(0, alias="craneTruckCount")
    cranes: List[CranePayload] = Field(default_factory=list)
    others_value: float = Field(0.0, alias="othersValue")
    tax_rate: float = Field(18.0, alias="taxRate")
    margin_percent: float = Field(30.0, alias="marginPercent")

    def to_input(self) -> BudgetInput:
        return BudgetInput(
            vehicles=[
                VehicleLine(vehicle_type=line.vehicle_type, quantity=line.quantity, km=line.km)
                for line in self.vehicles
            ],
            helper_count=self.helper_count,
            merchandise_value=self.merchandise_value,
            insurance_percent=self.insurance_percent,
            crane_truck_count=self.crane_truck_count,
            cranes=[CraneLine(crane_type=line.crane_type, quantity=line.quantity) for line in self.cranes],
            others_value=self.others_value,
            tax_rate=self.tax_rate,
            margin_percent=self.margin_percent,
        )

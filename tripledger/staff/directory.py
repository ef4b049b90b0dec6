"""Mini README: Staff members, roles and id-based lookups.

Structure:
    * StaffRole - closed enumeration of driver and helper roles.
    * StaffMember - dataclass for one crew member; driver-only fields are
      stripped from helpers when records are built from stored data.
    * StaffDirectory - read-only lookup keyed by identifier.

Role values are storage keys (``driver``/``helper``); the display label is a
separate attribute so relabelling never changes what stored data matches.
Legacy exports stored the Portuguese display strings, which ``from_str``
still recognises.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, Iterator, List, Mapping, Optional

from ..logging_utils import get_logger

LOGGER = get_logger(__name__)

REMOVED_PLACEHOLDER = "removed"


class StaffRole(str, Enum):
    """Enumerate the roles a crew member can hold."""

    DRIVER = "driver"
    HELPER = "helper"

    @property
    def label(self) -> str:
        return _ROLE_LABELS[self]

    @classmethod
    def from_str(cls, value: str) -> "StaffRole":
        """Coerce a storage key, label or legacy display string into a role."""

        try:
            normalised = value.strip().lower()
            return _ROLE_LOOKUP.get(normalised) or cls(normalised)
        except (ValueError, AttributeError) as error:
            raise ValueError(f"Unsupported staff role: {value}") from error


_ROLE_LABELS = {StaffRole.DRIVER: "Driver", StaffRole.HELPER: "Helper"}
_ROLE_LOOKUP = {
    "motorista": StaffRole.DRIVER,
    "ajudante": StaffRole.HELPER,
}


@dataclass(slots=True)
class StaffMember:
    """A driver or helper that trips and payments refer to by id."""

    staff_id: str
    name: str
    role: StaffRole
    active: bool = True
    phone: Optional[str] = None
    vehicle_type: Optional[str] = None
    plate: Optional[str] = None
    km_rate: Optional[float] = None

    @property
    def is_driver(self) -> bool:
        return self.role is StaffRole.DRIVER

    @property
    def effective_km_rate(self) -> float:
        """Per-kilometre rate, reading an absent rate as 0."""

        return float(self.km_rate or 0.0)

    def as_dict(self) -> Dict[str, object]:
        payload: Dict[str, object] = {
            "id": self.staff_id,
            "name": self.name,
            "role": self.role.value,
            "active": self.active,
        }
        if self.phone:
            payload["phone"] = self.phone
        if self.is_driver:
            payload["vehicleType"] = self.vehicle_type
            payload["plate"] = self.plate
            payload["kmRate"] = self.km_rate
        return payload

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> "StaffMember":
        """Build a member from stored data, dropping driver-only fields for helpers."""

        role = StaffRole.from_str(str(data.get("role", StaffRole.DRIVER.value)))
        is_driver = role is StaffRole.DRIVER
        km_rate = data.get("kmRate") if is_driver else None
        return cls(
            staff_id=str(data["id"]),
            name=str(data.get("name", "")),
            role=role,
            active=bool(data.get("active", True)),
            phone=_optional_str(data.get("phone")),
            vehicle_type=_optional_str(data.get("vehicleType")) if is_driver else None,
            plate=_optional_str(data.get("plate")) if is_driver else None,
            km_rate=float(km_rate) if km_rate not in (None, "") else None,
        )


def _optional_str(value: object) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


class StaffDirectory:
    """Resolve staff identifiers without ever failing on a missing member."""

    def __init__(self, members: Iterable[StaffMember] = ()) -> None:
        self._members: Dict[str, StaffMember] = {member.staff_id: member for member in members}

    def __iter__(self) -> Iterator[StaffMember]:
        return iter(self._members.values())

    def __len__(self) -> int:
        return len(self._members)

    def __contains__(self, staff_id: object) -> bool:
        return staff_id in self._members

    def get(self, staff_id: str) -> Optional[StaffMember]:
        return self._members.get(staff_id)

    def km_rate_for(self, staff_id: str) -> float:
        """Return a driver's rate, or 0 when the id is unknown."""

        member = self._members.get(staff_id)
        if member is None:
            LOGGER.debug("Staff %s not in directory; contributing zero freight", staff_id)
            return 0.0
        return member.effective_km_rate

    def display_name(self, staff_id: str) -> str:
        member = self._members.get(staff_id)
        return member.name if member else REMOVED_PLACEHOLDER

    def active_with_role(self, role: StaffRole) -> List[StaffMember]:
        """Return active members of ``role`` in directory order."""

        return [member for member in self._members.values() if member.active and member.role is role]

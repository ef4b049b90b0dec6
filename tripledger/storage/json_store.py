"""Mini README: JSON document store keyed by entity type.

Structure:
    * DEMO_STAFF - crew returned until a staff list has been saved.
    * JsonStore - get/save/delete for each collection plus rate settings.

Each collection lives in its own file (``staff.json``, ``trips.json``,
``payments.json``, ``settings.json``). Writes go through a temporary file
and ``os.replace`` so a crash never leaves half a document behind. Records
use the camelCase layout of the browser exports, which lets an exported
dataset be dropped into the data directory as-is.
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Iterable, List, Optional

from ..errors import StorageError
from ..finance import Payment
from ..logging_utils import get_logger
from ..rates import DEFAULT_RATES, RateSettings
from ..staff import StaffMember, StaffRole
from ..trips import Trip

LOGGER = get_logger(__name__)

STAFF_FILE = "staff.json"
TRIPS_FILE = "trips.json"
PAYMENTS_FILE = "payments.json"
SETTINGS_FILE = "settings.json"

DEMO_STAFF: List[StaffMember] = [
    StaffMember(
        staff_id="1",
        name="Carlos Silva",
        role=StaffRole.DRIVER,
        phone="(11) 99999-1234",
        vehicle_type="Fiat Fiorino",
        plate="ABC-1234",
        km_rate=2.50,
    ),
    StaffMember(
        staff_id="2",
        name="Roberto Santos",
        role=StaffRole.DRIVER,
        phone="(11) 98888-5678",
        vehicle_type="Renault Master",
        plate="XYZ-9876",
        km_rate=3.20,
    ),
    StaffMember(staff_id="3", name="João Souza", role=StaffRole.HELPER, phone="(11) 97777-1111"),
    StaffMember(staff_id="4", name="Pedro Alves", role=StaffRole.HELPER, phone="(11) 96666-2222"),
]


class JsonStore:
    """Persist ledger collections as JSON documents in ``directory``."""

    def __init__(self, directory: Path) -> None:
        self.directory = Path(directory)
        self.directory.mkdir(parents=True, exist_ok=True)
        LOGGER.debug("JSON store rooted at %s", self.directory)

    # -- low level -----------------------------------------------------

    def _path(self, filename: str) -> Path:
        return self.directory / filename

    def _read(self, filename: str) -> Optional[Any]:
        path = self._path(filename)
        if not path.exists():
            return None
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as error:
            raise StorageError(f"Stored collection {path} is not valid JSON") from error

    def _write(self, filename: str, payload: Any) -> None:
        path = self._path(filename)
        handle, temp_name = tempfile.mkstemp(dir=self.directory, prefix=f".{filename}.", suffix=".tmp")
        try:
            with os.fdopen(handle, "w", encoding="utf-8") as stream:
                json.dump(payload, stream, ensure_ascii=False, indent=2)
            os.replace(temp_name, path)
        except BaseException:
            Path(temp_name).unlink(missing_ok=True)
            raise
        LOGGER.debug("Wrote %s", path)

    # -- staff ---------------------------------------------------------

    def get_staff(self) -> List[StaffMember]:
        data = self._read(STAFF_FILE)
        if data is None:
            return [StaffMember.from_dict(member.as_dict()) for member in DEMO_STAFF]
        return [StaffMember.from_dict(item) for item in data]

    def save_staff(self, staff: Iterable[StaffMember]) -> None:
        members = list(staff)
        self._write(STAFF_FILE, [member.as_dict() for member in members])
        LOGGER.info("Saved %s staff members", len(members))

    def delete_staff(self, staff_id: str) -> None:
        self.save_staff(member for member in self.get_staff() if member.staff_id != staff_id)

    # -- trips ---------------------------------------------------------

    def get_trips(self) -> List[Trip]:
        data = self._read(TRIPS_FILE) or []
        return [Trip.from_dict(item) for item in data]

    def save_trip(self, trip: Trip) -> None:
        """Append ``trip`` to the stored collection."""

        trips = self.get_trips()
        trips.append(trip)
        self._write(TRIPS_FILE, [item.as_dict() for item in trips])
        LOGGER.info("Saved trip %s", trip.trip_id)

    def delete_trip(self, trip_id: str) -> None:
        trips = [trip for trip in self.get_trips() if trip.trip_id != trip_id]
        self._write(TRIPS_FILE, [trip.as_dict() for trip in trips])
        LOGGER.info("Deleted trip %s", trip_id)

    # -- payments ------------------------------------------------------

    def get_payments(self) -> List[Payment]:
        data = self._read(PAYMENTS_FILE) or []
        return [Payment.from_dict(item) for item in data]

    def save_payment(self, payment: Payment) -> None:
        payments = self.get_payments()
        payments.append(payment)
        self._write(PAYMENTS_FILE, [item.as_dict() for item in payments])
        LOGGER.info("Saved payment %s for staff %s", payment.payment_id, payment.staff_id)

    def delete_payment(self, payment_id: str) -> None:
        payments = [payment for payment in self.get_payments() if payment.payment_id != payment_id]
        self._write(PAYMENTS_FILE, [payment.as_dict() for payment in payments])
        LOGGER.info("Deleted payment %s", payment_id)

    # -- settings ------------------------------------------------------

    def get_settings(self) -> RateSettings:
        """Return stored rates merged over the defaults."""

        data = self._read(SETTINGS_FILE)
        if not data:
            return DEFAULT_RATES
        if not isinstance(data, dict):
            raise StorageError(f"Stored settings in {self._path(SETTINGS_FILE)} must be an object")
        return DEFAULT_RATES.merged_with(data)

    def save_settings(self, settings: RateSettings) -> None:
        self._write(SETTINGS_FILE, settings.as_dict())
        LOGGER.info("Saved rate settings")

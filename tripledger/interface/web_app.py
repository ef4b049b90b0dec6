"""Mini README: FastAPI JSON API for the trip ledger.

Structure:
    * create_application - application factory wiring the store, the
      operations desk, the insight generator and every route.
    * Exception handlers - ``ValidationError`` becomes HTTP 400 and
      ``RecordNotFoundError`` becomes HTTP 404.

Routes cover staff, trips (with a live cost preview), payments, balance
statements per role, rate settings, the budget estimator, the dashboard
summary and the insight report. Responses use the camelCase layout of the
stored records.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from fastapi import Body, FastAPI, Request
from fastapi.responses import JSONResponse

from ..budget import estimate_budget
from ..configuration import get_settings
from ..errors import RecordNotFoundError, ValidationError
from ..finance import BalanceMode
from ..insights import InsightGenerator
from ..logging_utils import get_logger
from ..operations import OperationsDesk, parse_window, resolve_balance_mode
from ..staff import StaffDirectory, StaffRole
from ..storage import JsonStore
from ..trips import Trip
from .schemas import BudgetPayload, PaymentPayload, StaffPayload, TripPayload

LOGGER = get_logger(__name__)


def _trip_view(trip: Trip, directory: StaffDirectory) -> Dict[str, Any]:
    """Stored trip plus resolved crew names for display."""

    payload = trip.as_dict()
    payload["driverNames"] = [directory.display_name(staff_id) for staff_id in trip.assigned_driver_ids]
    payload["helperNames"] = [directory.display_name(staff_id) for staff_id in trip.helper_ids]
    payload["helperBonusTotal"] = trip.helper_bonus_total
    return payload


def create_application(
    store: Optional[JsonStore] = None,
    insight_generator: Optional[InsightGenerator] = None,
) -> FastAPI:
    """Create the FastAPI application with routes and dependencies."""

    if store is None or insight_generator is None:
        settings = get_settings()
        store = store or JsonStore(settings.data_directory)
        insight_generator = insight_generator or InsightGenerator(
            settings.gemini_api_key,
            model=settings.gemini_model,
            timeout=settings.insights_timeout_seconds,
        )
    desk = OperationsDesk(store)
    insights = insight_generator

    app = FastAPI(title="Trip Ledger", version="0.1.0")

    @app.exception_handler(ValidationError)
    async def _rejected(request: Request, error: ValidationError) -> JSONResponse:
        LOGGER.info("Rejected %s %s: %s", request.method, request.url.path, error)
        return JSONResponse(status_code=400, content={"detail": str(error)})

    @app.exception_handler(RecordNotFoundError)
    async def _missing(request: Request, error: RecordNotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": str(error)})

    # -- staff ---------------------------------------------------------

    @app.get("/staff")
    async def list_staff() -> List[Dict[str, Any]]:
        return [member.as_dict() for member in store.get_staff()]

    @app.post("/staff", status_code=201)
    async def create_staff(payload: StaffPayload) -> Dict[str, Any]:
        member = desk.save_staff_member(payload.to_draft())
        LOGGER.info("Created staff member %s (%s)", member.staff_id, member.role.value)
        return member.as_dict()

    @app.put("/staff/{staff_id}")
    async def update_staff(staff_id: str, payload: StaffPayload) -> Dict[str, Any]:
        return desk.save_staff_member(payload.to_draft(), staff_id=staff_id).as_dict()

    @app.delete("/staff/{staff_id}", status_code=204)
    async def delete_staff(staff_id: str) -> None:
        desk.remove_staff_member(staff_id)

    @app.get("/staff/{staff_id}/balance")
    async def staff_balance(
        staff_id: str,
        mode: Optional[BalanceMode] = None,
        start: Optional[str] = None,
        end: Optional[str] = None,
    ) -> Dict[str, Any]:
        window = parse_window(start, end)
        return desk.balance_for(staff_id, mode=resolve_balance_mode(mode, window), window=window).as_dict()

    # -- trips ---------------------------------------------------------

    @app.get("/trips")
    async def list_trips() -> List[Dict[str, Any]]:
        directory = desk.directory()
        return [_trip_view(trip, directory) for trip in desk.list_trips()]

    @app.post("/trips/preview")
    async def preview_trip(payload: TripPayload) -> Dict[str, Any]:
        return desk.preview_trip_cost(payload.to_draft()).as_dict()

    @app.post("/trips", status_code=201)
    async def create_trip(payload: TripPayload) -> Dict[str, Any]:
        trip = desk.submit_trip(payload.to_draft())
        return _trip_view(trip, desk.directory())

    @app.put("/trips/{trip_id}")
    async def update_trip(trip_id: str, payload: TripPayload) -> Dict[str, Any]:
        trip = desk.edit_trip(trip_id, payload.to_draft())
        return _trip_view(trip, desk.directory())

    @app.delete("/trips/{trip_id}", status_code=204)
    async def delete_trip(trip_id: str) -> None:
        desk.delete_trip(trip_id)

    # -- payments and statements ---------------------------------------

    @app.post("/payments", status_code=201)
    async def record_payment(payload: PaymentPayload) -> Dict[str, Any]:
        return desk.record_payment(payload.staff_id, payload.amount, payload.notes).as_dict()

    @app.delete("/payments/{payment_id}", status_code=204)
    async def cancel_payment(payment_id: str) -> None:
        desk.cancel_payment(payment_id)

    @app.get("/balances/{role}")
    async def role_balances(
        role: str,
        mode: Optional[BalanceMode] = None,
        start: Optional[str] = None,
        end: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        try:
            staff_role = StaffRole.from_str(role)
        except ValueError as error:
            raise ValidationError(str(error)) from error
        window = parse_window(start, end)
        statements = desk.role_balances(staff_role, mode=resolve_balance_mode(mode, window), window=window)
        LOGGER.debug("Returning %s %s statements", len(statements), staff_role.value)
        return [statement.as_dict() for statement in statements]

    # -- settings, estimator, dashboard --------------------------------

    @app.get("/settings")
    async def read_settings() -> Dict[str, Any]:
        return desk.rates().as_dict()

    @app.put("/settings")
    async def save_settings(changes: Dict[str, Any] = Body(...)) -> Dict[str, Any]:
        return desk.update_rates(changes).as_dict()

    @app.post("/budget/estimate")
    async def budget_estimate(payload: BudgetPayload) -> Dict[str, Any]:
        return estimate_budget(payload.to_input()).as_dict()

    @app.get("/dashboard")
    async def dashboard(start: Optional[str] = None, end: Optional[str] = None) -> Dict[str, Any]:
        return desk.dashboard(parse_window(start, end))

    @app.get("/insights")
    async def generate_insights() -> Dict[str, str]:
        report = await insights.generate_insights(store.get_trips(), store.get_staff(), desk.rates())
        return {"report": report}

    return app

"""Mini README: Entry point CLI for the trip ledger.

This script exposes a Typer CLI that starts the JSON API with uvicorn,
prints balance statements from the stored data and runs quick quotes with
the budget estimator. Settings come from ``TRIPLEDGER_*`` environment
variables or a ``.env`` file.
"""

from __future__ import annotations

from typing import List, Optional

import typer
import uvicorn

from tripledger.budget import BudgetInput, VehicleLine, estimate_budget
from tripledger.configuration import get_settings
from tripledger.errors import ValidationError
from tripledger.finance import BalanceMode
from tripledger.logging_utils import configure_root_logger, level_for_environment
from tripledger.operations import OperationsDesk, parse_window, resolve_balance_mode
from tripledger.staff import StaffRole
from tripledger.storage import JsonStore

cli = typer.Typer(help="Run and inspect the trip ledger.")


@cli.command()
def run(
    host: str = typer.Option(None, help="Host interface to bind."),
    port: int = typer.Option(None, help="Port to listen on."),
    production: bool = typer.Option(
        False, help="Use production server settings (disable auto-reload)."
    ),
) -> None:
    """Start the FastAPI application using uvicorn."""

    settings = get_settings()
    effective_host = host or settings.interface_host
    effective_port = port or settings.interface_port
    configure_root_logger(level_for_environment(settings.environment))

    # 0.0.0.0 is a bind address, not something a browser can open.
    browser_host = "127.0.0.1" if effective_host in {"0.0.0.0", "::"} else effective_host
    typer.echo(
        f"Starting trip ledger on {effective_host}:{effective_port}.\n"
        f"API docs at http://{browser_host}:{effective_port}/docs"
    )
    uvicorn.run(
        "tripledger.interface.web_app:create_application",
        host=effective_host,
        port=effective_port,
        factory=True,
        reload=not production,
    )


@cli.command()
def balances(
    role: str = typer.Argument("driver", help="driver or helper"),
    start: Optional[str] = typer.Option(None, help="Window start (YYYY-MM-DD)."),
    end: Optional[str] = typer.Option(None, help="Window end (YYYY-MM-DD)."),
    windowed: bool = typer.Option(False, help="Only count the window (current month by default)."),
) -> None:
    """Print earned, paid and outstanding balance per active member."""

    settings = get_settings()
    configure_root_logger(level_for_environment(settings.environment))
    desk = OperationsDesk(JsonStore(settings.data_directory))
    try:
        staff_role = StaffRole.from_str(role)
        window = parse_window(start, end)
        mode = resolve_balance_mode(BalanceMode.WINDOWED if windowed else None, window)
    except (ValueError, ValidationError) as error:
        raise typer.BadParameter(str(error)) from error

    for statement in desk.role_balances(staff_role, mode=mode, window=window):
        typer.echo(
            f"{statement.member.name:<24} earned {statement.earned:>10.2f}"
            f"  paid {statement.paid:>10.2f}  balance {statement.balance:>10.2f}"
        )


@cli.command()
def quote(
    vehicle: List[str] = typer.Option(
        [], help="Vehicle line as TYPE:QUANTITY:KM, e.g. Truck:1:100. Repeatable."
    ),
    helpers: float = typer.Option(0, help="Number of extra helpers."),
    others: float = typer.Option(0.0, help="Other costs."),
    tax_rate: float = typer.Option(18.0, help="Tax rate in percent."),
    margin: float = typer.Option(30.0, help="Profit margin in percent."),
) -> None:
    """Run the budget estimator for a quick vehicle-based quote."""

    lines: List[VehicleLine] = []
    for raw in vehicle:
        try:
            vehicle_type, quantity, km = raw.rsplit(":", 2)
            lines.append(VehicleLine(vehicle_type=vehicle_type, quantity=float(quantity), km=float(km)))
        except ValueError as error:
            raise typer.BadParameter(f"Cannot read vehicle line '{raw}'") from error

    result = estimate_budget(
        BudgetInput(
            vehicles=lines,
            helper_count=helpers,
            others_value=others,
            tax_rate=tax_rate,
            margin_percent=margin,
        )
    )
    for key, value in result.as_dict().items():
        typer.echo(f"{key:<18} {value:>12.2f}")


if __name__ == "__main__":
    cli()

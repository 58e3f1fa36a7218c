#!/usr/bin/env python3
"""
Command-line front end for the fleet maintenance engine.

Loads vehicles, routines and maintenance logs from CSV exports into an
in-memory store and reports on them.

Commands:
  summary   - Fleet dashboard: active vehicles, open orders, cost, OEE
  vehicles  - List vehicles with mileage, daily cost and availability
  history   - Maintenance log of one vehicle (by plate or id)
  routines  - List maintenance routines and their parts
"""

import argparse
import logging
import sys
from dataclasses import replace
from datetime import datetime
from pathlib import Path
from tabulate import tabulate
from typing import List, Optional

from fleet import (
    ConfigError,
    FleetConfig,
    FleetError,
    FleetStore,
    MaintenanceLog,
    Vehicle,
    fleet_summary,
    load_config,
    parse_logs_csv,
    parse_routines_csv,
    parse_vehicles_csv,
)
from fleet.calculations import parts_cost

logger = logging.getLogger("fleet_cli")

# =============================================================================
# Formatting helpers
# =============================================================================


def format_miles(miles: Optional[float]) -> str:
    """Format mileage for display."""
    return f"{miles:,.0f}" if miles is not None else "-"


def format_cost(cost: Optional[float]) -> str:
    """Format cost for display."""
    return f"${cost:,.2f}" if cost is not None else "-"


def format_percent(value: Optional[float]) -> str:
    return f"{value:.1f}%" if value is not None else "-"


def format_date(value: Optional[datetime]) -> str:
    return value.date().isoformat() if value is not None else "-"


def truncate(text: Optional[str], max_len: int = 30) -> str:
    """Truncate text with ellipsis if too long."""
    if text is None:
        return "-"
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."


# =============================================================================
# Loading
# =============================================================================


def read_text(path: Path) -> str:
    with open(path, encoding="utf-8") as f:
        return f.read()


def resolve_vehicle_refs(
    logs: List[MaintenanceLog], store: FleetStore
) -> List[MaintenanceLog]:
    """Let log rows name their vehicle by plate as well as by id."""
    by_name = {v.name: v.id for v in store.vehicles}
    resolved = []
    for log in logs:
        if store.find_vehicle(log.vehicle_id) is None and log.vehicle_id in by_name:
            log = replace(log, vehicle_id=by_name[log.vehicle_id])
        resolved.append(log)
    return resolved


def build_store(args, config: FleetConfig) -> FleetStore:
    """Create a store and bulk-import every CSV given on the command line."""
    store = FleetStore(oee_clamp=config.oee_clamp)

    if args.vehicles:
        vehicles = parse_vehicles_csv(read_text(args.vehicles), config.delimiter)
        store.bulk_add_vehicles(vehicles)
        logger.info("%d vehicles imported", len(vehicles))

    if args.routines:
        routines = parse_routines_csv(
            read_text(args.routines), config.delimiter, config.default_part_quantity
        )
        store.bulk_add_routines(routines)
        logger.info("%d routines imported", len(routines))

    if args.logs:
        logs = parse_logs_csv(read_text(args.logs), config.delimiter)
        added = store.bulk_add_logs(resolve_vehicle_refs(logs, store))
        logger.info("%d log entries imported", len(added))

    return store


def find_vehicle(store: FleetStore, ref: str) -> Optional[Vehicle]:
    """Look a vehicle up by id, then by plate."""
    vehicle = store.find_vehicle(ref)
    if vehicle is not None:
        return vehicle
    for v in store.vehicles:
        if v.name == ref:
            return v
    return None


# =============================================================================
# Summary command
# =============================================================================


def cmd_summary(args, store: FleetStore, config: FleetConfig):
    """Show the fleet dashboard."""
    summary = fleet_summary(store, config.oee_window_days)

    print(f"Active vehicles: {summary.active_vehicles}")
    print(f"Open orders: {summary.open_orders}")
    print(f"Total cost (all logs): {format_cost(summary.total_cost)}")
    print(
        f"Average OEE ({summary.window_days:g}d): "
        f"{format_percent(summary.average_oee)}"
    )
    print()

    if summary.vehicle_oee:
        rows = [[name, format_percent(oee)] for name, oee in summary.vehicle_oee]
        print(tabulate(rows, headers=["Vehicle", "OEE"], tablefmt="simple"))

    return 0


# =============================================================================
# Vehicles command
# =============================================================================


def make_vehicle_table(
    vehicles: List[Vehicle], store: FleetStore, days: float
) -> List[List[str]]:
    """Convert vehicles to table rows."""
    rows = []
    for v in vehicles:
        rows.append(
            [
                v.name,
                f"{v.make} {v.model}",
                v.year,
                format_miles(v.mileage),
                format_cost(v.daily_operation_cost),
                "active" if v.is_active else "inactive",
                format_percent(store.calculate_oee(v.id, days)),
            ]
        )
    return rows


def cmd_vehicles(args, store: FleetStore, config: FleetConfig):
    """List vehicles."""
    vehicles = sorted(store.vehicles, key=lambda v: v.name)
    if args.active_only:
        vehicles = [v for v in vehicles if v.is_active]

    if not vehicles:
        print("No vehicles found.")
        return 0

    headers = ["Plate", "Vehicle", "Year", "Mileage", "Daily Cost", "Status", "OEE"]
    print(
        tabulate(
            make_vehicle_table(vehicles, store, config.oee_window_days),
            headers=headers,
            tablefmt="simple",
        )
    )
    return 0


# =============================================================================
# History command
# =============================================================================


def make_history_table(logs: List[MaintenanceLog]) -> List[List[str]]:
    """Convert maintenance logs to table rows."""
    rows = []
    for log in logs:
        rows.append(
            [
                format_date(log.completion_date),
                format_miles(log.mileage),
                log.type.value,
                truncate(log.description),
                format_cost(log.downtime_cost),
                format_cost(log.total_cost),
            ]
        )
    return rows


def cmd_history(args, store: FleetStore, config: FleetConfig):
    """Show a vehicle's maintenance history."""
    vehicle = find_vehicle(store, args.vehicle)
    if vehicle is None:
        print(f"Error: Unknown vehicle '{args.vehicle}'")
        return 1

    logs = store.logs_for_vehicle(vehicle.id)
    total_cost = sum(log.total_cost for log in logs)

    print(f"Vehicle: {vehicle.display_name}")
    print(f"Current mileage: {format_miles(vehicle.mileage)}")
    print(f"Log entries: {len(logs)}")
    if total_cost:
        print(f"Total cost: {format_cost(total_cost)}")
    print()

    if not logs:
        print("No maintenance records for this vehicle.")
        return 0

    headers = ["Completed", "Mileage", "Type", "Description", "Downtime", "Total"]
    print(tabulate(make_history_table(logs), headers=headers, tablefmt="simple"))
    return 0


# =============================================================================
# Routines command
# =============================================================================


def cmd_routines(args, store: FleetStore, config: FleetConfig):
    """List maintenance routines."""
    routines = store.routines_sorted()
    if not routines:
        print("No routines found.")
        return 0

    rows = []
    for routine in routines:
        parts = ", ".join(f"{p.name} x{p.quantity:g}" for p in routine.parts) or "-"
        rows.append(
            [
                routine.name,
                format_miles(routine.frequency_mileage),
                format_cost(routine.labor_cost),
                format_cost(parts_cost(routine.parts)),
                truncate(parts, 40),
            ]
        )

    headers = ["Routine", "Every (mi)", "Labor", "Parts Cost", "Parts"]
    print(tabulate(rows, headers=headers, tablefmt="simple"))
    return 0


# =============================================================================
# Main
# =============================================================================


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Fleet maintenance engine",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s --vehicles fleet.csv summary
  %(prog)s --vehicles fleet.csv --logs history.csv vehicles --active-only
  %(prog)s --vehicles fleet.csv --logs history.csv history TRK-001
  %(prog)s --routines routines.csv routines
  %(prog)s --config fleet.yaml --vehicles fleet.csv summary
""",
    )
    parser.add_argument("--vehicles", type=Path, help="Vehicles CSV file")
    parser.add_argument("--routines", type=Path, help="Maintenance routines CSV file")
    parser.add_argument("--logs", type=Path, help="Maintenance history CSV file")
    parser.add_argument("--config", type=Path, help="YAML configuration file")

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("summary", help="Show the fleet dashboard")

    vehicles_parser = subparsers.add_parser("vehicles", help="List vehicles")
    vehicles_parser.add_argument(
        "--active-only",
        action="store_true",
        help="Hide inactive vehicles",
    )

    history_parser = subparsers.add_parser(
        "history", help="Show the maintenance history of a vehicle"
    )
    history_parser.add_argument(
        "vehicle",
        type=str,
        help="Vehicle plate (e.g., 'TRK-001') or id",
    )

    subparsers.add_parser("routines", help="List maintenance routines")

    return parser


COMMANDS = {
    "summary": cmd_summary,
    "vehicles": cmd_vehicles,
    "history": cmd_history,
    "routines": cmd_routines,
}


def main(argv: Optional[List[str]] = None):
    args = build_parser().parse_args(argv)

    for path in (args.vehicles, args.routines, args.logs):
        if path is not None and not path.exists():
            print(f"Error: File not found: {path}")
            return 1

    try:
        config = load_config(args.config)
    except ConfigError as e:
        print(f"Error: {e}")
        return 1

    logging.basicConfig(
        level=config.log_level, format="%(levelname)s %(name)s: %(message)s"
    )

    try:
        store = build_store(args, config)
        return COMMANDS[args.command](args, store, config)
    except FleetError as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main() or 0)

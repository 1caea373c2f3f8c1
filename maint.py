#!/usr/bin/env python3
"""
Unified CLI for the vehicle maintenance registry.

Commands:
  schedule     - Create or overwrite a vehicle's maintenance schedule
  update-miles - Report new mileage and check whether service is due
  record       - Record completed maintenance
  show         - Show one vehicle's schedule
  due          - Check whether maintenance is due at a mileage
  schedules    - List all schedules
  add-type     - Register a maintenance type
  type         - Show one maintenance type
  types        - List maintenance types
"""

import argparse
import logging
import sys
import time
from pathlib import Path
from tabulate import tabulate
from typing import List, Optional, Tuple

from registry import (
    MaintenanceRegistry,
    MaintenanceType,
    Schedule,
    RegistryFileError,
    ScheduleNotFound,
    Status,
    load_registry,
    save_registry,
    miles_remaining,
)
from registry.config import config

logger = logging.getLogger(__name__)

# =============================================================================
# Formatting helpers
# =============================================================================


def format_miles(miles: Optional[int]) -> str:
    """Format mileage for display."""
    return f"{miles:,.0f}" if miles is not None else "-"


def format_due(due: bool) -> str:
    return "DUE" if due else "not due"


def truncate(text: Optional[str], max_len: int = 40) -> str:
    """Truncate text with ellipsis if too long."""
    if text is None:
        return "-"
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."


def make_schedule_table(schedules: List[Tuple[object, Schedule]]) -> List[List[str]]:
    """Convert (vehicle id, schedule) pairs to table rows."""
    rows = []
    for vehicle_id, schedule in schedules:
        rows.append(
            [
                str(vehicle_id),
                format_miles(schedule.last_maintenance_mileage),
                format_miles(schedule.maintenance_interval),
                format_miles(schedule.next_maintenance_mileage),
                str(schedule.last_maintenance_date),
            ]
        )
    return rows


def make_type_table(types: List[Tuple[int, MaintenanceType]]) -> List[List[str]]:
    """Convert (type id, maintenance type) pairs to table rows."""
    rows = []
    for type_id, mtype in types:
        rows.append(
            [
                str(type_id),
                mtype.name,
                format_miles(mtype.recommended_interval),
                truncate(mtype.description),
            ]
        )
    return rows


SCHEDULE_HEADERS = ["Vehicle", "Last (mi)", "Interval (mi)", "Next (mi)", "Last Date"]
TYPE_HEADERS = ["ID", "Name", "Interval (mi)", "Description"]


def print_schedule(vehicle_id: str, schedule: Schedule) -> None:
    print(f"Vehicle: {vehicle_id}")
    print(f"  Last service:  {format_miles(schedule.last_maintenance_mileage)} mi")
    print(f"  Interval:      {format_miles(schedule.maintenance_interval)} mi")
    print(f"  Next service:  {format_miles(schedule.next_maintenance_mileage)} mi")
    print(f"  Recorded at:   {schedule.last_maintenance_date}")


# =============================================================================
# Registry file handling
# =============================================================================


def open_registry(args) -> MaintenanceRegistry:
    """Load the registry file, or start an empty registry if it doesn't exist."""
    height = args.height if args.height is not None else int(time.time())
    if not args.file.exists():
        logger.info("Registry file %s not found, starting empty", args.file)
        return MaintenanceRegistry(clock=lambda: height)
    return load_registry(args.file, clock=lambda: height)


def commit(args, registry: MaintenanceRegistry) -> None:
    if args.dry_run:
        print("(dry run - no changes made)")
        return
    save_registry(args.file, registry)


# =============================================================================
# Schedule commands
# =============================================================================


def cmd_schedule(args):
    """Create or overwrite a vehicle's maintenance schedule."""
    registry = open_registry(args)
    registry.set_maintenance_schedule(args.vehicle, args.mileage, args.interval)
    print_schedule(args.vehicle, registry.get_maintenance_schedule(args.vehicle))
    print()
    commit(args, registry)
    return 0


def cmd_update_miles(args):
    """Report new mileage and check whether service is due."""
    registry = open_registry(args)
    due = registry.update_mileage(args.vehicle, args.mileage)
    schedule = registry.get_maintenance_schedule(args.vehicle)

    print(f"Vehicle: {args.vehicle}")
    print(f"Mileage: {format_miles(args.mileage)}")
    print(f"Next service: {format_miles(schedule.next_maintenance_mileage)} mi")
    print(f"Maintenance: {format_due(due)}")
    print()
    commit(args, registry)
    return 0


def cmd_record(args):
    """Record completed maintenance."""
    registry = open_registry(args)
    registry.record_maintenance(args.vehicle, args.mileage)
    print_schedule(args.vehicle, registry.get_maintenance_schedule(args.vehicle))
    print()
    commit(args, registry)
    return 0


def cmd_show(args):
    """Show one vehicle's schedule."""
    registry = open_registry(args)
    schedule = registry.get_maintenance_schedule(args.vehicle)
    if schedule is None:
        print(f"No schedule for vehicle {args.vehicle}")
        return 0
    print_schedule(args.vehicle, schedule)
    return 0


def cmd_due(args):
    """Check whether maintenance is due at a mileage."""
    registry = open_registry(args)
    due = registry.is_maintenance_due(args.vehicle, args.mileage)
    status = registry.schedule_status(args.vehicle, args.mileage, args.due_soon)

    print(f"Vehicle: {args.vehicle}")
    print(f"Mileage: {format_miles(args.mileage)}")
    print(f"Maintenance: {format_due(due)}")
    print(f"Status: {status.name.replace('_', ' ')}")
    schedule = registry.get_maintenance_schedule(args.vehicle)
    if schedule is not None and status != Status.OVERDUE:
        print(f"Remaining: {format_miles(miles_remaining(schedule, args.mileage))} mi")
    return 0


def cmd_schedules(args):
    """List all schedules."""
    registry = open_registry(args)
    schedules = registry.list_schedules()
    print(f"Schedules: {len(schedules)}")
    print()
    if not schedules:
        return 0
    print(
        tabulate(
            make_schedule_table(schedules), headers=SCHEDULE_HEADERS, tablefmt="simple"
        )
    )
    return 0


# =============================================================================
# Maintenance type commands
# =============================================================================


def cmd_add_type(args):
    """Register a maintenance type."""
    registry = open_registry(args)
    type_id = registry.add_maintenance_type(args.name, args.description, args.interval)

    print(f"Adding maintenance type to {args.file}:")
    print(f"  ID:       {type_id}")
    print(f"  Name:     {args.name}")
    print(f"  Interval: {format_miles(args.interval)} mi")
    print()
    commit(args, registry)
    return 0


def cmd_type(args):
    """Show one maintenance type."""
    registry = open_registry(args)
    mtype = registry.get_maintenance_type(args.type_id)
    if mtype is None:
        print(f"Maintenance type {args.type_id} not found")
        return 1
    print(f"{args.type_id}: {mtype.name}")
    print(f"  Interval:    {format_miles(mtype.recommended_interval)} mi")
    print(f"  Description: {mtype.description or '-'}")
    return 0


def cmd_types(args):
    """List maintenance types."""
    registry = open_registry(args)
    types = registry.list_types()
    print(f"Maintenance types: {len(types)}")
    print()
    if not types:
        return 0
    print(tabulate(make_type_table(types), headers=TYPE_HEADERS, tablefmt="simple"))
    return 0


# =============================================================================
# Main
# =============================================================================


COMMANDS = {
    "schedule": cmd_schedule,
    "update-miles": cmd_update_miles,
    "record": cmd_record,
    "show": cmd_show,
    "due": cmd_due,
    "schedules": cmd_schedules,
    "add-type": cmd_add_type,
    "type": cmd_type,
    "types": cmd_types,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Vehicle maintenance registry",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s schedule truck-7 10000 5000
  %(prog)s update-miles truck-7 12000
  %(prog)s record truck-7 15000 --height 120
  %(prog)s due truck-7 14500 --due-soon 500
  %(prog)s -f fleet.yaml schedules
  %(prog)s add-type "Oil Change" "Regular oil change service" 5000
  %(prog)s types
""",
    )
    parser.add_argument(
        "-f",
        "--file",
        type=Path,
        default=Path(config.registry_file),
        help="Path to registry YAML file (default: %(default)s)",
    )
    parser.add_argument(
        "--height",
        type=int,
        help="Clock/height value recorded on writes (default: current Unix time)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    def add_dry_run(sub):
        sub.add_argument(
            "--dry-run",
            action="store_true",
            help="Show the result without saving",
        )

    # Schedule subcommand
    schedule_parser = subparsers.add_parser(
        "schedule", help="Create or overwrite a vehicle's maintenance schedule"
    )
    schedule_parser.add_argument("vehicle", type=str, help="Vehicle identifier")
    schedule_parser.add_argument("mileage", type=int, help="Current mileage")
    schedule_parser.add_argument("interval", type=int, help="Maintenance interval")
    add_dry_run(schedule_parser)

    # Update Miles subcommand
    update_miles_parser = subparsers.add_parser(
        "update-miles", help="Report new mileage and check whether service is due"
    )
    update_miles_parser.add_argument("vehicle", type=str, help="Vehicle identifier")
    update_miles_parser.add_argument("mileage", type=int, help="Current mileage")
    add_dry_run(update_miles_parser)

    # Record subcommand
    record_parser = subparsers.add_parser(
        "record", help="Record completed maintenance"
    )
    record_parser.add_argument("vehicle", type=str, help="Vehicle identifier")
    record_parser.add_argument("mileage", type=int, help="Mileage at time of service")
    add_dry_run(record_parser)

    # Show subcommand
    show_parser = subparsers.add_parser("show", help="Show one vehicle's schedule")
    show_parser.add_argument("vehicle", type=str, help="Vehicle identifier")

    # Due subcommand
    due_parser = subparsers.add_parser(
        "due", help="Check whether maintenance is due at a mileage"
    )
    due_parser.add_argument("vehicle", type=str, help="Vehicle identifier")
    due_parser.add_argument("mileage", type=int, help="Current mileage")
    due_parser.add_argument(
        "--due-soon",
        type=int,
        default=config.due_soon_miles,
        help="Miles before the due point that count as due soon (default: %(default)s)",
    )

    # Schedules subcommand
    subparsers.add_parser("schedules", help="List all schedules")

    # Add Type subcommand
    add_type_parser = subparsers.add_parser(
        "add-type", help="Register a maintenance type"
    )
    add_type_parser.add_argument("name", type=str, help="Short name (e.g., 'Oil Change')")
    add_type_parser.add_argument("description", type=str, help="Description")
    add_type_parser.add_argument("interval", type=int, help="Recommended interval")
    add_dry_run(add_type_parser)

    # Type subcommand
    type_parser = subparsers.add_parser("type", help="Show one maintenance type")
    type_parser.add_argument("type_id", type=int, help="Maintenance type id")

    # Types subcommand
    subparsers.add_parser("types", help="List maintenance types")

    return parser


def main(argv=None):
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    args = build_parser().parse_args(argv)

    try:
        return COMMANDS[args.command](args)
    except ScheduleNotFound as e:
        print(f"Error: {e}")
        print("Create one first with the 'schedule' command.")
        return 1
    except RegistryFileError as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main() or 0)

#!/usr/bin/env python3
"""Validate registry YAML files against the schema."""
import argparse
import sys
from pathlib import Path

import yaml
from jsonschema import validate, ValidationError

from registry.config import config


def load_schema() -> dict:
    """Load the JSON schema from schema.yaml."""
    schema_path = Path(__file__).parent / "schema.yaml"
    with open(schema_path) as f:
        return yaml.safe_load(f)


def check_consistency(data: dict) -> list[str]:
    """Checks the schema can't express: schedule arithmetic and the type-id counter."""
    errors = []
    for entry in data.get("schedules") or []:
        expected = entry["lastMaintenanceMileage"] + entry["maintenanceInterval"]
        if entry["nextMaintenanceMileage"] != expected:
            errors.append(
                f"Schedule {entry['vehicleId']!r}: nextMaintenanceMileage "
                f"{entry['nextMaintenanceMileage']} != {expected}"
            )
    type_ids = [t["id"] for t in data.get("types") or []]
    if len(type_ids) != len(set(type_ids)):
        errors.append("Duplicate maintenance type ids")
    last_type_id = data.get("lastTypeId")
    if last_type_id is not None and type_ids and last_type_id < max(type_ids):
        errors.append(f"lastTypeId {last_type_id} is below highest type id {max(type_ids)}")
    return errors


def validate_registry_file(filepath: Path, schema: dict) -> list[str]:
    """Validate a single registry YAML file. Returns list of errors."""
    errors = []
    try:
        with open(filepath) as f:
            data = yaml.safe_load(f)
        if data is None:
            data = {}
        validate(instance=data, schema=schema)
        errors.extend(check_consistency(data))
    except yaml.YAMLError as e:
        errors.append(f"YAML parse error: {e}")
    except ValidationError as e:
        errors.append(f"Schema validation error: {e.message}")
        if e.path:
            errors.append(f"  at path: {'.'.join(str(p) for p in e.path)}")
    except OSError as e:
        errors.append(f"Error: {e}")
    return errors


def main(argv=None):
    """Validate the given registry files (default: the configured registry file)."""
    parser = argparse.ArgumentParser(description="Validate registry YAML files")
    parser.add_argument(
        "files",
        type=Path,
        nargs="*",
        help=f"Registry files to check (default: {config.registry_file})",
    )
    args = parser.parse_args(argv)
    files = args.files or [Path(config.registry_file)]

    schema = load_schema()
    all_valid = True
    for filepath in files:
        errors = validate_registry_file(filepath, schema)
        if errors:
            print(f"FAIL: {filepath.name}")
            for error in errors:
                print(f"  {error}")
            all_valid = False
        else:
            print(f"OK: {filepath.name}")

    return 0 if all_valid else 1


if __name__ == "__main__":
    sys.exit(main())

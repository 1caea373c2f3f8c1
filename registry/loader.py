"""YAML loading and saving utilities for registry data."""

import json
import logging
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Union

import yaml

from .schedule import Schedule
from .maintenance_type import MaintenanceType
from .registry import MaintenanceRegistry, RegistryState
from .errors import RegistryFileError

logger = logging.getLogger(__name__)


def _parse_object(dct: Dict[str, Any]) -> Union[tuple, dict]:
    """Parse dictionary into a keyed record where it looks like one."""
    # Schedule entry
    if "vehicleId" in dct:
        return (
            "schedule",
            dct["vehicleId"],
            Schedule(
                dct["lastMaintenanceMileage"],
                dct["maintenanceInterval"],
                dct["nextMaintenanceMileage"],
                dct["lastMaintenanceDate"],
            ),
        )
    # Maintenance type entry
    elif "id" in dct and "recommendedInterval" in dct:
        return (
            "type",
            dct["id"],
            MaintenanceType(
                dct["name"],
                dct.get("description") or "",
                dct["recommendedInterval"],
            ),
        )
    else:
        # Return dict as-is for the top-level document
        return dct


def _build_state(filename: Union[str, Path], data: Dict[str, Any]) -> RegistryState:
    state = RegistryState()
    for entry in data.get("schedules") or []:
        if not isinstance(entry, tuple) or entry[0] != "schedule":
            raise RegistryFileError(filename, f"malformed schedule entry: {entry!r}")
        state.schedules[entry[1]] = entry[2]
    for entry in data.get("types") or []:
        if not isinstance(entry, tuple) or entry[0] != "type":
            raise RegistryFileError(filename, f"malformed type entry: {entry!r}")
        if entry[1] in state.types:
            raise RegistryFileError(filename, f"duplicate maintenance type id {entry[1]}")
        state.types[entry[1]] = entry[2]
    # Never below a stored id, so allocation cannot reuse one
    state.last_type_id = max(data.get("lastTypeId") or 0, max(state.types, default=0))
    return state


def load_registry(
    filename: Union[str, Path], clock: Optional[Callable[[], int]] = None
) -> MaintenanceRegistry:
    """Load a registry from a YAML file."""
    with open(filename, "rb") as fp:
        try:
            raw = yaml.load(fp, Loader=yaml.SafeLoader)
        except yaml.YAMLError as e:
            raise RegistryFileError(filename, f"YAML parse error: {e}") from e
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise RegistryFileError(filename, "top level must be a mapping")
    try:
        json_data = json.dumps(raw, indent=4)
        data = json.loads(json_data, object_hook=_parse_object)
    except KeyError as e:
        raise RegistryFileError(filename, f"missing field {e}") from e
    except TypeError as e:
        raise RegistryFileError(filename, f"unsupported value: {e}") from e
    if not isinstance(data, dict):
        raise RegistryFileError(filename, "top level must hold schedules and types")
    state = _build_state(filename, data)
    logger.debug(
        "Loaded %d schedule(s) and %d type(s) from %s",
        len(state.schedules), len(state.types), filename,
    )
    return MaintenanceRegistry(state=state, clock=clock)


def _schedule_to_dict(vehicle_id: Any, schedule: Schedule) -> Dict[str, Any]:
    """Serialize a Schedule to the YAML dict format (camelCase keys)."""
    return {
        "vehicleId": vehicle_id,
        "lastMaintenanceMileage": schedule.last_maintenance_mileage,
        "maintenanceInterval": schedule.maintenance_interval,
        "nextMaintenanceMileage": schedule.next_maintenance_mileage,
        "lastMaintenanceDate": schedule.last_maintenance_date,
    }


def _type_to_dict(type_id: int, mtype: MaintenanceType) -> Dict[str, Any]:
    """Serialize a MaintenanceType to the YAML dict format (camelCase keys)."""
    return {
        "id": type_id,
        "name": mtype.name,
        "description": mtype.description,
        "recommendedInterval": mtype.recommended_interval,
    }


def registry_to_dict(registry: MaintenanceRegistry) -> Dict[str, Any]:
    """Build the YAML document for a registry."""
    return {
        "lastTypeId": registry.state.last_type_id,
        "schedules": [
            _schedule_to_dict(vehicle_id, schedule)
            for vehicle_id, schedule in registry.list_schedules()
        ],
        "types": [
            _type_to_dict(type_id, mtype) for type_id, mtype in registry.list_types()
        ],
    }


def save_registry(filename: Union[str, Path], registry: MaintenanceRegistry) -> None:
    """Write the whole registry to a YAML file."""
    data = registry_to_dict(registry)
    with open(filename, "w") as fp:
        yaml.dump(
            data,
            fp,
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False,
            width=120,
        )
    logger.info("Saved registry to %s", filename)

"""
Vehicle maintenance registry.

This package tracks maintenance schedules per vehicle and a catalog of
maintenance types:
- Schedule: Per-vehicle mileage baseline, interval and next due point
- MaintenanceType: Catalog entry with a recommended interval
- Status: Urgency levels (OVERDUE, DUE_SOON, OK, UNKNOWN)
- MaintenanceRegistry: Owns both catalogs and answers due queries
- load_registry / save_registry: YAML file store
"""

from .status import Status
from .schedule import Schedule
from .maintenance_type import MaintenanceType
from .errors import RegistryError, ScheduleNotFound, RegistryFileError
from .calculations import calc_next_mileage, is_due, miles_remaining, check_status
from .registry import MaintenanceRegistry, RegistryState
from .loader import load_registry, save_registry, registry_to_dict

__all__ = [
    "Status",
    "Schedule",
    "MaintenanceType",
    "RegistryError",
    "ScheduleNotFound",
    "RegistryFileError",
    "calc_next_mileage",
    "is_due",
    "miles_remaining",
    "check_status",
    "MaintenanceRegistry",
    "RegistryState",
    "load_registry",
    "save_registry",
    "registry_to_dict",
]

"""Helper functions for maintenance due calculations."""

from .schedule import Schedule
from .status import Status


def calc_next_mileage(last_mileage: int, interval: int) -> int:
    """Next due mileage: last service + interval."""
    return last_mileage + interval


def is_due(current_mileage: int, threshold: int) -> bool:
    """Maintenance is due once the threshold is reached."""
    return current_mileage >= threshold


def miles_remaining(schedule: Schedule, current_mileage: int) -> int:
    """Miles until the next service. Negative when overdue."""
    return schedule.next_maintenance_mileage - current_mileage


def check_status(current: int, due: int, soon_threshold: int) -> Status:
    """Determine status by comparing current value to due threshold."""
    if current >= due:
        return Status.OVERDUE
    if current >= due - soon_threshold:
        return Status.DUE_SOON
    return Status.OK

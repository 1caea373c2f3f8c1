"""MaintenanceRegistry - schedules per vehicle and the maintenance type catalog."""

import logging
import threading
from dataclasses import dataclass, field
from typing import Callable, Dict, Hashable, List, Optional, Tuple

from .schedule import Schedule
from .maintenance_type import MaintenanceType
from .status import Status
from .errors import ScheduleNotFound
from .calculations import calc_next_mileage, is_due, check_status

logger = logging.getLogger(__name__)


@dataclass
class RegistryState:
    """The keyed containers and type-id counter owned by a registry."""

    schedules: Dict[Hashable, Schedule] = field(default_factory=dict)
    types: Dict[int, MaintenanceType] = field(default_factory=dict)
    last_type_id: int = 0


class MaintenanceRegistry:
    """
    In-memory registry of vehicle maintenance schedules and maintenance types.

    Every write that stamps a schedule reads the current height from
    ``clock``, a zero-argument callable supplied by the caller (block
    height, logical clock or wall-clock tick). A single lock serializes
    all access so the registry can be shared between threads.
    """

    def __init__(
        self,
        state: Optional[RegistryState] = None,
        clock: Optional[Callable[[], int]] = None,
    ):
        self.state = state or RegistryState()
        self.clock = clock or (lambda: 0)
        self._lock = threading.RLock()

    # -------------------------------------------------------------------------
    # Schedules
    # -------------------------------------------------------------------------

    def set_maintenance_schedule(
        self, vehicle_id: Hashable, current_mileage: int, interval: int
    ) -> bool:
        """Create or overwrite the schedule for a vehicle."""
        with self._lock:
            self.state.schedules[vehicle_id] = Schedule(
                last_maintenance_mileage=current_mileage,
                maintenance_interval=interval,
                next_maintenance_mileage=calc_next_mileage(current_mileage, interval),
                last_maintenance_date=self.clock(),
            )
        logger.info(
            "Schedule set for vehicle %s at %d (every %d)",
            vehicle_id, current_mileage, interval,
        )
        return True

    def update_mileage(self, vehicle_id: Hashable, new_mileage: int) -> bool:
        """
        Report whether ``new_mileage`` has reached the vehicle's due point.

        The threshold is read before the schedule is rewritten. The rewrite
        recomputes the next mileage from the stored fields and does not
        record ``new_mileage``; use record_maintenance to advance.

        Raises:
            ScheduleNotFound: if the vehicle has no schedule
        """
        with self._lock:
            schedule = self._require_schedule(vehicle_id)
            threshold = schedule.next_maintenance_mileage
            self.state.schedules[vehicle_id] = Schedule(
                last_maintenance_mileage=schedule.last_maintenance_mileage,
                maintenance_interval=schedule.maintenance_interval,
                next_maintenance_mileage=calc_next_mileage(
                    schedule.last_maintenance_mileage, schedule.maintenance_interval
                ),
                last_maintenance_date=schedule.last_maintenance_date,
            )
        due = is_due(new_mileage, threshold)
        logger.info(
            "Mileage %d reported for vehicle %s (due at %d, due=%s)",
            new_mileage, vehicle_id, threshold, due,
        )
        return due

    def record_maintenance(self, vehicle_id: Hashable, current_mileage: int) -> bool:
        """
        Record completed maintenance, moving the baseline to ``current_mileage``.

        Raises:
            ScheduleNotFound: if the vehicle has no schedule
        """
        with self._lock:
            schedule = self._require_schedule(vehicle_id)
            interval = schedule.maintenance_interval
            self.state.schedules[vehicle_id] = Schedule(
                last_maintenance_mileage=current_mileage,
                maintenance_interval=interval,
                next_maintenance_mileage=calc_next_mileage(current_mileage, interval),
                last_maintenance_date=self.clock(),
            )
        logger.info(
            "Recorded maintenance for vehicle %s at %d", vehicle_id, current_mileage
        )
        return True

    def get_maintenance_schedule(self, vehicle_id: Hashable) -> Optional[Schedule]:
        with self._lock:
            return self.state.schedules.get(vehicle_id)

    def is_maintenance_due(self, vehicle_id: Hashable, current_mileage: int) -> bool:
        """
        Check whether maintenance is due at ``current_mileage``.

        A vehicle without a schedule is checked against an all-zero record,
        so it is due for any non-negative mileage.
        """
        with self._lock:
            schedule = self.state.schedules.get(vehicle_id) or Schedule.empty()
        return is_due(current_mileage, schedule.next_maintenance_mileage)

    def schedule_status(
        self, vehicle_id: Hashable, current_mileage: int, due_soon_miles: int = 1000
    ) -> Status:
        """Urgency of the vehicle's next service. UNKNOWN when unscheduled."""
        schedule = self.get_maintenance_schedule(vehicle_id)
        if schedule is None:
            return Status.UNKNOWN
        return check_status(
            current_mileage, schedule.next_maintenance_mileage, due_soon_miles
        )

    def list_schedules(self) -> List[Tuple[Hashable, Schedule]]:
        """All schedules, ordered by vehicle id."""
        with self._lock:
            items = list(self.state.schedules.items())
        return sorted(items, key=lambda item: str(item[0]))

    def _require_schedule(self, vehicle_id: Hashable) -> Schedule:
        schedule = self.state.schedules.get(vehicle_id)
        if schedule is None:
            logger.warning("No schedule for vehicle %s", vehicle_id)
            raise ScheduleNotFound(vehicle_id)
        return schedule

    # -------------------------------------------------------------------------
    # Maintenance types
    # -------------------------------------------------------------------------

    def add_maintenance_type(
        self, name: str, description: str, recommended_interval: int
    ) -> int:
        """Register a maintenance type and return its newly allocated id."""
        with self._lock:
            new_id = self.state.last_type_id + 1
            self.state.last_type_id = new_id
            self.state.types[new_id] = MaintenanceType(
                name=name,
                description=description,
                recommended_interval=recommended_interval,
            )
        logger.info("Added maintenance type %d (%s)", new_id, name)
        return new_id

    def get_maintenance_type(self, type_id: int) -> Optional[MaintenanceType]:
        with self._lock:
            return self.state.types.get(type_id)

    def list_types(self) -> List[Tuple[int, MaintenanceType]]:
        """All maintenance types in id order."""
        with self._lock:
            return sorted(self.state.types.items())

"""Schedule dataclass for per-vehicle maintenance tracking."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Schedule:
    """Maintenance schedule for a single vehicle."""

    last_maintenance_mileage: int
    maintenance_interval: int
    next_maintenance_mileage: int
    last_maintenance_date: int

    @classmethod
    def empty(cls) -> "Schedule":
        """All-zero record used when a vehicle has no schedule."""
        return cls(0, 0, 0, 0)

    @property
    def is_consistent(self) -> bool:
        return (
            self.next_maintenance_mileage
            == self.last_maintenance_mileage + self.maintenance_interval
        )

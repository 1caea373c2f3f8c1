"""MaintenanceType dataclass for the service catalog."""

from dataclasses import dataclass


@dataclass(frozen=True)
class MaintenanceType:
    """A kind of service and its recommended interval."""

    name: str
    description: str
    recommended_interval: int

"""Exceptions raised by the maintenance registry."""

from pathlib import Path
from typing import Hashable, Union


class RegistryError(Exception):
    """Base class for registry errors."""


class ScheduleNotFound(RegistryError, LookupError):
    """No maintenance schedule exists for the vehicle."""

    def __init__(self, vehicle_id: Hashable):
        self.vehicle_id = vehicle_id
        super().__init__(f"No maintenance schedule for vehicle {vehicle_id!r}")


class RegistryFileError(RegistryError):
    """A registry file does not have the expected structure."""

    def __init__(self, filename: Union[str, Path], message: str):
        self.filename = filename
        super().__init__(f"{filename}: {message}")

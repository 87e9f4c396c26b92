from __future__ import annotations


class CarTraceError(Exception):
    """Base class for errors raised while serving a snapshot."""


class PlateValidationError(CarTraceError, ValueError):
    """Plate is missing, blank, too short or not encodable."""


class VehicleNotFoundError(CarTraceError):
    def __init__(self, plate_masked: str) -> None:
        super().__init__("Vehicle not found")
        self.plate_masked = plate_masked

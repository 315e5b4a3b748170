"""Domain-specific exceptions for vehicles services."""


class VehiclesServiceError(Exception):
    """Base exception for vehicles services."""
    pass


class VehicleNotFoundError(VehiclesServiceError):
    """Raised when vehicle does not exist."""
    pass

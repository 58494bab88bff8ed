"""Exceptions raised by the home alarm system."""


class SecurityError(Exception):
    """Base class for all home alarm errors."""


class UnknownSensorError(SecurityError, ValueError):
    """A sensor was referenced that the repository does not hold."""

    def __init__(self, sensor_name: str):
        self.sensor_name = sensor_name
        super().__init__(f"Unknown sensor: {sensor_name}")


class DuplicateSensorError(SecurityError, ValueError):
    """A sensor with the same name is already registered."""

    def __init__(self, sensor_name: str):
        self.sensor_name = sensor_name
        super().__init__(f"Sensor already exists: {sensor_name}")


class InvalidStatusError(SecurityError, ValueError):
    """A status value is not a member of the expected enumeration."""


class RepositoryError(SecurityError):
    """The status repository failed to read or write."""


class ImageServiceError(SecurityError):
    """The image classifier could not process an image."""

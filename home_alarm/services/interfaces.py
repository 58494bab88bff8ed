"""Service interfaces and abstract base classes."""

from abc import ABC, abstractmethod
from typing import List, Any

from ..models.sensor import Sensor
from ..models.status import ArmingStatus, AlarmStatus


class SecurityRepositoryInterface(ABC):
    """Interface for the durable store of sensors and system status."""

    @abstractmethod
    def get_arming_status(self) -> ArmingStatus:
        """Get the current arming status."""
        pass

    @abstractmethod
    def set_arming_status(self, arming_status: ArmingStatus) -> None:
        """Persist the arming status."""
        pass

    @abstractmethod
    def get_alarm_status(self) -> AlarmStatus:
        """Get the current alarm status."""
        pass

    @abstractmethod
    def set_alarm_status(self, alarm_status: AlarmStatus) -> None:
        """Persist the alarm status."""
        pass

    @abstractmethod
    def get_sensors(self) -> List[Sensor]:
        """Get all known sensors, sorted by name."""
        pass

    @abstractmethod
    def add_sensor(self, sensor: Sensor) -> None:
        """Store a new sensor."""
        pass

    @abstractmethod
    def update_sensor(self, sensor: Sensor) -> None:
        """Persist changes to an existing sensor."""
        pass

    @abstractmethod
    def remove_sensor(self, sensor: Sensor) -> None:
        """Remove an existing sensor."""
        pass


class ImageServiceInterface(ABC):
    """Interface for image classification."""

    @abstractmethod
    def image_contains_cat(self, image: Any, confidence_threshold: float) -> bool:
        """Return True if a cat is found with at least the given confidence (0-100)."""
        pass


class StatusListener(ABC):
    """Observer notified of alarm system changes."""

    @abstractmethod
    def notify(self, status: AlarmStatus) -> None:
        """Called with the new alarm status after every alarm status write."""
        pass

    def cat_detected(self, detected: bool) -> None:
        """Called with the result of each image classification."""
        pass

    def sensor_status_changed(self) -> None:
        """Called after sensor activity has changed."""
        pass

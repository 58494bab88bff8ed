"""Sensor data model."""

import functools
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict


class SensorType(Enum):
    """Kinds of binary sensors the system supports."""
    DOOR = "door"
    WINDOW = "window"
    MOTION = "motion"


@functools.total_ordering
@dataclass(eq=False)
class Sensor:
    """A binary door, window or motion sensor.

    Sensors are identified by name: two instances with the same name compare
    equal and hash the same, so a sorted collection never holds duplicates.
    """
    name: str
    sensor_type: SensorType
    active: bool = False

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Sensor):
            return NotImplemented
        return self.name == other.name

    def __lt__(self, other: "Sensor") -> bool:
        if not isinstance(other, Sensor):
            return NotImplemented
        return self.name < other.name

    def __hash__(self) -> int:
        return hash(self.name)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize sensor for storage."""
        return {
            "name": self.name,
            "sensor_type": self.sensor_type.value,
            "active": self.active,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Sensor":
        """Build a sensor from its serialized form."""
        return cls(
            name=data["name"],
            sensor_type=SensorType(data["sensor_type"]),
            active=bool(data.get("active", False)),
        )

"""Unit tests for data models."""

import unittest
import sys
import os

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from home_alarm.models.sensor import Sensor, SensorType
from home_alarm.models.status import ArmingStatus, AlarmStatus


class TestSensor(unittest.TestCase):
    """Test cases for Sensor."""

    def test_defaults_to_inactive(self):
        sensor = Sensor("Garage Door", SensorType.DOOR)
        self.assertFalse(sensor.active)

    def test_equality_and_hash_by_name(self):
        first = Sensor("Garage Door", SensorType.DOOR)
        second = Sensor("Garage Door", SensorType.WINDOW, active=True)

        self.assertEqual(first, second)
        self.assertEqual(len({first, second}), 1)
        self.assertNotEqual(first, "Garage Door")

    def test_ordering_by_name(self):
        sensors = [
            Sensor("Window", SensorType.WINDOW),
            Sensor("Attic", SensorType.MOTION),
            Sensor("Door", SensorType.DOOR),
        ]
        self.assertEqual([s.name for s in sorted(sensors)], ["Attic", "Door", "Window"])
        self.assertLess(sensors[1], sensors[2])
        self.assertGreaterEqual(sensors[0], sensors[2])

    def test_dict_serialization(self):
        sensor = Sensor("Hall", SensorType.MOTION, active=True)
        data = sensor.to_dict()

        self.assertEqual(data, {"name": "Hall", "sensor_type": "motion", "active": True})

        restored = Sensor.from_dict(data)
        self.assertEqual(restored.sensor_type, SensorType.MOTION)
        self.assertTrue(restored.active)

    def test_from_dict_rejects_unknown_type(self):
        with self.assertRaises(ValueError):
            Sensor.from_dict({"name": "Roof", "sensor_type": "laser"})


class TestStatusEnums(unittest.TestCase):
    """Test cases for arming and alarm status enums."""

    def test_arming_descriptions(self):
        self.assertEqual(ArmingStatus.DISARMED.description, "Disarmed")
        self.assertEqual(ArmingStatus.ARMED_HOME.description, "Armed - At Home")
        self.assertEqual(ArmingStatus.ARMED_AWAY.description, "Armed - Away")

    def test_is_armed(self):
        self.assertFalse(ArmingStatus.DISARMED.is_armed)
        self.assertTrue(ArmingStatus.ARMED_HOME.is_armed)
        self.assertTrue(ArmingStatus.ARMED_AWAY.is_armed)

    def test_alarm_descriptions(self):
        self.assertEqual(AlarmStatus.NO_ALARM.description, "Cool and Good")
        self.assertEqual(AlarmStatus.PENDING_ALARM.description, "I'm in Danger...")
        self.assertEqual(AlarmStatus.ALARM.description, "Awooga!")


if __name__ == '__main__':
    unittest.main()

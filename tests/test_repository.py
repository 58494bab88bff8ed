"""Unit tests for repository implementations."""

import unittest
import tempfile
import shutil
import os
import sqlite3
import sys

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from home_alarm.exceptions import DuplicateSensorError, RepositoryError, UnknownSensorError
from home_alarm.models.sensor import Sensor, SensorType
from home_alarm.models.status import ArmingStatus, AlarmStatus
from home_alarm.services.repository import InMemorySecurityRepository, SqliteSecurityRepository


class RepositoryContract:
    """Behaviour shared by every repository implementation."""

    def create_repository(self):
        raise NotImplementedError

    def setUp(self):
        """Set up test fixtures."""
        self.repository = self.create_repository()
        self.door = Sensor("Front Door", SensorType.DOOR)
        self.window = Sensor("Bedroom Window", SensorType.WINDOW)

    def test_default_statuses(self):
        self.assertEqual(self.repository.get_arming_status(), ArmingStatus.DISARMED)
        self.assertEqual(self.repository.get_alarm_status(), AlarmStatus.NO_ALARM)

    def test_set_statuses(self):
        self.repository.set_arming_status(ArmingStatus.ARMED_AWAY)
        self.repository.set_alarm_status(AlarmStatus.PENDING_ALARM)

        self.assertEqual(self.repository.get_arming_status(), ArmingStatus.ARMED_AWAY)
        self.assertEqual(self.repository.get_alarm_status(), AlarmStatus.PENDING_ALARM)

    def test_add_and_list_sensors_sorted(self):
        self.repository.add_sensor(self.door)
        self.repository.add_sensor(self.window)

        names = [sensor.name for sensor in self.repository.get_sensors()]
        self.assertEqual(names, ["Bedroom Window", "Front Door"])

    def test_add_duplicate_sensor_raises(self):
        self.repository.add_sensor(self.door)
        with self.assertRaises(DuplicateSensorError):
            self.repository.add_sensor(Sensor("Front Door", SensorType.WINDOW))

    def test_update_sensor(self):
        self.repository.add_sensor(self.door)
        self.door.active = True
        self.repository.update_sensor(self.door)

        stored = self.repository.get_sensors()[0]
        self.assertTrue(stored.active)

    def test_update_unknown_sensor_raises(self):
        with self.assertRaises(UnknownSensorError):
            self.repository.update_sensor(self.door)

    def test_remove_sensor(self):
        self.repository.add_sensor(self.door)
        self.repository.remove_sensor(self.door)

        self.assertEqual(self.repository.get_sensors(), [])

    def test_remove_unknown_sensor_raises(self):
        with self.assertRaises(UnknownSensorError):
            self.repository.remove_sensor(self.door)


class TestInMemorySecurityRepository(RepositoryContract, unittest.TestCase):
    """Test cases for InMemorySecurityRepository."""

    def create_repository(self):
        return InMemorySecurityRepository()

    def test_stores_caller_instance(self):
        self.repository.add_sensor(self.door)
        self.assertIs(self.repository.get_sensors()[0], self.door)


class TestSqliteSecurityRepository(RepositoryContract, unittest.TestCase):
    """Test cases for SqliteSecurityRepository."""

    def create_repository(self):
        self.test_dir = tempfile.mkdtemp()
        self.database_path = os.path.join(self.test_dir, "data", "security.db")
        return SqliteSecurityRepository(self.database_path)

    def tearDown(self):
        """Clean up test fixtures."""
        shutil.rmtree(self.test_dir, ignore_errors=True)

    def test_initialization_creates_tables(self):
        self.assertTrue(os.path.exists(self.database_path))

        with sqlite3.connect(self.database_path) as conn:
            tables = {row[0] for row in conn.execute(
                "SELECT name FROM sqlite_master WHERE type='table'"
            )}
        self.assertIn("sensors", tables)
        self.assertIn("system_status", tables)

    def test_state_survives_reopen(self):
        self.repository.add_sensor(self.door)
        self.repository.set_arming_status(ArmingStatus.ARMED_HOME)
        self.repository.set_alarm_status(AlarmStatus.ALARM)

        reopened = SqliteSecurityRepository(self.database_path)

        self.assertEqual(reopened.get_arming_status(), ArmingStatus.ARMED_HOME)
        self.assertEqual(reopened.get_alarm_status(), AlarmStatus.ALARM)
        sensors = reopened.get_sensors()
        self.assertEqual(len(sensors), 1)
        self.assertEqual(sensors[0].sensor_type, SensorType.DOOR)

    def test_get_sensors_returns_fresh_typed_copies(self):
        self.window.active = True
        self.repository.add_sensor(self.window)

        stored = self.repository.get_sensors()[0]

        self.assertIsNot(stored, self.window)
        self.assertEqual(stored.to_dict(), self.window.to_dict())
        self.assertIs(stored.active, True)
        self.assertIs(stored.sensor_type, SensorType.WINDOW)

    def test_database_error_raises_repository_error(self):
        with sqlite3.connect(self.database_path) as conn:
            conn.execute("DROP TABLE sensors")

        with self.assertRaises(RepositoryError):
            self.repository.get_sensors()


if __name__ == '__main__':
    unittest.main()

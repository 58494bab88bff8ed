"""Unit tests for service wiring."""

import unittest
import logging
import tempfile
import shutil
import os
import sys

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from home_alarm import logging_config
from home_alarm.factory import build_image_service, build_repository, build_security_service
from home_alarm.models.config import SystemConfig
from home_alarm.models.sensor import Sensor, SensorType
from home_alarm.models.status import ArmingStatus, AlarmStatus
from home_alarm.services.image_service import CatImageService, FakeImageService
from home_alarm.services.repository import InMemorySecurityRepository, SqliteSecurityRepository


class TestFactory(unittest.TestCase):
    """Test cases for build_security_service and helpers."""

    def setUp(self):
        """Set up test fixtures."""
        self.test_dir = tempfile.mkdtemp()
        self.database_path = os.path.join(self.test_dir, "security.db")
        self.original_manager = logging_config.logging_manager

    def tearDown(self):
        """Clean up test fixtures."""
        package_logger = logging.getLogger("home_alarm")
        for handler in list(package_logger.handlers):
            package_logger.removeHandler(handler)
            handler.close()
        package_logger.setLevel(logging.NOTSET)
        logging_config.logging_manager = self.original_manager
        shutil.rmtree(self.test_dir, ignore_errors=True)

    def test_build_repository(self):
        self.assertIsInstance(build_repository(SystemConfig(repository_backend="memory")),
                              InMemorySecurityRepository)
        sqlite_repository = build_repository(SystemConfig(database_path=self.database_path))
        self.assertIsInstance(sqlite_repository, SqliteSecurityRepository)

        with self.assertRaises(ValueError):
            build_repository(SystemConfig(repository_backend="redis"))

    def test_build_image_service(self):
        self.assertIsInstance(build_image_service(SystemConfig(image_service="fake")),
                              FakeImageService)
        self.assertIsInstance(build_image_service(SystemConfig()), CatImageService)

        with self.assertRaises(ValueError):
            build_image_service(SystemConfig(image_service="cloud"))

    def test_build_security_service_end_to_end(self):
        config = SystemConfig(database_path=self.database_path, image_service="fake",
                              confidence_threshold=70.0)
        service = build_security_service(config)

        self.assertEqual(service.confidence_threshold, 70.0)

        door = Sensor("Front Door", SensorType.DOOR)
        service.add_sensor(door)
        service.set_arming_status(ArmingStatus.ARMED_AWAY)
        service.change_sensor_activation_status(door, True)

        reopened = SqliteSecurityRepository(self.database_path)
        self.assertEqual(reopened.get_arming_status(), ArmingStatus.ARMED_AWAY)
        self.assertEqual(reopened.get_alarm_status(), AlarmStatus.PENDING_ALARM)
        self.assertTrue(reopened.get_sensors()[0].active)

    def test_build_security_service_applies_logging_config(self):
        log_dir = os.path.join(self.test_dir, "logs")
        config = SystemConfig(repository_backend="memory", image_service="fake",
                              log_level="WARNING", log_dir=log_dir)

        build_security_service(config)

        package_logger = logging.getLogger("home_alarm")
        self.assertEqual(package_logger.level, logging.WARNING)
        self.assertEqual(logging_config.logging_manager.log_level, logging.WARNING)
        self.assertTrue(os.path.exists(os.path.join(log_dir, "home_alarm.log")))


if __name__ == '__main__':
    unittest.main()

"""Repository implementations for sensors and system status."""

import os
import sqlite3
from contextlib import closing, contextmanager
from typing import Dict, Iterator, List

from ..exceptions import DuplicateSensorError, RepositoryError, UnknownSensorError
from ..models.sensor import Sensor
from ..models.status import ArmingStatus, AlarmStatus
from ..logging_config import get_logger
from ..utils import ensure_directory_exists
from .interfaces import SecurityRepositoryInterface

logger = get_logger("repository")

ARMING_STATUS_KEY = "arming_status"
ALARM_STATUS_KEY = "alarm_status"


class InMemorySecurityRepository(SecurityRepositoryInterface):
    """Repository that keeps everything in process memory.

    Stored sensors are the caller's own instances, so mutations made by the
    engine are visible immediately.
    """

    def __init__(self,
                 arming_status: ArmingStatus = ArmingStatus.DISARMED,
                 alarm_status: AlarmStatus = AlarmStatus.NO_ALARM):
        self._arming_status = arming_status
        self._alarm_status = alarm_status
        self._sensors: Dict[str, Sensor] = {}

    def get_arming_status(self) -> ArmingStatus:
        return self._arming_status

    def set_arming_status(self, arming_status: ArmingStatus) -> None:
        self._arming_status = arming_status

    def get_alarm_status(self) -> AlarmStatus:
        return self._alarm_status

    def set_alarm_status(self, alarm_status: AlarmStatus) -> None:
        self._alarm_status = alarm_status

    def get_sensors(self) -> List[Sensor]:
        return sorted(self._sensors.values())

    def add_sensor(self, sensor: Sensor) -> None:
        if sensor.name in self._sensors:
            raise DuplicateSensorError(sensor.name)
        self._sensors[sensor.name] = sensor

    def update_sensor(self, sensor: Sensor) -> None:
        if sensor.name not in self._sensors:
            raise UnknownSensorError(sensor.name)
        self._sensors[sensor.name] = sensor

    def remove_sensor(self, sensor: Sensor) -> None:
        if sensor.name not in self._sensors:
            raise UnknownSensorError(sensor.name)
        del self._sensors[sensor.name]


class SqliteSecurityRepository(SecurityRepositoryInterface):
    """Repository backed by a local SQLite database."""

    def __init__(self, database_path: str = "data/security.db"):
        """
        Initialize the repository.

        Args:
            database_path: Path to SQLite database file, created if missing
        """
        self.database_path = database_path
        self._initialize_database()

    def get_arming_status(self) -> ArmingStatus:
        return ArmingStatus(self._get_status(ARMING_STATUS_KEY, ArmingStatus.DISARMED.value))

    def set_arming_status(self, arming_status: ArmingStatus) -> None:
        self._set_status(ARMING_STATUS_KEY, arming_status.value)

    def get_alarm_status(self) -> AlarmStatus:
        return AlarmStatus(self._get_status(ALARM_STATUS_KEY, AlarmStatus.NO_ALARM.value))

    def set_alarm_status(self, alarm_status: AlarmStatus) -> None:
        self._set_status(ALARM_STATUS_KEY, alarm_status.value)

    def get_sensors(self) -> List[Sensor]:
        with self._connect() as conn:
            conn.row_factory = sqlite3.Row
            rows = conn.execute(
                "SELECT name, sensor_type, active FROM sensors ORDER BY name"
            ).fetchall()

        return [Sensor.from_dict(dict(row)) for row in rows]

    def add_sensor(self, sensor: Sensor) -> None:
        with self._connect() as conn:
            try:
                conn.execute(
                    "INSERT INTO sensors (name, sensor_type, active) "
                    "VALUES (:name, :sensor_type, :active)",
                    sensor.to_dict()
                )
            except sqlite3.IntegrityError:
                raise DuplicateSensorError(sensor.name) from None
        logger.debug(f"Stored sensor {sensor.name}")

    def update_sensor(self, sensor: Sensor) -> None:
        with self._connect() as conn:
            cursor = conn.execute(
                "UPDATE sensors SET sensor_type = :sensor_type, active = :active WHERE name = :name",
                sensor.to_dict()
            )
            if cursor.rowcount == 0:
                raise UnknownSensorError(sensor.name)

    def remove_sensor(self, sensor: Sensor) -> None:
        with self._connect() as conn:
            cursor = conn.execute("DELETE FROM sensors WHERE name = ?", (sensor.name,))
            if cursor.rowcount == 0:
                raise UnknownSensorError(sensor.name)
        logger.debug(f"Removed sensor {sensor.name}")

    @contextmanager
    def _connect(self) -> Iterator[sqlite3.Connection]:
        """Open a connection, commit on success and map driver errors."""
        try:
            with closing(sqlite3.connect(self.database_path)) as conn:
                with conn:
                    yield conn
        except sqlite3.Error as e:
            logger.error(f"Database error on {self.database_path}: {e}")
            raise RepositoryError(f"Database error: {e}") from e

    def _initialize_database(self) -> None:
        """Create tables if they do not exist yet."""
        directory = os.path.dirname(self.database_path)
        ensure_directory_exists(directory)

        with self._connect() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS sensors (
                    name TEXT PRIMARY KEY,
                    sensor_type TEXT NOT NULL,
                    active INTEGER NOT NULL DEFAULT 0
                )
            """)
            conn.execute("""
                CREATE TABLE IF NOT EXISTS system_status (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL
                )
            """)

        logger.info(f"Security repository initialized: {self.database_path}")

    def _get_status(self, key: str, default: str) -> str:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT value FROM system_status WHERE key = ?", (key,)
            ).fetchone()
        return row[0] if row else default

    def _set_status(self, key: str, value: str) -> None:
        with self._connect() as conn:
            conn.execute(
                "INSERT OR REPLACE INTO system_status (key, value) VALUES (?, ?)",
                (key, value)
            )

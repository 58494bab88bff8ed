"""Data models for the home alarm system."""

from .sensor import Sensor, SensorType
from .status import ArmingStatus, AlarmStatus
from .config import SystemConfig

__all__ = ['Sensor', 'SensorType', 'ArmingStatus', 'AlarmStatus', 'SystemConfig']

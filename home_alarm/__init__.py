"""
Home Alarm System

A decision engine for a home alarm: sensor events, the arming mode and
cat sightings from a camera decide the alarm status, and registered
listeners are told whenever it changes.
"""

__version__ = "1.0.0"

# Import core components
from .config_manager import ConfigManager
from .exceptions import (
    SecurityError,
    UnknownSensorError,
    DuplicateSensorError,
    InvalidStatusError,
    RepositoryError,
    ImageServiceError
)
from .models import (
    Sensor,
    SensorType,
    ArmingStatus,
    AlarmStatus,
    SystemConfig
)
from .services import (
    SecurityRepositoryInterface,
    ImageServiceInterface,
    StatusListener,
    SecurityService,
    InMemorySecurityRepository,
    SqliteSecurityRepository,
    CatImageService,
    FakeImageService,
    LoggingStatusListener
)
from .factory import build_security_service
from .logging_config import setup_logging

__all__ = [
    # Core management
    'ConfigManager',
    'SecurityService',
    'build_security_service',
    'setup_logging',

    # Data models
    'Sensor',
    'SensorType',
    'ArmingStatus',
    'AlarmStatus',
    'SystemConfig',

    # Service interfaces
    'SecurityRepositoryInterface',
    'ImageServiceInterface',
    'StatusListener',

    # Implementations
    'InMemorySecurityRepository',
    'SqliteSecurityRepository',
    'CatImageService',
    'FakeImageService',
    'LoggingStatusListener',

    # Errors
    'SecurityError',
    'UnknownSensorError',
    'DuplicateSensorError',
    'InvalidStatusError',
    'RepositoryError',
    'ImageServiceError'
]

"""Services for the home alarm system."""

from .interfaces import (
    SecurityRepositoryInterface,
    ImageServiceInterface,
    StatusListener
)
from .security_service import SecurityService
from .repository import InMemorySecurityRepository, SqliteSecurityRepository
from .image_service import CatImageService, FakeImageService
from .status_listener import LoggingStatusListener
from .error_handler import ErrorHandler, ErrorSeverity, global_error_handler

__all__ = [
    'SecurityRepositoryInterface',
    'ImageServiceInterface',
    'StatusListener',
    'SecurityService',
    'InMemorySecurityRepository',
    'SqliteSecurityRepository',
    'CatImageService',
    'FakeImageService',
    'LoggingStatusListener',
    'ErrorHandler',
    'ErrorSeverity',
    'global_error_handler'
]

"""Wiring of a SecurityService from configuration."""

from typing import Optional

from .models.config import SystemConfig
from .services.image_service import CatImageService, FakeImageService
from .services.interfaces import ImageServiceInterface, SecurityRepositoryInterface
from .services.repository import InMemorySecurityRepository, SqliteSecurityRepository
from .services.security_service import SecurityService
from .logging_config import get_logger, setup_logging

logger = get_logger("factory")


def build_repository(config: SystemConfig) -> SecurityRepositoryInterface:
    if config.repository_backend == "memory":
        return InMemorySecurityRepository()
    if config.repository_backend == "sqlite":
        return SqliteSecurityRepository(config.database_path)
    raise ValueError(f"Unknown repository backend: {config.repository_backend}")


def build_image_service(config: SystemConfig) -> ImageServiceInterface:
    if config.image_service == "fake":
        return FakeImageService()
    if config.image_service == "opencv":
        return CatImageService(cascade_path=config.cascade_path)
    raise ValueError(f"Unknown image service: {config.image_service}")


def build_security_service(config: Optional[SystemConfig] = None) -> SecurityService:
    """Create a SecurityService with the repository and classifier the config names."""
    config = config or SystemConfig()
    setup_logging(config.log_level, config.log_dir)

    service = SecurityService(
        security_repository=build_repository(config),
        image_service=build_image_service(config),
        confidence_threshold=config.confidence_threshold
    )
    logger.info(f"Security service ready (repository={config.repository_backend}, "
                f"image_service={config.image_service})")
    return service

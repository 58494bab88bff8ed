"""Configuration data models."""

from dataclasses import dataclass
from typing import Optional


@dataclass
class SystemConfig:
    """System configuration settings."""
    # Image classification
    confidence_threshold: float = 50.0  # Percent, 0-100
    image_service: str = "opencv"  # opencv, fake
    cascade_path: Optional[str] = None  # None uses the cascade bundled with OpenCV

    # Storage
    repository_backend: str = "sqlite"  # sqlite, memory
    database_path: str = "data/security.db"

    # Logging
    log_level: str = "INFO"
    log_dir: Optional[str] = None  # None logs to console only

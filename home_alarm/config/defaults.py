"""Default configuration values and constants."""

from typing import Dict, Any

# Default system configuration
DEFAULT_CONFIG: Dict[str, Any] = {
    # Image classification
    "confidence_threshold": 50.0,
    "image_service": "opencv",
    "cascade_path": None,

    # Storage
    "repository_backend": "sqlite",
    "database_path": "data/security.db",

    # Logging
    "log_level": "INFO",
    "log_dir": None
}

# Alarm constants
ALARM_CONSTANTS = {
    "MIN_CONFIDENCE_THRESHOLD": 0.0,
    "MAX_CONFIDENCE_THRESHOLD": 100.0,
    "REPOSITORY_BACKENDS": ("sqlite", "memory"),
    "IMAGE_SERVICES": ("opencv", "fake"),
    "LOG_ROTATION_SIZE_MB": 10,
    "LOG_BACKUP_COUNT": 5
}

# File paths and directories
DEFAULT_PATHS = {
    "config_file": "config.json",
    "cat_cascade_file": "haarcascade_frontalcatface.xml"
}

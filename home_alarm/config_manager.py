"""Configuration management with JSON file persistence."""

import dataclasses
import json
import logging
import os
from typing import Optional, Callable, List

from .models.config import SystemConfig
from .config.defaults import ALARM_CONSTANTS, DEFAULT_PATHS
from .logging_config import get_logger
from .utils import ensure_directory_exists

logger = get_logger("config_manager")


class ConfigManager:
    """Loads, validates and saves the system configuration."""

    def __init__(self, config_path: Optional[str] = None):
        self.config_path = config_path or DEFAULT_PATHS["config_file"]
        self._config: Optional[SystemConfig] = None
        self._config_change_callbacks: List[Callable[[SystemConfig], None]] = []

        self.load_config()

    def load_config(self) -> SystemConfig:
        """Load configuration from file or create default."""
        if os.path.exists(self.config_path):
            try:
                with open(self.config_path, 'r') as f:
                    config_dict = json.load(f)
                self._config = self._from_dict(config_dict)
            except (json.JSONDecodeError, TypeError, AttributeError) as e:
                logger.warning(f"Error loading config from {self.config_path}: {e}. Using defaults.")
                self._config = SystemConfig()
        else:
            self._config = SystemConfig()
            self.save_config()

        return self._config

    def save_config(self) -> None:
        """Save current configuration to file."""
        if self._config is None:
            return

        ensure_directory_exists(os.path.dirname(self.config_path))
        with open(self.config_path, 'w') as f:
            json.dump(dataclasses.asdict(self._config), f, indent=2)

    def get_config(self) -> SystemConfig:
        """Get current configuration."""
        if self._config is None:
            return self.load_config()
        return self._config

    def update_config(self, **kwargs) -> None:
        """Update configuration with new values. Unknown keys are ignored."""
        config = self.get_config()

        for key, value in kwargs.items():
            if hasattr(config, key):
                setattr(config, key, value)
            else:
                logger.debug(f"Ignoring unknown config key: {key}")

        self.save_config()

        for callback in self._config_change_callbacks:
            try:
                callback(config)
            except Exception as e:
                logger.error(f"Error in config change callback: {e}")

    def add_config_change_callback(self, callback: Callable[[SystemConfig], None]) -> None:
        """Register a callback invoked after every update_config."""
        self._config_change_callbacks.append(callback)

    def validate_config(self) -> bool:
        """Validate current configuration."""
        if self._config is None:
            return False

        threshold = self._config.confidence_threshold
        if isinstance(threshold, bool) or not isinstance(threshold, (int, float)):
            return False
        if not (ALARM_CONSTANTS["MIN_CONFIDENCE_THRESHOLD"] <= threshold
                <= ALARM_CONSTANTS["MAX_CONFIDENCE_THRESHOLD"]):
            return False

        if self._config.repository_backend not in ALARM_CONSTANTS["REPOSITORY_BACKENDS"]:
            return False

        if self._config.image_service not in ALARM_CONSTANTS["IMAGE_SERVICES"]:
            return False

        if self._config.repository_backend == "sqlite" and not self._config.database_path:
            return False

        if not isinstance(logging.getLevelName(str(self._config.log_level).upper()), int):
            return False

        return True

    @staticmethod
    def _from_dict(config_dict: dict) -> SystemConfig:
        known = {f.name for f in dataclasses.fields(SystemConfig)}
        return SystemConfig(**{k: v for k, v in config_dict.items() if k in known})

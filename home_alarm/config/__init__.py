"""Configuration components for the home alarm system."""

from .defaults import (
    DEFAULT_CONFIG,
    ALARM_CONSTANTS,
    DEFAULT_PATHS
)

__all__ = [
    'DEFAULT_CONFIG',
    'ALARM_CONSTANTS',
    'DEFAULT_PATHS'
]

"""
Configuration Module

This module provides centralized configuration management for capture operations:
- Connection configuration for the remote capture service
- Page image and rendition defaults
- Logging and timing settings
- Configuration validation and loading from YAML or the environment
"""

from .settings import (
    CaptureSettings,
    ConnectionSettings,
    ImageSettings,
    MonitoringSettings,
    ImageFormat,
    load_settings,
    configure_logging
)

__all__ = [
    'CaptureSettings',
    'ConnectionSettings',
    'ImageSettings',
    'MonitoringSettings',
    'ImageFormat',
    'load_settings',
    'configure_logging'
]

"""
Pydantic Settings for Capture Operations

This module provides strongly-typed configuration settings using Pydantic,
with support for environment variables and YAML configuration files.
"""

from typing import Optional, Union
from enum import Enum
from pathlib import Path
import logging
import os

import yaml
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings
from pydantic_yaml import to_yaml_file


class ImageFormat(str, Enum):
    """
    Image formats the capture service can render a page image into.

    The format is passed through to the service untouched; the service decides
    how to convert the stored source image.
    """
    TIF = "tif"  # Multi-page friendly, lossless; the service's native storage format
    PNG = "png"  # Lossless, widely supported for display
    JPG = "jpg"  # Lossy, smallest payloads for thumbnails and previews


class ConnectionSettings(BaseSettings):
    """
    Connection settings for reaching the remote capture service.

    An empty base_url means no remote service is configured; the client then
    falls back to the in-memory capture backend, which is what the usage
    examples and the test-suite run against.
    """
    base_url: str = Field("",
                          description="Base URL of the capture service endpoint, e.g. https://host/capture/api")
    timeout: float = Field(60.0,
                           description="Request timeout in seconds, applied by the transport")
    verify_tls: bool = Field(True,
                             description="Whether to verify the service's TLS certificate")
    user_agent: str = Field("capture-ops/0.1.0",
                            description="User-Agent header sent with every request")

    class Config:
        env_prefix = "CAPTURE_"
        case_sensitive = False

    @field_validator("timeout")
    def validate_timeout(cls, value):
        """Validate that the timeout is positive."""
        if value <= 0:
            raise ValueError("timeout must be greater than zero")
        return value


class ImageSettings(BaseSettings):
    """
    Defaults used by page image and rendition operations.
    """
    default_mime_type: str = Field("image/tiff",
                                   description="Mime type assumed for page images when none is given")
    default_image_format: ImageFormat = Field(ImageFormat.TIF,
                                              description="Format requested from get_image when none is given")
    default_rendition_number: int = Field(1,
                                          description="Rendition slot used by rendition helpers when none is given")

    class Config:
        env_prefix = "CAPTURE_IMAGE_"
        case_sensitive = False
        use_enum_values = True


class MonitoringSettings(BaseSettings):
    """
    Logging and timing settings.
    """
    log_level: str = Field("INFO",
                           description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)")
    performance_tracking: bool = Field(True,
                                       description="Whether to time and log every remote call")

    class Config:
        env_prefix = "CAPTURE_"
        case_sensitive = False

    @field_validator("log_level")
    def validate_log_level(cls, value):
        """Validate that the log level is one the logging module knows."""
        level = str(value).upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {value}")
        return level


class CaptureSettings(BaseSettings):
    """
    Main settings class for capture operations that consolidates all configuration categories.

    Usage:
        # Load from environment variables and defaults
        settings = CaptureSettings()

        # Load from YAML file
        settings = CaptureSettings.from_yaml('capture.yaml')

        # Access nested settings
        url = settings.connection.base_url
        mime = settings.images.default_mime_type
    """
    connection: ConnectionSettings = Field(default_factory=ConnectionSettings,
                                           description="Connection settings for the capture service")
    images: ImageSettings = Field(default_factory=ImageSettings,
                                  description="Page image and rendition defaults")
    monitoring: MonitoringSettings = Field(default_factory=MonitoringSettings,
                                           description="Logging and timing settings")

    class Config:
        env_prefix = "CAPTURE_"
        case_sensitive = False
        env_nested_delimiter = "__"

    @property
    def uses_remote_service(self) -> bool:
        """True when a service URL is configured."""
        return bool(self.connection.base_url)

    @classmethod
    def from_yaml(cls, yaml_file: Union[str, Path]) -> "CaptureSettings":
        """Load settings from YAML file"""
        with open(yaml_file, 'r') as f:
            data = yaml.safe_load(f) or {}
        return cls(**data)

    def to_yaml(self, yaml_file: Union[str, Path]) -> None:
        """Write the current settings to a YAML file"""
        to_yaml_file(Path(yaml_file), self)


def load_settings(config_path: Optional[str] = None) -> CaptureSettings:
    """
    Load settings from file and/or environment variables.

    Args:
        config_path: Path to YAML configuration file. If None or file doesn't exist,
                    falls back to environment variables and default values.

    Returns:
        CaptureSettings object with loaded configuration
    """
    if config_path and os.path.exists(config_path):
        return CaptureSettings.from_yaml(config_path)
    return CaptureSettings()


def configure_logging(settings: Optional[CaptureSettings] = None) -> None:
    """Apply the configured log level to the package loggers."""
    settings = settings or load_settings()
    level = getattr(logging, settings.monitoring.log_level)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )
    for name in (
        "client",
        "connection_management",
        "folder_operations",
        "document_operations",
        "page_operations",
        "field_operations",
        "validation_operations",
        "catalog_operations",
        "capture_samples",
    ):
        logging.getLogger(name).setLevel(level)

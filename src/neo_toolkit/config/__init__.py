"""Configuration module for neo-toolkit."""

from .constants import (
    RANDOM_STRING_SOURCE,
    SizeLimits,
    UploadDefaults,
    ContentTypes,
)

from .settings import ToolkitSettings, get_settings

from .logging_config import (
    setup_logging,
    get_logger,
    LogLevel,
    LogVerbosity,
    LogFormat,
    LoggingConfig,
)

__all__ = [
    # Constants
    "RANDOM_STRING_SOURCE",
    "SizeLimits",
    "UploadDefaults",
    "ContentTypes",

    # Settings
    "ToolkitSettings",
    "get_settings",

    # Logging
    "setup_logging",
    "get_logger",
    "LogLevel",
    "LogVerbosity",
    "LogFormat",
    "LoggingConfig",
]

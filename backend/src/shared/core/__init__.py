"""
Core Module

Provides core functionality shared across the application:
- Structured logging
- Custom exceptions

Usage:
======
    from src.shared.core.logging import logger, get_logger
    from src.shared.core.exceptions import HearthException, ConfigurationError

    logger.info("Starting operation", section="app")
"""

from src.shared.core.logging import (
    logger,
    get_logger,
    configure_logging,
    log_context,
    clear_log_context,
)
from src.shared.core.exceptions import (
    HearthException,
    ConfigurationError,
    ConfigPathError,
    ConfigFileError,
    MissingSectionError,
    FieldMappingError,
    AuthenticationError,
)

__all__ = [
    # Logging
    "logger",
    "get_logger",
    "configure_logging",
    "log_context",
    "clear_log_context",
    # Exceptions
    "HearthException",
    "ConfigurationError",
    "ConfigPathError",
    "ConfigFileError",
    "MissingSectionError",
    "FieldMappingError",
    "AuthenticationError",
]

"""
Configuration Module

Application settings loaded from ``app.ini`` beside this package.

Usage:
======
    from src.config import get_settings

    settings = get_settings()
    port = settings.server.http_port
    is_debug = settings.is_debug
"""

from src.config.settings import (
    Settings,
    ApplicationSettings,
    ServerSettings,
    DatabaseSettings,
    LoggingSettings,
)
from src.config.loader import (
    initialize,
    get_settings,
    reload_settings,
    publish_settings,
    load_run_mode,
    load_application_settings,
    load_server_settings,
    load_database_settings,
    load_logging_settings,
)

__all__ = [
    # Settings groups
    "Settings",
    "ApplicationSettings",
    "ServerSettings",
    "DatabaseSettings",
    "LoggingSettings",
    # Loading
    "initialize",
    "get_settings",
    "reload_settings",
    "publish_settings",
    "load_run_mode",
    "load_application_settings",
    "load_server_settings",
    "load_database_settings",
    "load_logging_settings",
]

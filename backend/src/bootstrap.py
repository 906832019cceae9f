"""
Startup Bootstrap

Loads settings and configures logging before the host application starts
any other work.

Lifecycle:
==========
1. Baseline logging (INFO, console) so load diagnostics are visible
2. app.ini loaded and validated
3. Logging reconfigured from the [log] section
4. Settings published as the process-wide settings
5. Settings returned to the host

A configuration error at any step is logged to stderr and ends the process with
exit status 1. The application must not run with partial settings.

Usage:
======
    from src.bootstrap import bootstrap

    settings = bootstrap()
    engine = create_engine(settings.database)
"""

from pathlib import Path
from typing import Optional, Union

from src.config.loader import initialize, publish_settings
from src.config.settings import Settings
from src.shared.core.exceptions import ConfigurationError
from src.shared.core.logging import configure_logging, get_logger


EXIT_CONFIGURATION_ERROR = 1

logger = get_logger("hearth.bootstrap")


def bootstrap(config_path: Optional[Union[str, Path]] = None) -> Settings:
    """
    Load settings and configure logging, exiting on any configuration error.

    Args:
        config_path: File to read instead of the bundled ``app.ini``

    Returns:
        Settings: Loaded settings, also available through ``get_settings()``

    Raises:
        SystemExit: With status 1 if the configuration cannot be loaded
    """
    configure_logging()

    try:
        settings = initialize(config_path)
        configure_logging(settings.log, settings.run_mode)
    except ConfigurationError as exc:
        logger.error(
            "config.load_failed",
            error_code=exc.error_code,
            error=exc.message,
            **exc.details,
        )
        raise SystemExit(EXIT_CONFIGURATION_ERROR) from exc

    publish_settings(settings)

    logger.info(
        "config.ready",
        run_mode=settings.run_mode,
        bind_address=settings.server.bind_address,
        log_level=settings.log.level or "info",
    )
    return settings

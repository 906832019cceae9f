"""
Logging Configuration

Structured logging setup using structlog, driven by the ``[log]`` section.

Log Output:
===========
Text formatter (console):
    2024-01-15T10:30:00Z [info     ] config.loaded   path=/srv/app/app.ini run_mode=debug

JSON formatter:
    {"timestamp": "2024-01-15T10:30:00Z", "level": "info", "event": "config.loaded", "run_mode": "debug"}

[log] Keys:
===========
- Level: trace, debug, info, warn(ing), error, fatal, panic (default: info)
- Formatter: json, or text/console (default: console in debug run mode, json otherwise)
- ReportCaller: add filename, function name and line number to every event

Events below ERROR go to stdout; ERROR and above go to stderr.

Usage:
======
    from src.shared.core.logging import configure_logging, get_logger, log_context

    configure_logging(settings.log, settings.run_mode)

    logger = get_logger("database")
    logger.info("Connected to database", host=host)

    log_context(request_id=request_id)
    logger.info("Processing request")  # Includes request_id
"""

import logging
import sys
from typing import TYPE_CHECKING, Any, Optional

import structlog
from structlog.typing import Processor

from src.shared.core.exceptions import FieldMappingError

if TYPE_CHECKING:
    from src.config.settings import LoggingSettings


LOG_SECTION = "log"

# Level names as written in app.ini, mapped onto stdlib levels
LEVELS = {
    "trace": logging.DEBUG,
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "fatal": logging.CRITICAL,
    "panic": logging.CRITICAL,
    "critical": logging.CRITICAL,
}

JSON_FORMATTERS = {"json"}
CONSOLE_FORMATTERS = {"text", "console"}


def resolve_level(level: str) -> int:
    """
    Translate a ``[log] Level`` value into a stdlib logging level.

    Raises:
        FieldMappingError: If the level name is unknown
    """
    name = level.strip().lower()
    if not name:
        return logging.INFO
    try:
        return LEVELS[name]
    except KeyError as exc:
        raise FieldMappingError(LOG_SECTION, {"level": f"unknown log level '{level}'"}) from exc


def use_json(formatter: str, run_mode: str) -> bool:
    """
    Decide between JSON and console rendering.

    Raises:
        FieldMappingError: If the formatter name is unknown
    """
    name = formatter.strip().lower()
    if not name:
        return run_mode.lower() != "debug"
    if name in JSON_FORMATTERS:
        return True
    if name in CONSOLE_FORMATTERS:
        return False
    raise FieldMappingError(LOG_SECTION, {"formatter": f"unknown log formatter '{formatter}'"})


def configure_logging(
    log: Optional["LoggingSettings"] = None,
    run_mode: str = "debug",
) -> None:
    """
    Configure stdlib logging and structlog.

    Safe to call more than once; each call replaces the previous setup.
    With no settings, logs at INFO through the console renderer.

    Args:
        log: Loaded ``[log]`` section
        run_mode: Run mode, used when no formatter is configured

    Raises:
        FieldMappingError: If the level or formatter is unknown
    """
    level = resolve_level(log.level if log else "")
    as_json = use_json(log.formatter if log else "", run_mode)
    report_caller = log.report_caller if log else False

    # Below ERROR on stdout, ERROR and above on stderr
    stdout_handler = logging.StreamHandler(sys.stdout)
    stdout_handler.addFilter(lambda record: record.levelno < logging.ERROR)
    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setLevel(logging.ERROR)

    logging.basicConfig(
        format="%(message)s",
        handlers=[stdout_handler, stderr_handler],
        level=level,
        force=True,
    )

    shared_processors: list[Processor] = [
        # Drop events below the configured level before rendering
        structlog.stdlib.filter_by_level,
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if report_caller:
        shared_processors.append(
            structlog.processors.CallsiteParameterAdder(
                {
                    structlog.processors.CallsiteParameter.FILENAME,
                    structlog.processors.CallsiteParameter.FUNC_NAME,
                    structlog.processors.CallsiteParameter.LINENO,
                }
            )
        )

    if as_json:
        processors: list[Processor] = shared_processors + [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = shared_processors + [
            structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty()),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # Loggers pick up a reconfiguration after reload_settings()
        cache_logger_on_first_use=False,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """
    Get a structured logger instance.

    Args:
        name: Logger name, defaults to module name if not specified

    Returns:
        Configured structlog logger
    """
    return structlog.get_logger(name)


def log_context(**kwargs: Any) -> None:
    """
    Add context variables to all subsequent log calls.

    Args:
        **kwargs: Key-value pairs to add to log context
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_log_context() -> None:
    """Clear all context variables."""
    structlog.contextvars.clear_contextvars()


# Default logger instance for convenient import
logger = get_logger("hearth")

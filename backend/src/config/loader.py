"""
Settings Loader

Reads ``app.ini`` from this package's directory and builds a ``Settings``
object from its sections.

Load Sequence:
==============
    resolve path → parse INI → RUN_MODE → [app] → [server]
                 → [database-mysql] → [log] → Settings

Every section is mandatory. Any failure raises a ``ConfigurationError``
subclass; the loader never exits the process itself (see ``src.bootstrap``).

Derived Durations:
==================
Four fields are stored in the file as bare integers and converted here.
They are read explicitly, never through the generic key matching, and fall
back to their default when absent or not an integer:

    [app]             JWT_EXPIRE_TIME  minutes  → jwt_expires_at   (10)
    [server]          ReadTimeout      seconds  → read_timeout     (60)
    [server]          WriteTimeout     seconds  → write_timeout    (60)
    [database-mysql]  MaxLifetime      seconds  → max_lifetime     (60)

Integers may carry a base prefix (``0x3C``). A value too large for a
``timedelta`` is a ``FieldMappingError``.

Usage:
======
    from src.config.loader import initialize

    settings = initialize()                     # app.ini next to this module
    settings = initialize("/etc/hearth/app.ini")
"""

import configparser
from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path
from typing import Optional, Union

from pydantic import ValidationError

from src.config.settings import (
    DEFAULT_RUN_MODE,
    ApplicationSettings,
    DatabaseSettings,
    LoggingSettings,
    SectionSettings,
    ServerSettings,
    Settings,
    ini_key,
    section_fields,
)
from src.shared.core.exceptions import (
    ConfigFileError,
    ConfigPathError,
    FieldMappingError,
    MissingSectionError,
)
from src.shared.core.logging import get_logger


logger = get_logger("hearth.config")

CONFIG_FILE_NAME = "app.ini"

# Keys above the first header land here, as does an explicit [DEFAULT].
ROOT_SECTION = "DEFAULT"

APP_SECTION = "app"
SERVER_SECTION = "server"
DATABASE_SECTION = "database-mysql"
LOG_SECTION = "log"

RUN_MODE_KEY = "RUN_MODE"

_QUOTES = ('"""', '"', "'", "`")

ConfigPath = Union[str, Path]


@dataclass(frozen=True)
class DurationField:
    """An integer key converted into a ``timedelta`` field."""

    key: str
    field: str
    default: int
    unit: timedelta

    def resolve(self, section: str, values: dict[str, str]) -> timedelta:
        raw = values.pop(self.key.lower(), None)
        # Keep the generic matching away from the derived field
        values.pop(ini_key(self.field), None)

        count = None
        if raw is not None:
            try:
                # Base prefixes (0x3C, 0o74, 0b111100) are accepted
                count = int(raw, 0)
            except ValueError:
                pass

        if count is not None:
            try:
                return count * self.unit
            except OverflowError as exc:
                raise FieldMappingError(
                    section, {self.field: f"{self.key}={raw} is out of range"}
                ) from exc

        logger.debug(
            "config.default_applied",
            section=section,
            key=self.key,
            value=raw,
            default=self.default,
        )
        return self.default * self.unit


MINUTE = timedelta(minutes=1)
SECOND = timedelta(seconds=1)

APP_DURATIONS = (DurationField("JWT_EXPIRE_TIME", "jwt_expires_at", 10, MINUTE),)
SERVER_DURATIONS = (
    DurationField("ReadTimeout", "read_timeout", 60, SECOND),
    DurationField("WriteTimeout", "write_timeout", 60, SECOND),
)
DATABASE_DURATIONS = (DurationField("MaxLifetime", "max_lifetime", 60, SECOND),)


# ═══════════════════════════════════════════════════════════════════════════════
# FILE RESOLUTION & PARSING
# ═══════════════════════════════════════════════════════════════════════════════


def resolve_config_path(config_path: Optional[ConfigPath] = None) -> Path:
    """
    Locate the configuration file.

    Args:
        config_path: Explicit file to read. Defaults to ``app.ini`` in the
            directory holding this module.

    Raises:
        ConfigPathError: If this module's own location cannot be determined
    """
    if config_path is not None:
        return Path(config_path)

    module_file = globals().get("__file__")
    if not module_file:
        raise ConfigPathError()
    try:
        return Path(module_file).resolve().parent / CONFIG_FILE_NAME
    except (OSError, RuntimeError) as exc:
        raise ConfigPathError(f"Can not get current file info: {exc}") from exc


def _new_parser() -> configparser.ConfigParser:
    return configparser.ConfigParser(
        # "" can never be a header, so no section cascades into the others
        default_section="",
        interpolation=None,
        strict=False,
        inline_comment_prefixes=("#", ";"),
    )


def read_config(config_path: Path) -> configparser.ConfigParser:
    """
    Read and parse an INI file.

    Keys before the first section header are collected into
    ``ROOT_SECTION``. Duplicate sections and keys merge, last value wins.

    Raises:
        ConfigFileError: If the file is missing, unreadable or malformed
    """
    try:
        text = config_path.read_text(encoding="utf-8-sig")
    except OSError as exc:
        raise ConfigFileError(str(config_path), exc.strerror or str(exc)) from exc
    except UnicodeDecodeError as exc:
        raise ConfigFileError(str(config_path), str(exc)) from exc

    parser = _new_parser()
    try:
        parser.read_string(f"[{ROOT_SECTION}]\n{text}", source=str(config_path))
    except configparser.Error as exc:
        raise ConfigFileError(str(config_path), exc.message) from exc
    return parser


def _unquote(value: str) -> str:
    for quote in _QUOTES:
        if len(value) >= 2 * len(quote) and value.startswith(quote) and value.endswith(quote):
            return value[len(quote):-len(quote)]
    return value


def section_values(parser: configparser.ConfigParser, section: str) -> dict[str, str]:
    """
    Return a section's non-empty values keyed by lower-cased key.

    Raises:
        MissingSectionError: If the section is absent
    """
    if not parser.has_section(section):
        raise MissingSectionError(section)

    values = {}
    for key, raw in parser.items(section):
        value = _unquote(raw.strip())
        # Empty values count as absent
        if value:
            values[key] = value
    return values


# ═══════════════════════════════════════════════════════════════════════════════
# SECTION LOADERS
# ═══════════════════════════════════════════════════════════════════════════════


def _load_section(
    parser: configparser.ConfigParser,
    section: str,
    model: type[SectionSettings],
    durations: tuple[DurationField, ...] = (),
) -> SectionSettings:
    values = section_values(parser, section)
    derived = {spec.field: spec.resolve(section, values) for spec in durations}

    fields = section_fields(model)
    # Field names (page_size) are not INI keys; only pagesize matches
    mapped = {key: value for key, value in values.items() if key in fields}

    try:
        settings = model.model_validate({**mapped, **derived})
    except ValidationError as exc:
        errors = {}
        for error in exc.errors():
            key = ".".join(str(part) for part in error["loc"])
            errors[fields.get(key, key)] = error["msg"]
        raise FieldMappingError(section, errors) from exc

    logger.debug("config.section_loaded", section=section)
    return settings


def load_run_mode(parser: configparser.ConfigParser) -> str:
    """Top-level ``RUN_MODE``, ``"debug"`` when absent or empty."""
    value = parser.get(ROOT_SECTION, RUN_MODE_KEY, fallback="")
    return _unquote(value.strip()) or DEFAULT_RUN_MODE


def load_application_settings(parser: configparser.ConfigParser) -> ApplicationSettings:
    """Load ``[app]``; ``jwt_expires_at`` comes from ``JWT_EXPIRE_TIME`` minutes."""
    return _load_section(parser, APP_SECTION, ApplicationSettings, APP_DURATIONS)


def load_server_settings(parser: configparser.ConfigParser) -> ServerSettings:
    """Load ``[server]``; timeouts come from ``ReadTimeout``/``WriteTimeout`` seconds."""
    return _load_section(parser, SERVER_SECTION, ServerSettings, SERVER_DURATIONS)


def load_database_settings(parser: configparser.ConfigParser) -> DatabaseSettings:
    """Load ``[database-mysql]``; ``max_lifetime`` comes from ``MaxLifetime`` seconds."""
    return _load_section(parser, DATABASE_SECTION, DatabaseSettings, DATABASE_DURATIONS)


def load_logging_settings(parser: configparser.ConfigParser) -> LoggingSettings:
    """Load ``[log]``."""
    return _load_section(parser, LOG_SECTION, LoggingSettings)


# ═══════════════════════════════════════════════════════════════════════════════
# INITIALIZATION
# ═══════════════════════════════════════════════════════════════════════════════


def initialize(config_path: Optional[ConfigPath] = None) -> Settings:
    """
    Load every settings group from the configuration file.

    Sections are loaded in a fixed order: run mode, app, server, database,
    log. Nothing is returned until all of them succeed.

    Args:
        config_path: File to read instead of the bundled ``app.ini``

    Returns:
        Settings: Fully populated, immutable settings

    Raises:
        ConfigurationError: If the file cannot be located or parsed, a
            section is missing, or a value cannot be mapped onto its field
    """
    path = resolve_config_path(config_path)
    parser = read_config(path)

    settings = Settings(
        run_mode=load_run_mode(parser),
        app=load_application_settings(parser),
        server=load_server_settings(parser),
        database=load_database_settings(parser),
        log=load_logging_settings(parser),
    )

    logger.info("config.loaded", path=str(path), run_mode=settings.run_mode)
    return settings


# Process-wide settings, set by get_settings(), reload_settings() or publish_settings()
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Get the process-wide settings, loading the bundled ``app.ini`` on first use.

    Call once at startup before spawning other work; the first load is not
    guarded against concurrent callers.
    """
    global _settings
    if _settings is None:
        _settings = initialize()
    return _settings


def reload_settings(config_path: Optional[ConfigPath] = None) -> Settings:
    """Re-run initialization and replace the process-wide settings."""
    return publish_settings(initialize(config_path))


def publish_settings(settings: Settings) -> Settings:
    """Make already-validated settings the process-wide settings."""
    global _settings
    _settings = settings
    return _settings


def reset_settings() -> None:
    """Forget the process-wide settings (for tests)."""
    global _settings
    _settings = None

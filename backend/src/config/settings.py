"""
Application Settings

Typed, immutable settings groups populated from ``app.ini`` at startup.

Configuration Groups:
=====================
- Application: Template, paging and JWT signing settings        [app]
- Server: Bind address, port and I/O timeouts                   [server]
- Database: MySQL credentials, table prefix, connection lifetime [database-mysql]
- Logging: Level, output formatter and caller reporting         [log]

Key Matching:
=============
INI keys match fields case-insensitively once underscores are dropped
from the field name:

    PageSize      → page_size
    HTTPPORT      → http_port
    MysqlPassword → mysql_password

Keys without a matching field are ignored. Duration fields are never
filled by this matching; the loader derives them from integer keys
(see ``src.config.loader``).

Usage:
======
    from src.config import get_settings

    settings = get_settings()
    port = settings.server.http_port
    lifetime = settings.database.max_lifetime.total_seconds()
"""

from datetime import timedelta
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from sqlalchemy.engine import URL


DEFAULT_RUN_MODE = "debug"

DATABASE_DRIVER = "mysql+aiomysql"


def ini_key(field_name: str) -> str:
    """Return the lower-cased INI key a field is populated from."""
    return field_name.replace("_", "")


def split_host_port(value: str) -> tuple[str, Optional[int]]:
    """
    Split ``host[:port]`` into its parts.

    IPv6 literals take a port only in brackets (``[::1]:3306``).

    Raises:
        ValueError: If the port is not a number in 0-65535
    """
    if value.startswith("["):
        host, _, rest = value[1:].partition("]")
        port = rest[1:] if rest.startswith(":") else rest
    elif value.count(":") > 1:
        return value, None
    else:
        host, _, port = value.partition(":")

    if not port:
        return host, None
    if not port.isdigit() or int(port) > 65535:
        raise ValueError(f"invalid port '{port}' in host '{value}'")
    return host, int(port)


class SectionSettings(BaseModel):
    """Base for one INI section: frozen, unknown keys ignored."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        alias_generator=ini_key,
        populate_by_name=True,
    )


# ═══════════════════════════════════════════════════════════════════════════════
# APPLICATION
# ═══════════════════════════════════════════════════════════════════════════════


class ApplicationSettings(SectionSettings):
    """
    Settings from the ``[app]`` section.

    Attributes:
        template: Name of the template set used for rendering
        page_size: Default number of items per page
        jwt_secret: Secret used to sign access tokens
        jwt_expires_at: Access token lifetime (``JWT_EXPIRE_TIME`` minutes)
        signing_method: JWT signing algorithm, e.g. ``HS256``
    """

    template: str = ""
    page_size: int = 0
    jwt_secret: str = ""
    jwt_expires_at: timedelta = Field(default=timedelta(minutes=10))
    signing_method: str = ""


# ═══════════════════════════════════════════════════════════════════════════════
# SERVER
# ═══════════════════════════════════════════════════════════════════════════════


class ServerSettings(SectionSettings):
    """Settings from the ``[server]`` section."""

    http_address: str = ""
    http_port: int = 0
    read_timeout: timedelta = Field(default=timedelta(seconds=60))
    write_timeout: timedelta = Field(default=timedelta(seconds=60))

    @property
    def bind_address(self) -> str:
        """Address the HTTP server listens on, as ``host:port``."""
        return f"{self.http_address}:{self.http_port}"


# ═══════════════════════════════════════════════════════════════════════════════
# DATABASE
# ═══════════════════════════════════════════════════════════════════════════════


class DatabaseSettings(SectionSettings):
    """
    Settings from the ``[database-mysql]`` section.

    ``mysql_host`` may carry a port (``127.0.0.1:3306``, ``[::1]:3306``);
    a bare IPv6 literal (``::1``) has none. The port is checked when the
    section is loaded.
    """

    log_mode: bool = False
    mysql_user: str = ""
    mysql_password: str = ""
    mysql_host: str = ""
    mysql_name: str = ""
    mysql_prefix: str = ""
    max_lifetime: timedelta = Field(default=timedelta(seconds=60))

    @field_validator("mysql_host")
    @classmethod
    def validate_host(cls, v: str) -> str:
        """Reject a host whose port is not a number."""
        split_host_port(v)
        return v

    @property
    def url(self) -> URL:
        """
        SQLAlchemy connection URL for the async MySQL driver.

        The password is escaped by SQLAlchemy, so it may contain ``@``,
        ``:`` or ``/``.
        """
        host, port = split_host_port(self.mysql_host)
        return URL.create(
            DATABASE_DRIVER,
            username=self.mysql_user or None,
            password=self.mysql_password or None,
            host=host or None,
            port=port,
            database=self.mysql_name or None,
            query={"charset": "utf8mb4"},
        )

    def table_name(self, name: str) -> str:
        """Prefix a bare table name with ``mysql_prefix``."""
        return f"{self.mysql_prefix}{name}"


# ═══════════════════════════════════════════════════════════════════════════════
# LOGGING
# ═══════════════════════════════════════════════════════════════════════════════


class LoggingSettings(SectionSettings):
    """Settings from the ``[log]`` section."""

    level: str = ""
    formatter: str = ""
    report_caller: bool = False


# ═══════════════════════════════════════════════════════════════════════════════
# AGGREGATE
# ═══════════════════════════════════════════════════════════════════════════════


class Settings(BaseModel):
    """
    All settings groups plus the run mode, loaded together at startup.

    Built by ``src.config.loader.initialize`` and handed to the components
    that need it. Never mutated after construction.
    """

    model_config = ConfigDict(frozen=True)

    run_mode: str = DEFAULT_RUN_MODE
    app: ApplicationSettings
    server: ServerSettings
    database: DatabaseSettings
    log: LoggingSettings

    @property
    def is_debug(self) -> bool:
        """Check if running in debug mode."""
        return self.run_mode.lower() == DEFAULT_RUN_MODE


def section_fields(model: type[SectionSettings]) -> dict[str, str]:
    """Map each INI key of ``model`` back to its field name."""
    return {ini_key(name): name for name in model.model_fields}

"""
Pytest configuration file.

Ensures backend/ is on sys.path so that 'import src...' works, and provides
helpers for writing app.ini files into a temporary directory.
"""
import logging
import sys
from pathlib import Path

import pytest
import structlog

# Add backend/ to sys.path
backend_root = Path(__file__).parent.parent
if str(backend_root) not in sys.path:
    sys.path.insert(0, str(backend_root))

from src.config.loader import reset_settings  # noqa: E402


VALID_INI = """\
RUN_MODE = release

[app]
Template = blog
PageSize = 25
JwtSecret = s3cr3t-signing-key-for-tests-0123456789
JWT_EXPIRE_TIME = 30
SigningMethod = HS256

[server]
HttpAddress = 127.0.0.1
HttpPort = 9090
ReadTimeout = 15
WriteTimeout = 20

[database-mysql]
LogMode = true
MysqlUser = hearth
MysqlPassword = p@ss:word
MysqlHost = db.internal:3307
MysqlName = hearth_db
MysqlPrefix = hr_
MaxLifetime = 120

[log]
Level = warn
Formatter = json
ReportCaller = true
"""


@pytest.fixture
def write_ini(tmp_path):
    """Write INI text to tmp_path/app.ini and return the path."""

    def _write(text: str, name: str = "app.ini") -> Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def valid_ini(write_ini) -> Path:
    return write_ini(VALID_INI)


def without_section(text: str, section: str) -> str:
    """Drop one section (header and keys) from INI text."""
    kept = []
    skipping = False
    for line in text.splitlines():
        stripped = line.strip()
        if stripped.startswith("[") and stripped.endswith("]"):
            skipping = stripped == f"[{section}]"
        if not skipping:
            kept.append(line)
    return "\n".join(kept) + "\n"


@pytest.fixture(autouse=True)
def isolate_global_state():
    """Reset cached settings and logging between tests."""
    reset_settings()
    yield
    reset_settings()
    structlog.reset_defaults()
    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)

"""
Tests for src/bootstrap.py

bootstrap() is the only place a configuration error ends the process.
"""

import logging

import pytest

from conftest import VALID_INI, without_section
from src.bootstrap import EXIT_CONFIGURATION_ERROR, bootstrap
from src.config import loader
from src.config.loader import get_settings


def test_bootstrap_returns_loaded_settings(valid_ini):
    settings = bootstrap(valid_ini)

    assert settings.server.http_port == 9090
    assert get_settings() is settings


def test_bootstrap_applies_log_section(valid_ini):
    """[log] Level = warn takes effect once bootstrap finishes."""
    bootstrap(valid_ini)

    assert logging.getLogger().level == logging.WARNING


def test_missing_log_section_exits_non_zero(write_ini, capsys):
    path = write_ini(without_section(VALID_INI, "log"))

    with pytest.raises(SystemExit) as exc_info:
        bootstrap(path)

    assert exc_info.value.code == EXIT_CONFIGURATION_ERROR
    assert exc_info.value.code != 0

    err = capsys.readouterr().err
    assert "config.load_failed" in err
    assert "Fail to get section 'log'" in err


def test_missing_file_exits_non_zero(tmp_path, capsys):
    with pytest.raises(SystemExit) as exc_info:
        bootstrap(tmp_path / "absent.ini")

    assert exc_info.value.code == EXIT_CONFIGURATION_ERROR
    assert "CONFIG_FILE_ERROR" in capsys.readouterr().err


def test_unknown_log_level_exits_non_zero(write_ini, capsys):
    text = VALID_INI.replace("Level = warn", "Level = loud")

    with pytest.raises(SystemExit) as exc_info:
        bootstrap(write_ini(text))

    assert exc_info.value.code == EXIT_CONFIGURATION_ERROR
    assert "unknown log level 'loud'" in capsys.readouterr().err


def test_diagnostic_is_not_written_to_stdout(write_ini, capsys):
    with pytest.raises(SystemExit):
        bootstrap(write_ini(without_section(VALID_INI, "app")))

    captured = capsys.readouterr()
    assert "config.load_failed" in captured.err
    assert "config.load_failed" not in captured.out


def test_out_of_range_timeout_exits_non_zero(write_ini, capsys):
    """A timeout too large for a timedelta is a configuration error, not a crash."""
    text = VALID_INI.replace("ReadTimeout = 15", "ReadTimeout = 99999999999999999999")

    with pytest.raises(SystemExit) as exc_info:
        bootstrap(write_ini(text))

    assert exc_info.value.code == EXIT_CONFIGURATION_ERROR
    err = capsys.readouterr().err
    assert "config.load_failed" in err
    assert "read_timeout" in err


def test_rejected_log_section_keeps_previous_settings(write_ini):
    """Settings are only published once [log] has been applied."""
    first = bootstrap(write_ini(VALID_INI, name="first.ini"))
    text = VALID_INI.replace("Level = warn", "Level = loud").replace("HttpPort = 9090", "HttpPort = 9191")

    with pytest.raises(SystemExit):
        bootstrap(write_ini(text, name="second.ini"))

    assert get_settings() is first
    assert get_settings().server.http_port == 9090


def test_rejected_first_load_publishes_nothing(write_ini):
    text = VALID_INI.replace("Formatter = json", "Formatter = xml")

    with pytest.raises(SystemExit):
        bootstrap(write_ini(text, name="bad.ini"))

    assert loader._settings is None

"""
Tests for src/shared/core/exceptions.py
"""

from src.shared.core.exceptions import (
    ConfigFileError,
    ConfigPathError,
    ConfigurationError,
    FieldMappingError,
    HearthException,
    MissingSectionError,
)


def test_missing_section_to_dict():
    error = MissingSectionError("log")

    assert error.to_dict() == {
        "error": {
            "code": "MISSING_SECTION",
            "message": "Fail to get section 'log'",
            "details": {"section": "log"},
        }
    }


def test_field_mapping_message_lists_fields():
    error = FieldMappingError("server", {"http_port": "Input should be a valid integer"})

    assert str(error) == "Fail to map section 'server': http_port: Input should be a valid integer"
    assert error.details["fields"] == {"http_port": "Input should be a valid integer"}


def test_configuration_errors_share_a_base():
    for error in (
        ConfigPathError(),
        ConfigFileError("/tmp/app.ini", "No such file or directory"),
        MissingSectionError("app"),
        FieldMappingError("app", {}),
    ):
        assert isinstance(error, ConfigurationError)
        assert isinstance(error, HearthException)


def test_base_defaults():
    error = HearthException("boom")

    assert error.error_code == "INTERNAL_ERROR"
    assert error.details == {}

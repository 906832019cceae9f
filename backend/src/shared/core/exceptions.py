"""
Custom Exceptions

Application-specific exceptions with machine-readable error codes.

Exception Hierarchy:
====================
    HearthException (base)
       │
       ├── ConfigurationError            ← Settings could not be loaded
       │      ├── ConfigPathError        ← Loader cannot resolve its own location
       │      ├── ConfigFileError        ← app.ini missing, unreadable or malformed
       │      ├── MissingSectionError    ← Mandatory section absent
       │      └── FieldMappingError      ← Value cannot be coerced onto a field
       │
       └── AuthenticationError           ← Token expired or invalid

Usage:
======
    from src.shared.core.exceptions import ConfigurationError, MissingSectionError

    raise MissingSectionError("log")
    # Message: "Fail to get section 'log'"

    try:
        settings = initialize()
    except ConfigurationError as exc:
        print(exc.to_dict())
        # {"error": {"code": "MISSING_SECTION", "message": "...", "details": {"section": "log"}}}
"""

from typing import Any, Optional


class HearthException(Exception):
    """
    Base exception for all Hearth application errors.

    Attributes:
        message: Human-readable error message
        error_code: Machine-readable error code
        details: Additional error context
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.error_code = error_code or "INTERNAL_ERROR"
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """
        Convert exception to a dictionary for diagnostics.

        Returns:
            Dictionary with error code, message and details
        """
        return {
            "error": {
                "code": self.error_code,
                "message": self.message,
                "details": self.details,
            }
        }


# ═══════════════════════════════════════════════════════════════════════════════
# CONFIGURATION ERRORS
# ═══════════════════════════════════════════════════════════════════════════════


class ConfigurationError(HearthException):
    """
    Settings could not be loaded.

    Every subclass is terminal for startup: the host is expected to stop
    rather than run with partial configuration.
    """

    def __init__(
        self,
        message: str = "Invalid configuration",
        error_code: str = "CONFIGURATION_ERROR",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message=message, error_code=error_code, details=details)


class ConfigPathError(ConfigurationError):
    """The loader could not determine where its configuration file lives."""

    def __init__(self, message: str = "Can not get current file info") -> None:
        super().__init__(message=message, error_code="CONFIG_PATH_ERROR")


class ConfigFileError(ConfigurationError):
    """
    The configuration file is missing, unreadable or malformed.

    Example:
        raise ConfigFileError("/srv/app/app.ini", "No such file or directory")
        # Message: "Fail to read file '/srv/app/app.ini': No such file or directory"
    """

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(
            message=f"Fail to read file '{path}': {reason}",
            error_code="CONFIG_FILE_ERROR",
            details={"path": path},
        )


class MissingSectionError(ConfigurationError):
    """A mandatory section is absent from the configuration file."""

    def __init__(self, section: str) -> None:
        super().__init__(
            message=f"Fail to get section '{section}'",
            error_code="MISSING_SECTION",
            details={"section": section},
        )


class FieldMappingError(ConfigurationError):
    """
    A section value could not be mapped onto its typed field.

    Example:
        raise FieldMappingError("server", {"HttpPort": "Input should be a valid integer"})
    """

    def __init__(self, section: str, errors: dict[str, str]) -> None:
        fields = ", ".join(f"{name}: {reason}" for name, reason in errors.items())
        super().__init__(
            message=f"Fail to map section '{section}': {fields}",
            error_code="FIELD_MAPPING_ERROR",
            details={"section": section, "fields": errors},
        )


# ═══════════════════════════════════════════════════════════════════════════════
# AUTHENTICATION ERRORS
# ═══════════════════════════════════════════════════════════════════════════════


class AuthenticationError(HearthException):
    """
    Authentication failed.

    Raised when:
    - Token expired or malformed
    - Token signed with a different secret or method
    """

    def __init__(
        self,
        message: str = "Authentication failed",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code="AUTHENTICATION_ERROR",
            details=details,
        )

"""
Error handling for the wired configuration subsystem.

Every failure carries an ErrorCode so diagnostics stay structured:

- 1000-1099: Load errors (missing, unreadable, malformed, invalid)
- 1100-1199: Watch errors
- 1200-1299: Registry lifecycle errors
"""

from enum import Enum
from typing import Optional, Dict, Any


class ErrorCode(Enum):
    """Error codes for the configuration subsystem."""

    # Load errors (1000-1099)
    CONFIG_NOT_FOUND = 1000
    FILE_READ_ERROR = 1001
    PARSE_ERROR = 1002
    VALIDATION_FAILED = 1003
    EMBEDDED_CONFIG_BROKEN = 1004

    # Watch errors (1100-1199)
    WATCH_FAILED = 1100

    # Registry errors (1200-1299)
    REGISTRY_NOT_INITIALIZED = 1200
    REGISTRY_ALREADY_INITIALIZED = 1201
    REGISTRY_REENTRANT_WRITE = 1202


class ConfigError(Exception):
    """Base exception for configuration errors."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        suggestion: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize configuration error.

        Args:
            code: Error code from ErrorCode enum
            message: Human-readable error message
            suggestion: Suggested recovery action
            context: Additional context for debugging
        """
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.context = context or {}
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert error to a dictionary for status reporting.

        Returns:
            Error dictionary with code, message, suggestion, and context
        """
        result = {
            "code": self.code.value,
            "message": self.message
        }

        if self.suggestion:
            result["suggestion"] = self.suggestion

        if self.context:
            result["context"] = self.context

        return result


class ConfigLoadError(ConfigError):
    """Base class for every failure to turn a file into a Config."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        file_path: Optional[str] = None,
        suggestion: Optional[str] = None
    ):
        self.file_path = file_path
        context = {"file_path": file_path} if file_path else {}
        super().__init__(code=code, message=message, suggestion=suggestion, context=context)


class ConfigNotFoundError(ConfigLoadError):
    """No config file could be found."""

    def __init__(self, file_path: Optional[str] = None):
        if file_path:
            message = f"No config found at {file_path}"
        else:
            message = "No config found"
        super().__init__(
            code=ErrorCode.CONFIG_NOT_FOUND,
            message=message,
            file_path=file_path,
            suggestion="Create ~/.config/wired/wired.toml to override the defaults"
        )


class ConfigIoError(ConfigLoadError):
    """Config file exists but could not be read."""

    def __init__(self, file_path: str, reason: str):
        super().__init__(
            code=ErrorCode.FILE_READ_ERROR,
            message=f"Error reading config file {file_path}: {reason}",
            file_path=file_path,
            suggestion="Check file permissions"
        )


class ConfigParseError(ConfigLoadError):
    """Config document is malformed or does not match the schema."""

    def __init__(self, file_path: str, reason: str):
        super().__init__(
            code=ErrorCode.PARSE_ERROR,
            message=f"Problem with config file {file_path}: {reason}",
            file_path=file_path,
            suggestion="Check TOML syntax and field names"
        )


class ConfigValidationError(ConfigLoadError):
    """Config document is well-formed but semantically invalid."""

    def __init__(self, problem: str, file_path: Optional[str] = None):
        self.problem = problem
        super().__init__(
            code=ErrorCode.VALIDATION_FAILED,
            message=f"Error validating config file: {problem}",
            file_path=file_path
        )


class EmbeddedConfigError(ConfigError):
    """The default config shipped with the package failed to load.

    This means the installation is broken. It is deliberately not a
    ConfigLoadError so that nothing absorbs it.
    """

    def __init__(self, reason: str):
        super().__init__(
            code=ErrorCode.EMBEDDED_CONFIG_BROKEN,
            message=f"Failed to parse default config: {reason}",
            suggestion="Reinstall the package"
        )


class WatchError(ConfigError):
    """Config directory could not be watched for changes."""

    def __init__(self, directory: str, reason: str):
        super().__init__(
            code=ErrorCode.WATCH_FAILED,
            message=f"Error watching config directory {directory}: {reason}",
            suggestion="Config changes will not be picked up until restart",
            context={"directory": directory, "reason": reason}
        )


class RegistryStateError(ConfigError):
    """Registry used outside its init/teardown lifecycle."""

    def __init__(self, code: ErrorCode, message: str):
        super().__init__(code=code, message=message)

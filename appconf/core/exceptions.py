"""
appconf Exception Hierarchy

Typed exceptions for configuration loading failures.
All appconf exceptions inherit from ConfigError.

Exception Hierarchy:
    ConfigError (base)
    ├── ConfigPathNotSetError (no CONFIG_PATH and no --config flag)
    ├── ConfigFileNotFoundError (resolved path does not exist)
    ├── ConfigParseError (YAML syntax, type mismatch, unreadable file)
    └── ConfigValidationError (required field empty after overrides)

None of these are recoverable: a missing or malformed configuration file
is never transient, so callers either fix the input or stop.

Usage:
    from appconf.core.exceptions import ConfigError

    result = ConfigLoader().load()
    if not result.ok:
        logger.error(f"Config failed: {result.error}")
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional


# ============================================================================
# Base Exception
# ============================================================================

@dataclass
class ErrorContext:
    """
    Additional context for debugging errors.

    Attributes:
        operation: What the loader was doing (resolve, read, parse, validate)
        config_path: Path of the configuration file, if known
        timestamp: When the error occurred
        metadata: Additional debugging information
    """
    operation: Optional[str] = None
    config_path: Optional[str] = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging/serialization."""
        return {
            "operation": self.operation,
            "config_path": self.config_path,
            "timestamp": self.timestamp.isoformat(),
            "metadata": self.metadata,
        }


class ConfigError(Exception):
    """
    Base exception for all configuration errors.

    Attributes:
        message: Human-readable diagnostic, printed as-is on fatal exit
        context: Additional debugging context
        recoverable: Always False for configuration errors
        cause: Original exception that caused this error
    """

    def __init__(
        self,
        message: str,
        context: Optional[ErrorContext] = None,
        cause: Optional[Exception] = None,
    ):
        super().__init__(message)
        self.message = message
        self.context = context or ErrorContext()
        self.recoverable = False
        self.cause = cause

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for structured logs."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "recoverable": self.recoverable,
            "context": self.context.to_dict(),
            "cause": str(self.cause) if self.cause else None,
        }


# ============================================================================
# Loader Errors
# ============================================================================

class ConfigPathNotSetError(ConfigError):
    """Raised when neither CONFIG_PATH nor the --config flag names a file."""

    def __init__(self, context: Optional[ErrorContext] = None):
        super().__init__(
            "Config path is not set. Use CONFIG_PATH env or -config flag",
            context or ErrorContext(operation="resolve"),
        )


class ConfigFileNotFoundError(ConfigError):
    """
    Raised when the resolved configuration path does not exist.

    The path is reported exactly as it was given, not as resolved
    against the loader's base path.
    """

    def __init__(
        self,
        path: str,
        context: Optional[ErrorContext] = None,
        cause: Optional[Exception] = None,
    ):
        super().__init__(
            f"Config file does not exist: {path}",
            context or ErrorContext(operation="stat", config_path=path),
            cause=cause,
        )
        self.path = path


class ConfigParseError(ConfigError):
    """
    Raised when the file cannot be read or decoded into Settings.

    Covers malformed YAML, a non-mapping document root, unsupported file
    extensions, unreadable files and field type mismatches.

    Example:
        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigParseError(str(e), path=path, cause=e) from e
    """

    def __init__(
        self,
        detail: str,
        path: Optional[str] = None,
        context: Optional[ErrorContext] = None,
        cause: Optional[Exception] = None,
    ):
        super().__init__(
            f"Cannot read config file: {detail}",
            context or ErrorContext(operation="parse", config_path=path),
            cause=cause,
        )
        self.detail = detail
        self.path = path


class ConfigValidationError(ConfigError):
    """
    Raised when a required field is empty after parsing and overrides.

    Attributes:
        field: YAML key of the missing field (e.g. ``storage_path``)
    """

    def __init__(
        self,
        field: str,
        path: Optional[str] = None,
        context: Optional[ErrorContext] = None,
    ):
        super().__init__(
            f'Cannot read config file: field "{field}" is required '
            "but the value is not provided",
            context or ErrorContext(operation="validate", config_path=path),
        )
        self.field = field
        self.path = path


# ============================================================================
# Exports
# ============================================================================

__all__ = [
    "ConfigError",
    "ErrorContext",
    "ConfigPathNotSetError",
    "ConfigFileNotFoundError",
    "ConfigParseError",
    "ConfigValidationError",
]

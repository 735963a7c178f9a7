"""
Core Module

Exception hierarchy shared by the loader and the CLI.
"""

from appconf.core.exceptions import (
    ConfigError,
    ConfigFileNotFoundError,
    ConfigParseError,
    ConfigPathNotSetError,
    ConfigValidationError,
    ErrorContext,
)

__all__ = [
    "ConfigError",
    "ConfigFileNotFoundError",
    "ConfigParseError",
    "ConfigPathNotSetError",
    "ConfigValidationError",
    "ErrorContext",
]

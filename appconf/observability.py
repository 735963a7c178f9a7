"""
Observability Module

Structured logging for the configuration loader.

Key features:
- Context fields (config path, operation) appended to every message
- A single setup_logging() entry point for application startup
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Union

logger = logging.getLogger(__name__)

DEFAULT_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DEFAULT_DATEFMT = "%Y-%m-%d %H:%M:%S"


# ============================================================================
# Structured Logging
# ============================================================================

@dataclass
class LogContext:
    """Context attached to log entries."""
    operation: Optional[str] = None
    config_path: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        d = {
            "operation": self.operation,
            "config_path": self.config_path,
        }
        d.update(self.extra)
        return {k: v for k, v in d.items() if v is not None}


class StructuredLogger:
    """
    Logger with structured key=value context.

    Usage:
        log = StructuredLogger("appconf.config.loader")
        log.info("Config loaded", config_path="/etc/app.yaml", env="prod")
    """

    def __init__(self, name: str, context: Optional[LogContext] = None):
        self._logger = logging.getLogger(name)
        self._context = context or LogContext()

    @property
    def name(self) -> str:
        return self._logger.name

    def with_context(self, **kwargs) -> "StructuredLogger":
        """Create logger with additional context."""
        new_context = LogContext(
            operation=kwargs.get("operation", self._context.operation),
            config_path=kwargs.get("config_path", self._context.config_path),
            extra={**self._context.extra, **{k: v for k, v in kwargs.items()
                   if k not in ("operation", "config_path")}},
        )
        return StructuredLogger(self._logger.name, new_context)

    def _format_message(self, message: str, **kwargs) -> str:
        """Format message with context."""
        ctx = self._context.to_dict()
        ctx.update({k: v for k, v in kwargs.items() if v is not None})

        prefix = f"[{ctx.pop('operation')}] " if ctx.get("operation") else ""

        if ctx:
            extra_str = " | ".join(f"{k}={v}" for k, v in ctx.items())
            return f"{prefix}{message} | {extra_str}"
        return f"{prefix}{message}"

    def debug(self, message: str, **kwargs) -> None:
        self._logger.debug(self._format_message(message, **kwargs))

    def info(self, message: str, **kwargs) -> None:
        self._logger.info(self._format_message(message, **kwargs))

    def warning(self, message: str, **kwargs) -> None:
        self._logger.warning(self._format_message(message, **kwargs))

    def error(self, message: str, **kwargs) -> None:
        self._logger.error(self._format_message(message, **kwargs))


def get_logger(name: str, **context) -> StructuredLogger:
    """Get a structured logger with optional context."""
    return StructuredLogger(name, LogContext(**context))


def setup_logging(
    level: Union[int, str] = logging.INFO,
    format_string: Optional[str] = None,
) -> None:
    """
    Setup logging configuration for appconf.

    Call this at application startup, before loading settings.
    Accepts a numeric level or a level name such as ``"DEBUG"``.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logging.basicConfig(
        level=level,
        format=format_string or DEFAULT_FORMAT,
        datefmt=DEFAULT_DATEFMT,
    )
    logging.getLogger("appconf").setLevel(level)

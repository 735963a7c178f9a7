"""
appconf - startup configuration loading.

Reads a YAML settings file located via CONFIG_PATH or --config, applies
environment overrides and validates required fields.
"""

from appconf.config import (
    ConfigLoader,
    LoadResult,
    Settings,
    get_settings,
    load_settings,
    must_load,
)
from appconf.core.exceptions import ConfigError

__version__ = "0.1.0"

__all__ = [
    "ConfigError",
    "ConfigLoader",
    "LoadResult",
    "Settings",
    "get_settings",
    "load_settings",
    "must_load",
]

"""
Configuration Management

YAML-based configuration with environment variable overrides.
"""

from appconf.config.settings import (
    ENV_OVERRIDES,
    REQUIRED_FIELDS,
    HTTPServerSettings,
    Settings,
    get_settings,
    reset_settings,
)
from appconf.config.loader import (
    CONFIG_PATH_ENV,
    ConfigLoader,
    LoadResult,
    load_settings,
    must_load,
    parse_config_flag,
)

__all__ = [
    "CONFIG_PATH_ENV",
    "ENV_OVERRIDES",
    "REQUIRED_FIELDS",
    "ConfigLoader",
    "HTTPServerSettings",
    "LoadResult",
    "Settings",
    "get_settings",
    "load_settings",
    "must_load",
    "parse_config_flag",
    "reset_settings",
]

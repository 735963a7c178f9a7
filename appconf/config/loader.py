"""
Configuration Loader

Resolves the config file path, parses YAML into Settings, applies
environment overrides and checks required fields.
"""

import argparse
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional, Sequence

import yaml
from pydantic import ValidationError

from appconf.config.settings import ENV_OVERRIDES, REQUIRED_FIELDS, Settings
from appconf.core.exceptions import (
    ConfigError,
    ConfigFileNotFoundError,
    ConfigParseError,
    ConfigPathNotSetError,
    ConfigValidationError,
)
from appconf.observability import get_logger

logger = get_logger(__name__)

CONFIG_PATH_ENV = "CONFIG_PATH"
YAML_SUFFIXES = (".yaml", ".yml")

# Implicit YAML 1.1 types that are kept as their source text
_TEXT_TAGS = frozenset({
    "tag:yaml.org,2002:bool",
    "tag:yaml.org,2002:int",
    "tag:yaml.org,2002:float",
    "tag:yaml.org,2002:timestamp",
})


class TextScalarLoader(yaml.SafeLoader):
    """
    SafeLoader that leaves plain scalars as strings.

    ``addr: 8080``, ``env: on`` and ``storage_path: 2024-01-01`` load as
    ``"8080"``, ``"on"`` and ``"2024-01-01"``. Nulls still load as None.
    """


TextScalarLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag not in _TEXT_TAGS]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


@dataclass(frozen=True)
class LoadResult:
    """Outcome of a load: exactly one of ``settings`` / ``error`` is set."""
    settings: Optional[Settings] = None
    error: Optional[ConfigError] = None

    def __post_init__(self):
        if (self.settings is None) == (self.error is None):
            raise ValueError("LoadResult needs exactly one of settings or error")

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Settings:
        """Return the settings or raise the stored error."""
        if self.error is not None:
            raise self.error
        return self.settings


def parse_config_flag(argv: Optional[Sequence[str]] = None) -> Optional[str]:
    """
    Extract ``--config``/``-config`` from command-line arguments.

    Unrelated arguments are ignored. A flag given without a value counts
    as not set.
    """
    parser = argparse.ArgumentParser(
        add_help=False,
        allow_abbrev=False,
        exit_on_error=False,
    )
    parser.add_argument("--config", "-config", dest="config", default="")

    try:
        args, _ = parser.parse_known_args(sys.argv[1:] if argv is None else list(argv))
    except argparse.ArgumentError:
        return None
    return args.config or None


class ConfigLoader:
    """
    Loads Settings from a YAML file.

    Path resolution, first match wins:
    1. ``CONFIG_PATH`` environment variable
    2. ``--config <path>`` command-line flag

    After parsing, fields listed in the override table are replaced by
    their environment variables when set, and only then are required
    fields checked.

    Example:
        ```python
        result = ConfigLoader().load()
        if not result.ok:
            sys.exit(str(result.error))
        settings = result.settings
        ```
    """

    def __init__(
        self,
        base_path: Optional[str] = None,
        environ: Optional[Mapping[str, str]] = None,
        overrides: Optional[dict[str, str]] = None,
    ):
        """
        Initialize the config loader.

        Args:
            base_path: Base directory for relative paths (default: cwd)
            environ: Environment mapping (default: ``os.environ``)
            overrides: Field -> env var table (default: ``ENV_OVERRIDES``)
        """
        self.base_path = Path(base_path) if base_path else Path.cwd()
        self.environ = os.environ if environ is None else environ
        self.overrides = dict(ENV_OVERRIDES if overrides is None else overrides)

    def load(self, argv: Optional[Sequence[str]] = None) -> LoadResult:
        """
        Resolve, read and validate the configuration.

        Never raises ConfigError; failures are returned in the result.
        """
        try:
            path = self.resolve_path(argv)
            settings = self.read(path)
        except ConfigError as e:
            return LoadResult(error=e)
        return LoadResult(settings=settings)

    def resolve_path(self, argv: Optional[Sequence[str]] = None) -> str:
        """Return the config path from CONFIG_PATH or the --config flag."""
        path = self.environ.get(CONFIG_PATH_ENV)
        if path:
            logger.debug("Config path resolved", source="env", config_path=path)
            return path

        path = parse_config_flag(argv)
        if path:
            logger.debug("Config path resolved", source="flag", config_path=path)
            return path

        raise ConfigPathNotSetError()

    def read(self, path: str) -> Settings:
        """
        Parse a config file and apply overrides and validation.

        Args:
            path: Config path as given (relative paths use base_path)

        Returns:
            Fully resolved Settings
        """
        file_path = self._resolve_path(path)

        # exists() only swallows "missing" errnos; anything else is a read failure
        try:
            exists = file_path.exists()
        except OSError as e:
            raise ConfigParseError(str(e), path=path, cause=e) from e
        if not exists:
            raise ConfigFileNotFoundError(path)

        data = self.load_yaml(file_path, path)

        try:
            settings = Settings.from_mapping(data)
        except ValidationError as e:
            raise ConfigParseError(str(e), path=path, cause=e) from e

        settings, applied = settings.with_overrides(self.environ, self.overrides)
        for field_name in applied:
            logger.info(
                "Config field overridden from environment",
                field=field_name,
                env_var=self.overrides[field_name],
            )

        missing = settings.missing_required(REQUIRED_FIELDS)
        if missing:
            raise ConfigValidationError(missing[0], path=path)

        logger.info("Config loaded", config_path=path, env=settings.environment)
        return settings

    def load_yaml(self, file_path: Path, path: Optional[str] = None) -> dict[str, Any]:
        """
        Load a YAML file into a mapping.

        An empty document yields an empty mapping.
        """
        shown = path or str(file_path)

        if file_path.suffix.lower() not in YAML_SUFFIXES:
            raise ConfigParseError(
                f"file format '{file_path.suffix}' is not supported, expected .yaml or .yml",
                path=shown,
            )

        try:
            with open(file_path, "r", encoding="utf-8") as f:
                content = f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigParseError(str(e), path=shown, cause=e) from e

        try:
            data = yaml.load(content, Loader=TextScalarLoader)
        except yaml.YAMLError as e:
            raise ConfigParseError(str(e), path=shown, cause=e) from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigParseError(
                f"expected a mapping at the document root, got {type(data).__name__}",
                path=shown,
            )
        return data

    def _resolve_path(self, path: str) -> Path:
        """Resolve a path relative to base_path."""
        p = Path(path).expanduser()
        if p.is_absolute():
            return p
        return self.base_path / p


def load_settings(
    argv: Optional[Sequence[str]] = None,
    environ: Optional[Mapping[str, str]] = None,
    base_path: Optional[str] = None,
) -> LoadResult:
    """Load settings without terminating on failure."""
    return ConfigLoader(base_path=base_path, environ=environ).load(argv)


def must_load(
    argv: Optional[Sequence[str]] = None,
    environ: Optional[Mapping[str, str]] = None,
    base_path: Optional[str] = None,
) -> Settings:
    """
    Load settings or terminate the process.

    On failure the diagnostic is written to stderr and the process exits
    with status 1.
    """
    result = load_settings(argv, environ, base_path)
    if not result.ok:
        log_load_failure(result.error)
        print(result.error.message, file=sys.stderr)
        sys.exit(1)
    return result.settings


def log_load_failure(error: ConfigError) -> None:
    """
    Record a load failure at DEBUG.

    The diagnostic itself is printed by the caller; logging it at a higher
    level would repeat it on stderr when logging is unconfigured.
    """
    details = error.to_dict()
    logger.with_context(
        operation=error.context.operation,
        config_path=error.context.config_path,
    ).debug(
        "Configuration load failed",
        error_type=details["error_type"],
        cause=details["cause"],
    )

"""
Command-line entry point.

Loads the configuration the same way an application would at startup and
prints the resolved settings, so a deployment's config can be checked
before the real service is started.
"""

import argparse
import json
import os
import sys
from typing import Mapping, Optional, Sequence

import yaml

from appconf.config.loader import CONFIG_PATH_ENV, ConfigLoader, log_load_failure
from appconf.config.settings import ENV_OVERRIDES
from appconf.observability import setup_logging

LOG_LEVEL_ENV = "APPCONF_LOG_LEVEL"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="appconf",
        description="Resolve and validate application configuration",
        allow_abbrev=False,
    )
    parser.add_argument(
        "--config", "-config",
        default="",
        help=f"Path to configuration file (used when {CONFIG_PATH_ENV} is unset)",
    )
    parser.add_argument(
        "--format",
        choices=("yaml", "json"),
        default="yaml",
        help="Output format for the resolved settings",
    )
    parser.add_argument(
        "--list-env",
        action="store_true",
        help="List environment variables that affect loading and exit",
    )
    parser.add_argument("--log-level", help="Logging level (default: INFO)")
    return parser


def describe_environment(environ: Mapping[str, str]) -> str:
    """Render the environment variables the loader reads."""
    rows = [("config path", CONFIG_PATH_ENV)]
    rows.extend(ENV_OVERRIDES.items())

    lines = []
    for field_name, env_var in rows:
        state = "set" if environ.get(env_var) else "unset"
        lines.append(f"{env_var:<16} {field_name:<16} {state}")
    return "\n".join(lines)


def main(
    argv: Optional[Sequence[str]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> int:
    """Run the CLI and return the process exit code."""
    environ = os.environ if environ is None else environ
    args = build_parser().parse_args(argv)

    setup_logging(args.log_level or environ.get(LOG_LEVEL_ENV) or "INFO")

    if args.list_env:
        print(describe_environment(environ))
        return 0

    flag_argv = ["--config", args.config] if args.config else []
    result = ConfigLoader(environ=environ).load(flag_argv)

    if not result.ok:
        log_load_failure(result.error)
        print(result.error.message, file=sys.stderr)
        return 1

    data = result.settings.to_dict()
    if args.format == "json":
        print(json.dumps(data, indent=2))
    else:
        print(yaml.safe_dump(data, default_flow_style=False, sort_keys=False), end="")
    return 0


if __name__ == "__main__":
    sys.exit(main())

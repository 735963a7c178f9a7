"""
Pytest Configuration and Shared Fixtures

Provides:
- A writer for temporary YAML config files
- An isolated environment mapping (never touches os.environ)
- Singleton reset between tests

Run tests:
    pytest appconf/tests/ -v
    pytest appconf/tests/ -v --cov=appconf  # with coverage
"""

from pathlib import Path
from typing import Callable, Dict

import pytest

from appconf.config.settings import reset_settings


VALID_YAML = """\
env: prod
storage_path: /data
http_server:
  addr: 0.0.0.0:8082
"""


@pytest.fixture
def write_config(tmp_path: Path) -> Callable[..., Path]:
    """Write YAML content to a file under tmp_path and return its path."""
    def _write(content: str = VALID_YAML, name: str = "config.yaml") -> Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path
    return _write


@pytest.fixture
def environ() -> Dict[str, str]:
    """Empty environment mapping passed to the loader instead of os.environ."""
    return {}


@pytest.fixture(autouse=True)
def _reset_settings_singleton():
    reset_settings()
    yield
    reset_settings()

"""
Repository-level pytest configuration.

  - Registers the BDD step modules so every feature shares one vocabulary
  - Enables pytester for the tests that run the scenario hooks end to end
  - Initializes loguru from the UI configuration before collection
  - Keeps local runs predictable by pointing artifacts under target/

Real projects should provide base URLs and credentials through CI/CD
environment variables (UI_BASE_URL, UI_BROWSER, ...) instead of the YAML file.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from autotest_tools.common import init_logger
from testsuites.ui_testing.framework.config import get_test_config


pytest_plugins = [
    "pytester",
    "testsuites.ui_testing.steps.common_steps",
    "testsuites.ui_testing.steps.login_steps",
]


def pytest_configure(config):
    """Initialize logging from the `logging.*` settings."""
    ui_config = get_test_config()
    init_logger(
        level=ui_config.get_str("logging.level", "INFO"),
        log_file=ui_config.get("logging.file"),
    )


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Return repo root path."""
    return Path(__file__).parent

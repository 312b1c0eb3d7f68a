"""
================================================================================
UI Testing Pytest Configuration
================================================================================

This module wires pytest-bdd scenarios to the browser session registry and
the lifecycle listener.

Key Features:
- One browser session per scenario, released even when the scenario fails
- Page Object fixtures
- Lifecycle events (start / pass / fail / skip) with failure screenshots

================================================================================
"""

from typing import Generator

import pytest
from loguru import logger

from testsuites.ui_testing.framework.browser_manager import BrowserSession
from testsuites.ui_testing.framework.config import TestConfig, get_test_config
from testsuites.ui_testing.framework.listeners import (
    LifecycleEvent,
    ScenarioContext,
    TestListener,
)
from testsuites.ui_testing.framework.session_registry import registry
from testsuites.ui_testing.pages.forgot_password_page import ForgotPasswordPage
from testsuites.ui_testing.pages.login_page import LoginPage


listener = TestListener()

# Gherkin scenario name, set when the scenario starts
SCENARIO_NAME = pytest.StashKey[str]()


# ================================================================================
# Browser Fixtures
# ================================================================================

@pytest.fixture(scope="session")
def ui_config() -> TestConfig:
    """Session-scoped UI settings."""
    return get_test_config()


@pytest.fixture(autouse=True)
def browser_session(ui_config: TestConfig) -> Generator[BrowserSession, None, None]:
    """
    Function-scoped browser session.

    Initialized before the first step and torn down after the failure
    screenshot has been taken.
    """
    session = registry.initialize(ui_config.browser, ui_config)
    yield session
    registry.teardown()


# ================================================================================
# Page Object Fixtures
# ================================================================================

@pytest.fixture
def login_page(browser_session: BrowserSession, ui_config: TestConfig) -> LoginPage:
    return LoginPage(browser_session, ui_config)


@pytest.fixture
def forgot_password_page(browser_session: BrowserSession, ui_config: TestConfig) -> ForgotPasswordPage:
    return ForgotPasswordPage(browser_session, ui_config)


# ================================================================================
# Lifecycle Hooks
# ================================================================================

def pytest_bdd_before_scenario(request, feature, scenario):
    request.node.stash[SCENARIO_NAME] = scenario.name
    listener.handle(LifecycleEvent.START, ScenarioContext(scenario.name))


def pytest_bdd_after_scenario(request, feature, scenario):
    logger.debug(f"Finished scenario: {feature.name} / {scenario.name}")


def pytest_bdd_step_error(request, feature, scenario, step, step_func, step_func_args, exception):
    logger.error(f"Step failed: {step.keyword} {step.name} ({exception.__class__.__name__}: {exception})")


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """
    Translate pytest reports into lifecycle events.

    Runs before fixture teardown, so the session is still live for the
    failure screenshot.
    """
    outcome = yield
    report = outcome.get_result()
    name = _scenario_name(item)

    if report.when == "setup":
        # A fixture (usually the browser session) failed before any step ran
        if report.failed:
            error = call.excinfo.value if call.excinfo else None
            listener.handle(LifecycleEvent.FAIL, ScenarioContext(name, error=error, duration=report.duration))
        elif report.skipped:
            listener.handle(LifecycleEvent.SKIP, ScenarioContext(name, error=_skip_reason(report)))
        return
    if report.when != "call":
        return

    if report.failed:
        error = call.excinfo.value if call.excinfo else None
        listener.handle(LifecycleEvent.FAIL, ScenarioContext(name, error=error, duration=report.duration))
    elif report.skipped:
        listener.handle(LifecycleEvent.SKIP, ScenarioContext(name, error=_skip_reason(report)))
    else:
        listener.handle(LifecycleEvent.PASS, ScenarioContext(name, duration=report.duration))


def _scenario_name(item) -> str:
    """Gherkin scenario name for pytest-bdd items, the test name otherwise."""
    name = item.stash.get(SCENARIO_NAME, None)
    if name is not None:
        return name
    scenario = getattr(getattr(item, "obj", None), "__scenario__", None)
    return getattr(scenario, "name", item.name)


def _skip_reason(report):
    if isinstance(report.longrepr, tuple) and len(report.longrepr) == 3:
        return report.longrepr[2]
    return None

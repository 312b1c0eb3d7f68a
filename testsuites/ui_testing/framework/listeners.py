"""
================================================================================
Test Lifecycle Listener
================================================================================

Observes scenario start / pass / fail / skip events raised by the pytest and
pytest-bdd hooks. On failure it pulls a screenshot through the still-live
browser session, attaches it to the Allure report together with the current
URL and page source, and saves a copy under the screenshots directory.

The listener keeps no state of its own. Capture problems are logged and
swallowed so they never replace the failure being reported.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Callable, Optional, Union

from loguru import logger

from autotest_tools.report_tools.allure_utils import attach_html, attach_json, attach_png, attach_text

from .browser_manager import BrowserSession
from .config import TestConfig, get_test_config
from .exceptions import FrameworkError
from .session_registry import registry


class LifecycleEvent(str, Enum):
    """Closed set of scenario lifecycle events."""

    START = "start"
    PASS = "pass"
    FAIL = "fail"
    SKIP = "skip"


@dataclass(frozen=True)
class ScenarioContext:
    """
    What the runner knows about a scenario when an event fires.

    Attributes:
        name: Scenario or test name
        error: Failure or skip reason, if any
        duration: Seconds spent in the test body, if known
    """
    name: str
    error: Union[BaseException, str, None] = None
    duration: Optional[float] = None


def sanitize_filename(name: str) -> str:
    """Replace everything but letters, digits, dot and dash with '_'."""
    return re.sub(r"[^a-zA-Z0-9.-]", "_", name)


class TestListener:
    """
    Scenario lifecycle observer.

    Usage:
        listener = TestListener()
        listener.handle(LifecycleEvent.START, ScenarioContext("Login works"))
        ...
        listener.handle(LifecycleEvent.FAIL, ScenarioContext("Login works", error=exc))
    """

    # Not a pytest test class despite the name
    __test__ = False

    def __init__(
        self,
        config_provider: Callable[[], TestConfig] = get_test_config,
        session_provider: Callable[[], BrowserSession] = registry.current,
    ):
        self._config = config_provider
        self._session = session_provider

    def handle(self, event: LifecycleEvent, context: ScenarioContext) -> Optional[Path]:
        """
        Dispatch one lifecycle event.

        Returns:
            Path of the saved failure screenshot, if one was taken
        """
        if event is LifecycleEvent.START:
            logger.info(f"Starting scenario: {context.name}")
        elif event is LifecycleEvent.PASS:
            duration = f" - Duration: {context.duration:.2f}s" if context.duration is not None else ""
            logger.info(f"Scenario passed: {context.name}{duration}")
        elif event is LifecycleEvent.SKIP:
            reason = f" - Reason: {context.error}" if context.error else ""
            logger.warning(f"Scenario skipped: {context.name}{reason}")
        elif event is LifecycleEvent.FAIL:
            return self._on_failure(context)
        return None

    def _on_failure(self, context: ScenarioContext) -> Optional[Path]:
        logger.error(f"Scenario failed: {context.name}")
        if context.error is not None:
            logger.error(f"Failure reason: {context.error}")

        self.attach_failure_details(context)

        if not self._config().screenshot_on_failure:
            return None
        return self.capture_screenshot(context.name)

    def attach_failure_details(self, context: ScenarioContext) -> None:
        """
        Attach a failure summary, the current URL and the page source to Allure.

        Page state is left out when no session is active. Never raises.
        """
        url: Optional[str] = None
        source: Optional[str] = None
        try:
            session = self._session()
            url = session.current_url
            source = session.page_source
        except Exception as e:
            logger.warning(f"Page state unavailable for '{context.name}': {e}")

        details = {
            "scenario": context.name,
            "error": None if context.error is None else str(context.error),
            "duration": context.duration,
            "url": url,
        }
        try:
            attach_json(details, name="Failure Details")
            if url is not None:
                attach_text(url, name="Current URL")
            if source is not None:
                attach_html(source, name="Page Source")
        except Exception as e:
            logger.error(f"Failed to add failure details to Allure report: {e}")

    def capture_screenshot(self, name: str) -> Optional[Path]:
        """
        Attach a PNG of the current page to Allure and save it to disk.

        Never raises.
        """
        try:
            data = self._session().screenshot(full_page=True)
        except FrameworkError as e:
            logger.error(f"Failed to take screenshot for '{name}': {e}")
            return None
        except Exception as e:
            logger.error(f"Error taking screenshot for '{name}': {e}")
            return None

        try:
            attach_png(data, name="Screenshot")
            logger.info(f"Screenshot added to Allure report for failed scenario: {name}")
        except Exception as e:
            logger.error(f"Failed to add screenshot to Allure report: {e}")

        try:
            directory = Path(self._config().screenshots_directory)
            directory.mkdir(parents=True, exist_ok=True)
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            path = directory / f"{sanitize_filename(name)}_{timestamp}.png"
            path.write_bytes(data)
        except OSError as e:
            logger.error(f"Failed to save screenshot for '{name}': {e}")
            return None

        logger.info(f"Screenshot saved: {path}")
        return path


__all__ = [
    "LifecycleEvent",
    "ScenarioContext",
    "TestListener",
    "sanitize_filename",
]

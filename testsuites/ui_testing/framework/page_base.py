"""
================================================================================
Base Page Object
================================================================================

Foundation class for Page Object Model implementation.

Provides:
    - Element waits (present, visible, clickable, hidden, text)
    - Clicks, typing, reads, dropdowns, checkboxes, mouse actions
    - Frame, window and alert handling
    - Screenshot utilities

Every operation re-locates its element through the session's current
document, so stale element handles never leak between calls. Every wait
failure surfaces as WaitTimeoutError carrying the locator and the bound.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Any, Iterator, List, Optional, Union

import allure
from loguru import logger
from playwright.sync_api import (
    Error as PlaywrightError,
    Frame,
    Locator as ElementHandle,
    TimeoutError as PlaywrightTimeoutError,
)

from autotest_tools.report_tools.allure_utils import attach_png

from .browser_manager import BrowserSession
from .config import TestConfig, get_test_config
from .exceptions import WaitTimeoutError
from .locator import Locator
from .session_registry import registry


_STATE_NAMES = {
    "attached": "present",
    "visible": "visible",
    "hidden": "invisible",
}


def _mask(locator: Locator, text: str) -> str:
    return "*" * len(text) if "password" in str(locator).lower() else text


class BasePage:
    """
    Base class for all page objects.

    Usage:
        class LoginPage(BasePage):
            URL_PATH = "/login"

            EMAIL_FIELD = Locator.id("email")
            LOGIN_BUTTON = Locator.id("login-button")

            def login(self, email: str):
                self.type(self.EMAIL_FIELD, email)
                self.click(self.LOGIN_BUTTON)
    """

    # Override in subclasses
    URL_PATH: str = "/"
    PAGE_TITLE: str = ""

    def __init__(
        self,
        session: Optional[BrowserSession] = None,
        config: Optional[TestConfig] = None,
    ):
        """
        Initialize page object.

        Args:
            session: Browser session. Defaults to the calling thread's session.
            config: Settings. Defaults to the process-wide configuration.

        Raises:
            NotInitializedError: If no session was given and none is active
        """
        self.session = session or registry.current()
        self.config = config or get_test_config()
        self.wait = self.session.wait
        self.base_url = self.config.base_url.rstrip("/")

    @property
    def url(self) -> str:
        """Get full page URL."""
        return f"{self.base_url}{self.URL_PATH}"

    @property
    def page(self):
        """Playwright page currently in focus."""
        return self.session.page

    def navigate(self) -> None:
        """Navigate to this page."""
        with allure.step(f"Navigate to {self.URL_PATH}"):
            self.session.navigate_to(self.url)

    def navigate_to(self, path: str) -> None:
        """Navigate to a path relative to the base URL."""
        with allure.step(f"Navigate to {path}"):
            self.session.navigate_to(f"{self.base_url}{path}")

    # =========================================================================
    # Resolution
    # =========================================================================

    def _resolve(self, locator: Locator) -> ElementHandle:
        """Fresh handle to the first element matching locator."""
        return self.session.document.locator(locator.selector).first

    def _bound(self, timeout: Optional[float]) -> float:
        return self.wait.timeout if timeout is None else timeout

    @contextmanager
    def _timeouts(self, description: str, timeout: float) -> Iterator[None]:
        """Translate Playwright timeouts into WaitTimeoutError."""
        try:
            yield
        except PlaywrightTimeoutError as e:
            logger.warning(f"Timed out after {timeout:g}s: {description}")
            raise WaitTimeoutError(description, timeout) from e

    def _wait_for_state(self, locator: Locator, state: str, timeout: Optional[float]) -> ElementHandle:
        bound = self._bound(timeout)
        element = self._resolve(locator)
        with self._timeouts(f"{locator} to be {_STATE_NAMES[state]}", bound):
            element.wait_for(state=state, timeout=bound * 1000)
        return element

    # =========================================================================
    # Element Waits
    # =========================================================================

    def wait_for_element_present(self, locator: Locator, timeout: Optional[float] = None) -> ElementHandle:
        """Wait until the element exists in the DOM."""
        logger.info(f"Waiting for element to be present: {locator}")
        return self._wait_for_state(locator, "attached", timeout)

    def wait_for_element_visible(self, locator: Locator, timeout: Optional[float] = None) -> ElementHandle:
        """Wait until the element exists and is rendered."""
        logger.info(f"Waiting for element to be visible: {locator}")
        return self._wait_for_state(locator, "visible", timeout)

    def wait_for_element_clickable(self, locator: Locator, timeout: Optional[float] = None) -> ElementHandle:
        """Wait until the element is visible and enabled."""
        logger.info(f"Waiting for element to be clickable: {locator}")
        bound = self._bound(timeout)
        started = self.wait.clock()
        check_ms = self.wait.poll_interval * 1000
        try:
            self._wait_for_state(locator, "visible", bound)
            remaining = max(bound - (self.wait.clock() - started), 0)
            self.wait.until(
                lambda: self._resolve(locator).is_enabled(timeout=check_ms),
                f"{locator} to be clickable",
                timeout=remaining,
                sleep=self.session.pause,
            )
        except WaitTimeoutError as e:
            raise WaitTimeoutError(f"{locator} to be clickable", bound) from e
        return self._resolve(locator)

    def wait_for_element_to_disappear(self, locator: Locator, timeout: Optional[float] = None) -> None:
        """Wait until the element is hidden or gone."""
        logger.info(f"Waiting for element to disappear: {locator}")
        self._wait_for_state(locator, "hidden", timeout)

    def wait_for_text_to_be_present(
        self,
        locator: Locator,
        text: str,
        timeout: Optional[float] = None,
    ) -> None:
        """Wait until the element's visible text contains text."""
        logger.info(f"Waiting for text '{text}' to be present in element: {locator}")
        check_ms = self.wait.poll_interval * 1000
        self.wait.until(
            lambda: text in self._resolve(locator).inner_text(timeout=check_ms),
            f"text '{text}' in {locator}",
            timeout=timeout,
            sleep=self.session.pause,
        )

    def wait_for_url_to_contain(self, text: str, timeout: Optional[float] = None) -> None:
        logger.info(f"Waiting for URL to contain: {text}")
        self.wait.until(
            lambda: text in self.session.current_url,
            f"URL to contain '{text}'",
            timeout=timeout,
            sleep=self.session.pause,
        )

    def wait_for_title_to_contain(self, text: str, timeout: Optional[float] = None) -> None:
        logger.info(f"Waiting for title to contain: {text}")
        self.wait.until(
            lambda: text in self.session.title,
            f"title to contain '{text}'",
            timeout=timeout,
            sleep=self.session.pause,
        )

    def wait_for_page_load(self, timeout: Optional[float] = None) -> None:
        """Wait for document.readyState to become 'complete'."""
        logger.info("Waiting for page to load")
        bound = self._bound(timeout)
        with self._timeouts("page load (document.readyState == 'complete')", bound):
            self.session.document.wait_for_function(
                "() => document.readyState === 'complete'",
                timeout=bound * 1000,
            )

    def wait_for_script_condition(self, expression: str, arg: Any = None) -> Any:
        """Wait for a JavaScript predicate, bounded by the session's script timeout."""
        bound = self.session.script_timeout
        logger.info(f"Waiting for script condition: {expression}")
        with self._timeouts(f"script condition {expression!r}", bound):
            handle = self.session.document.wait_for_function(expression, arg=arg, timeout=bound * 1000)
        return handle.json_value()

    # =========================================================================
    # Interactions
    # =========================================================================

    @allure.step("Click: {locator}")
    def click(self, locator: Locator, timeout: Optional[float] = None) -> None:
        logger.info(f"Clicking element: {locator}")
        element = self.wait_for_element_clickable(locator, timeout)
        with self._timeouts(f"click on {locator}", self.session.implicit_wait):
            element.click()

    @allure.step("Click with JavaScript: {locator}")
    def click_with_javascript(self, locator: Locator, timeout: Optional[float] = None) -> None:
        logger.info(f"Clicking element with JavaScript: {locator}")
        element = self.wait_for_element_present(locator, timeout)
        with self._timeouts(f"JavaScript click on {locator}", self.session.implicit_wait):
            element.evaluate("el => el.click()")

    def type(self, locator: Locator, text: str, timeout: Optional[float] = None) -> None:
        """Replace the element's content with text."""
        with allure.step(f"Type into {locator}: {_mask(locator, text)}"):
            logger.info(f"Typing text '{_mask(locator, text)}' into element: {locator}")
            element = self.wait_for_element_visible(locator, timeout)
            with self._timeouts(f"typing into {locator}", self.session.implicit_wait):
                element.fill(text)

    def type_without_clear(self, locator: Locator, text: str, timeout: Optional[float] = None) -> None:
        """Append text after the element's existing content."""
        with allure.step(f"Append to {locator}: {_mask(locator, text)}"):
            logger.info(f"Typing text '{_mask(locator, text)}' into element without clearing: {locator}")
            element = self.wait_for_element_visible(locator, timeout)
            with self._timeouts(f"typing into {locator}", self.session.implicit_wait):
                element.press("End")
                element.press_sequentially(text)

    def clear(self, locator: Locator, timeout: Optional[float] = None) -> None:
        logger.info(f"Clearing element: {locator}")
        element = self.wait_for_element_visible(locator, timeout)
        with self._timeouts(f"clearing {locator}", self.session.implicit_wait):
            element.clear()

    def get_text(self, locator: Locator, timeout: Optional[float] = None) -> str:
        """Visible text of the element."""
        logger.info(f"Getting text from element: {locator}")
        element = self.wait_for_element_visible(locator, timeout)
        with self._timeouts(f"reading text of {locator}", self.session.implicit_wait):
            return element.inner_text().strip()

    def get_attribute(self, locator: Locator, attribute: str, timeout: Optional[float] = None) -> Optional[str]:
        """HTML attribute of the element, None if the attribute is absent."""
        logger.info(f"Getting attribute '{attribute}' from element: {locator}")
        element = self.wait_for_element_present(locator, timeout)
        with self._timeouts(f"reading attribute '{attribute}' of {locator}", self.session.implicit_wait):
            return element.get_attribute(attribute)

    def get_input_value(self, locator: Locator, timeout: Optional[float] = None) -> str:
        """Current value of an input, textarea or select."""
        logger.info(f"Getting input value from element: {locator}")
        element = self.wait_for_element_present(locator, timeout)
        with self._timeouts(f"reading value of {locator}", self.session.implicit_wait):
            return element.input_value()

    def find_elements(self, locator: Locator) -> List[ElementHandle]:
        """All elements currently matching locator; no waiting."""
        logger.info(f"Finding elements: {locator}")
        return self.session.document.locator(locator.selector).all()

    # =========================================================================
    # Predicates
    # =========================================================================

    def is_element_displayed(self, locator: Locator, timeout: Optional[float] = None) -> bool:
        """True once visible; False when the wait bound elapses."""
        try:
            element = self.wait_for_element_visible(locator, timeout)
            return element.is_visible()
        except WaitTimeoutError:
            logger.warning(f"Element not displayed: {locator}")
            return False

    def is_element_enabled(self, locator: Locator, timeout: Optional[float] = None) -> bool:
        """True once visible and enabled; False when the wait bound elapses."""
        try:
            element = self.wait_for_element_visible(locator, timeout)
            return element.is_enabled()
        except WaitTimeoutError:
            logger.warning(f"Element not enabled: {locator}")
            return False

    def is_checked(self, locator: Locator, timeout: Optional[float] = None) -> bool:
        element = self.wait_for_element_present(locator, timeout)
        with self._timeouts(f"reading checked state of {locator}", self.session.implicit_wait):
            return element.is_checked()

    # =========================================================================
    # Dropdowns and Checkboxes
    # =========================================================================

    def _select(self, locator: Locator, description: str, timeout: Optional[float], **option: Any) -> None:
        element = self.wait_for_element_visible(locator, timeout)
        with self._timeouts(f"option {description} in {locator}", self.session.implicit_wait):
            element.select_option(**option)

    @allure.step("Select '{visible_text}' in {locator}")
    def select_by_visible_text(self, locator: Locator, visible_text: str, timeout: Optional[float] = None) -> None:
        logger.info(f"Selecting option '{visible_text}' from dropdown: {locator}")
        self._select(locator, f"with text '{visible_text}'", timeout, label=visible_text)

    @allure.step("Select value '{value}' in {locator}")
    def select_by_value(self, locator: Locator, value: str, timeout: Optional[float] = None) -> None:
        logger.info(f"Selecting option with value '{value}' from dropdown: {locator}")
        self._select(locator, f"with value '{value}'", timeout, value=value)

    @allure.step("Select index {index} in {locator}")
    def select_by_index(self, locator: Locator, index: int, timeout: Optional[float] = None) -> None:
        logger.info(f"Selecting option at index '{index}' from dropdown: {locator}")
        self._select(locator, f"at index {index}", timeout, index=index)

    @allure.step("Check: {locator}")
    def check_checkbox(self, locator: Locator, timeout: Optional[float] = None) -> None:
        logger.info(f"Checking checkbox: {locator}")
        element = self.wait_for_element_clickable(locator, timeout)
        with self._timeouts(f"checking {locator}", self.session.implicit_wait):
            if not element.is_checked():
                element.click()

    @allure.step("Uncheck: {locator}")
    def uncheck_checkbox(self, locator: Locator, timeout: Optional[float] = None) -> None:
        logger.info(f"Unchecking checkbox: {locator}")
        element = self.wait_for_element_clickable(locator, timeout)
        with self._timeouts(f"unchecking {locator}", self.session.implicit_wait):
            if element.is_checked():
                element.click()

    # =========================================================================
    # Mouse Actions
    # =========================================================================

    def hover_over(self, locator: Locator, timeout: Optional[float] = None) -> None:
        logger.info(f"Hovering over element: {locator}")
        element = self.wait_for_element_visible(locator, timeout)
        with self._timeouts(f"hovering over {locator}", self.session.implicit_wait):
            element.hover()

    def right_click(self, locator: Locator, timeout: Optional[float] = None) -> None:
        logger.info(f"Right clicking element: {locator}")
        element = self.wait_for_element_visible(locator, timeout)
        with self._timeouts(f"right click on {locator}", self.session.implicit_wait):
            element.click(button="right")

    def double_click(self, locator: Locator, timeout: Optional[float] = None) -> None:
        logger.info(f"Double clicking element: {locator}")
        element = self.wait_for_element_visible(locator, timeout)
        with self._timeouts(f"double click on {locator}", self.session.implicit_wait):
            element.dblclick()

    @allure.step("Drag {source} to {target}")
    def drag_and_drop(self, source: Locator, target: Locator, timeout: Optional[float] = None) -> None:
        logger.info(f"Dragging element {source} to {target}")
        source_element = self.wait_for_element_visible(source, timeout)
        target_element = self.wait_for_element_visible(target, timeout)
        with self._timeouts(f"dragging {source} to {target}", self.session.implicit_wait):
            source_element.drag_to(target_element)

    # =========================================================================
    # Scrolling and Scripts
    # =========================================================================

    def scroll_to_element(self, locator: Locator, timeout: Optional[float] = None) -> None:
        logger.info(f"Scrolling to element: {locator}")
        element = self.wait_for_element_present(locator, timeout)
        with self._timeouts(f"scrolling to {locator}", self.session.implicit_wait):
            element.evaluate("el => el.scrollIntoView(true)")

    def scroll_to_bottom(self) -> None:
        logger.info("Scrolling to bottom of page")
        self.execute_script("() => window.scrollTo(0, document.body.scrollHeight)")

    def scroll_to_top(self) -> None:
        logger.info("Scrolling to top of page")
        self.execute_script("() => window.scrollTo(0, 0)")

    def execute_script(self, script: str, arg: Any = None) -> Any:
        """Evaluate JavaScript in the current document."""
        return self.session.document.evaluate(script, arg)

    # =========================================================================
    # Alerts
    # =========================================================================

    def _wait_for_alert(self):
        return self.wait.until(
            self.session.peek_dialog,
            "alert to be present",
            sleep=self.session.pause,
        )

    def accept_alert(self) -> None:
        logger.info("Accepting alert")
        self._wait_for_alert()
        self.session.pop_dialog().accept()

    def dismiss_alert(self) -> None:
        logger.info("Dismissing alert")
        self._wait_for_alert()
        self.session.pop_dialog().dismiss()

    def get_alert_text(self) -> str:
        """Message of the pending alert; the alert stays open."""
        logger.info("Getting alert text")
        return self._wait_for_alert().message

    # =========================================================================
    # Frames and Windows
    # =========================================================================

    @staticmethod
    def _frame_matches(frame: Frame, name_or_id: str) -> bool:
        if frame.name == name_or_id:
            return True
        try:
            return frame.frame_element().get_attribute("id") == name_or_id
        except PlaywrightError:
            # Frame detached while scanning
            return False

    def switch_to_frame(self, frame: Union[int, str], timeout: Optional[float] = None) -> None:
        """
        Focus a child frame of the current document.

        Args:
            frame: Zero-based child frame index, or frame name / element id
        """
        logger.info(f"Switching to frame: {frame}")
        document = self.session.document

        def find() -> Optional[Frame]:
            children = document.child_frames
            if isinstance(frame, int):
                return children[frame] if 0 <= frame < len(children) else None
            return next((child for child in children if self._frame_matches(child, frame)), None)

        target = self.wait.until(find, f"frame {frame!r} to be available", timeout=timeout, sleep=self.session.pause)
        self.session.switch_to_frame(target)

    def switch_to_default_content(self) -> None:
        logger.info("Switching to default content")
        self.session.switch_to_default_content()

    def switch_to_window_by_title(self, title: str) -> bool:
        """
        Focus the first window (in open order) whose title contains title.

        Returns:
            True if a window matched. Otherwise the original window keeps
            focus (or the first open one if it was closed) and False is returned.
        """
        logger.info(f"Switching to window with title: {title}")
        original = self.session.page
        for page in self.session.pages:
            if page.is_closed():
                continue
            if title in page.title():
                self.session.switch_to_page(page)
                return True

        if original.is_closed():
            remaining = [page for page in self.session.pages if not page.is_closed()]
            if remaining:
                self.session.switch_to_page(remaining[0])
        else:
            self.session.switch_to_page(original)
        logger.warning(f"No window found with title containing: {title}")
        return False

    # =========================================================================
    # Screenshot Utilities
    # =========================================================================

    def screenshot(self, name: str, full_page: bool = False, attach_to_allure: bool = True) -> Path:
        """
        Take screenshot and optionally attach to Allure.

        Returns:
            Path to saved screenshot
        """
        directory = Path(self.config.screenshots_directory)
        directory.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        filepath = directory / f"{name}_{timestamp}.png"

        data = self.session.screenshot(full_page=full_page)
        filepath.write_bytes(data)

        if attach_to_allure:
            attach_png(data, name=name)

        logger.debug(f"Screenshot saved: {filepath}")
        return filepath


__all__ = [
    "BasePage",
    "PageBase",
]

# Backward-compatible alias (many Page Objects prefer PageBase naming)
PageBase = BasePage

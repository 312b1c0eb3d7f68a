"""
================================================================================
Browser Manager
================================================================================

Browser session construction for UI automation.

Features:
    - Closed set of browser tags mapped onto Playwright engines
    - Standard startup flags (maximized window, no notification prompts)
    - Standard timeouts applied from configuration
    - Best-effort, idempotent release of every started resource

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional, Tuple

from loguru import logger
from playwright.sync_api import (
    sync_playwright,
    Browser,
    BrowserContext,
    Dialog,
    Frame,
    Page,
    Playwright,
)

from .config import TestConfig
from .exceptions import BrowserSetupError, UnsupportedBrowserError
from .waits import WaitPolicy


SUPPORTED_BROWSERS: Tuple[str, ...] = ("chrome", "firefox", "edge", "safari")

# Chromium-family startup flags (chrome, edge)
CHROMIUM_ARGS: List[str] = [
    "--start-maximized",
    "--disable-notifications",
    "--disable-popup-blocking",
]

# Firefox has no command line switch for notifications, use prefs instead
FIREFOX_USER_PREFS: Dict[str, Any] = {
    "dom.webnotifications.enabled": False,
    "dom.push.enabled": False,
    "permissions.default.desktop-notification": 2,
}


def normalize_browser_type(browser_type: Optional[str]) -> str:
    """Canonical form of a browser tag (' Chrome ' -> 'chrome')."""
    return str(browser_type or "").strip().lower()


class BrowserSession:
    """
    One live browser-automation connection.

    Wraps the Playwright driver, browser, context and the page currently in
    focus. Locator resolution targets ``document``: the switched-to frame if
    any, otherwise the current page's main frame.

    Attributes:
        browser_type: Tag the session was created for
        wait: Wait policy bound to this session
        implicit_wait: Default action timeout (seconds)
        page_load_timeout: Default navigation timeout (seconds)
        script_timeout: Bound for script-condition waits (seconds)
    """

    def __init__(
        self,
        browser_type: str,
        playwright: Playwright,
        browser: Browser,
        context: BrowserContext,
        page: Page,
        wait: WaitPolicy,
        implicit_wait: float,
        page_load_timeout: float,
        script_timeout: float,
    ):
        self.browser_type = browser_type
        self.playwright = playwright
        self.browser = browser
        self.context = context
        self.wait = wait
        self.implicit_wait = implicit_wait
        self.page_load_timeout = page_load_timeout
        self.script_timeout = script_timeout

        self._page = page
        self._frame: Optional[Frame] = None
        self._dialogs: List[Dialog] = []
        self._closed = False

        # Dialogs stay open until a page object accepts or dismisses them
        context.on("page", self._watch_dialogs)
        self._watch_dialogs(page)

    def _watch_dialogs(self, page: Page) -> None:
        page.on("dialog", self._dialogs.append)

    # =========================================================================
    # Document Focus
    # =========================================================================

    @property
    def page(self) -> Page:
        """Page (window) currently in focus."""
        return self._page

    @property
    def document(self) -> Frame:
        """Frame that locators currently resolve against."""
        return self._frame or self._page.main_frame

    @property
    def pages(self) -> List[Page]:
        """All open pages in open order."""
        return list(self.context.pages)

    def switch_to_page(self, page: Page) -> None:
        """Focus another page and reset frame focus to its top document."""
        self._page = page
        self._frame = None
        page.bring_to_front()

    def switch_to_frame(self, frame: Frame) -> None:
        self._frame = frame

    def switch_to_default_content(self) -> None:
        self._frame = None

    def pop_dialog(self) -> Optional[Dialog]:
        """Oldest unhandled dialog, or None."""
        return self._dialogs.pop(0) if self._dialogs else None

    def peek_dialog(self) -> Optional[Dialog]:
        return self._dialogs[0] if self._dialogs else None

    def pause(self, seconds: float) -> None:
        """Sleep while letting Playwright dispatch browser events."""
        self._page.wait_for_timeout(seconds * 1000)

    # =========================================================================
    # Navigation
    # =========================================================================

    def navigate_to(self, url: str) -> None:
        logger.info(f"Navigating to: {url}")
        self._frame = None
        self._page.goto(url)

    def refresh(self) -> None:
        self._frame = None
        self._page.reload()

    def back(self) -> None:
        self._frame = None
        self._page.go_back()

    def forward(self) -> None:
        self._frame = None
        self._page.go_forward()

    @property
    def title(self) -> str:
        return self._page.title()

    @property
    def current_url(self) -> str:
        return self._page.url

    @property
    def page_source(self) -> str:
        """Serialized HTML of the page in focus."""
        return self._page.content()

    def screenshot(self, full_page: bool = True) -> bytes:
        """PNG bytes of the page in focus."""
        return self._page.screenshot(full_page=full_page)

    # =========================================================================
    # Lifecycle
    # =========================================================================

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        """
        Release context, browser and driver.

        Best-effort and idempotent: each release is attempted even if an
        earlier one fails, and failures are logged, never raised.
        """
        if self._closed:
            return
        self._closed = True

        releases: List[Tuple[str, Callable[[], Any]]] = [
            ("context", self.context.close),
            ("browser", self.browser.close),
            ("playwright", self.playwright.stop),
        ]
        for name, release in releases:
            try:
                release()
            except Exception as e:
                logger.warning(f"Failed to release {name} of {self.browser_type} session: {e}")

        self._dialogs.clear()
        logger.debug(f"Browser session closed: {self.browser_type}")

    def __enter__(self) -> "BrowserSession":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def __repr__(self) -> str:
        state = "closed" if self._closed else "active"
        return f"<BrowserSession {self.browser_type} {state}>"


class BrowserFactory:
    """
    Builds browser sessions from a browser tag and configuration.

    Browser mapping:
        chrome  -> Chromium with Chrome flags
        edge    -> Chromium, msedge channel
        firefox -> Firefox with notification prefs disabled
        safari  -> WebKit

    Usage:
        factory = BrowserFactory()
        session = factory.create("chrome", TestConfig.load())
        session.navigate_to("https://example.com")
        session.close()
    """

    def __init__(self, playwright_starter: Optional[Callable[[], Playwright]] = None):
        """
        Args:
            playwright_starter: Returns a started Playwright driver.
                                Defaults to sync_playwright().start().
        """
        self._start_playwright = playwright_starter or (lambda: sync_playwright().start())

    def create(self, browser_type: str, config: TestConfig) -> BrowserSession:
        """
        Start a browser and return a live session with standard timeouts.

        Raises:
            UnsupportedBrowserError: Unknown tag, raised before anything starts
            BrowserSetupError: The backend failed to start
        """
        tag = normalize_browser_type(browser_type)
        if tag not in SUPPORTED_BROWSERS:
            raise UnsupportedBrowserError(browser_type, SUPPORTED_BROWSERS)

        engine, launch_options = self._launch_options(tag, config)
        context_options = self._context_options(tag, config)

        try:
            playwright = self._start_playwright()
        except Exception as e:
            raise BrowserSetupError(f"Failed to start Playwright driver for {tag}: {e}") from e

        browser: Optional[Browser] = None
        context: Optional[BrowserContext] = None
        try:
            browser = getattr(playwright, engine).launch(**launch_options)
            context = browser.new_context(**context_options)
            context.set_default_timeout(config.implicit_wait * 1000)
            context.set_default_navigation_timeout(config.page_load_timeout * 1000)
            page = context.new_page()
        except Exception as e:
            logger.error(f"Failed to start {tag} browser: {e}")
            self._release_partial(playwright, browser, context)
            raise BrowserSetupError(f"Failed to start {tag} browser: {e}") from e

        session = BrowserSession(
            browser_type=tag,
            playwright=playwright,
            browser=browser,
            context=context,
            page=page,
            wait=WaitPolicy(timeout=config.explicit_wait),
            implicit_wait=config.implicit_wait,
            page_load_timeout=config.page_load_timeout,
            script_timeout=config.script_timeout,
        )
        logger.info(
            f"Browser started: {tag} (engine={engine}, headless={config.headless}, "
            f"implicit={config.implicit_wait}s, page_load={config.page_load_timeout}s, "
            f"script={config.script_timeout}s)"
        )
        return session

    @staticmethod
    def _launch_options(tag: str, config: TestConfig) -> Tuple[str, Dict[str, Any]]:
        """Playwright engine name and launch options for a browser tag."""
        options: Dict[str, Any] = {"headless": config.headless}

        if tag == "chrome":
            return "chromium", {**options, "args": list(CHROMIUM_ARGS)}
        if tag == "edge":
            return "chromium", {**options, "channel": "msedge", "args": list(CHROMIUM_ARGS)}
        if tag == "firefox":
            return "firefox", {**options, "firefox_user_prefs": dict(FIREFOX_USER_PREFS)}
        return "webkit", options

    @staticmethod
    def _context_options(tag: str, config: TestConfig) -> Dict[str, Any]:
        """Context options: window size, TLS leniency and optional video."""
        width, height = config.window_dimensions
        options: Dict[str, Any] = {"ignore_https_errors": True}

        if tag in ("chrome", "edge") and not config.headless:
            # Let --start-maximized decide the window size
            options["no_viewport"] = True
        else:
            options["viewport"] = {"width": width, "height": height}

        if config.video_recording:
            options["record_video_dir"] = config.videos_directory
            options["record_video_size"] = {"width": width, "height": height}

        return options

    @staticmethod
    def _release_partial(
        playwright: Playwright,
        browser: Optional[Browser],
        context: Optional[BrowserContext],
    ) -> None:
        for name, resource, method in (
            ("context", context, "close"),
            ("browser", browser, "close"),
            ("playwright", playwright, "stop"),
        ):
            if resource is None:
                continue
            try:
                getattr(resource, method)()
            except Exception as e:
                logger.warning(f"Failed to release {name} after setup error: {e}")


__all__ = [
    "SUPPORTED_BROWSERS",
    "BrowserFactory",
    "BrowserSession",
    "normalize_browser_type",
]

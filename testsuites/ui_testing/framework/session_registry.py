"""
================================================================================
Session Registry
================================================================================

Maps each execution context to its browser session.

Each test scenario runs on its own thread (or xdist worker) and owns at most
one live BrowserSession. The registry's mapping is the only shared mutable
structure; the context key comes from an injectable provider so tests can
drive several contexts without spinning real threads.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import atexit
import threading
from contextlib import contextmanager
from typing import Callable, Dict, Hashable, Iterator, List, Optional

from loguru import logger

from .browser_manager import BrowserFactory, BrowserSession
from .config import TestConfig, get_test_config
from .exceptions import NotInitializedError
from .waits import WaitPolicy


class SessionRegistry:
    """
    Context-keyed registry of browser sessions.

    States per context: UNINITIALIZED -> ACTIVE -> UNINITIALIZED.

    Usage:
        registry = SessionRegistry()
        registry.initialize("chrome")
        registry.current().navigate_to("https://example.com")
        registry.teardown()

        # Scoped acquisition
        with registry.session("firefox") as session:
            session.navigate_to("https://example.com")
    """

    def __init__(
        self,
        factory: Optional[BrowserFactory] = None,
        context_id_provider: Callable[[], Hashable] = threading.get_ident,
        config_provider: Callable[[], TestConfig] = get_test_config,
    ):
        self._factory = factory or BrowserFactory()
        self._context_id = context_id_provider
        self._config = config_provider
        self._sessions: Dict[Hashable, BrowserSession] = {}
        self._lock = threading.Lock()

    def _key(self, context_id: Optional[Hashable]) -> Hashable:
        return self._context_id() if context_id is None else context_id

    def initialize(
        self,
        browser_type: Optional[str] = None,
        config: Optional[TestConfig] = None,
        context_id: Optional[Hashable] = None,
    ) -> BrowserSession:
        """
        Create a session for the calling context and register it.

        An existing session for the same context is released first and then
        replaced. Playwright allows one running driver per thread, so the old
        session must be gone before the new one starts. If the new session
        fails to start, the context is left uninitialized.

        Args:
            browser_type: Browser tag. Defaults to the configured browser.
            config: Settings. Defaults to the process-wide configuration.
            context_id: Explicit context key. Defaults to the provider's value.

        Raises:
            UnsupportedBrowserError: Unknown browser tag
            BrowserSetupError: Backend failed to start
        """
        key = self._key(context_id)
        config = config or self._config()
        browser_type = browser_type or config.browser

        with self._lock:
            previous = self._sessions.pop(key, None)

        if previous is not None:
            logger.warning(
                f"Context {key} already had an active {previous.browser_type} session; "
                f"releasing it before starting {browser_type}"
            )
            self._release(key, previous)

        session = self._factory.create(browser_type, config)

        with self._lock:
            self._sessions[key] = session

        logger.info(f"Initialized {session.browser_type} session for context {key}")
        return session

    def current(self, context_id: Optional[Hashable] = None) -> BrowserSession:
        """
        Session of the calling context.

        Raises:
            NotInitializedError: If the context has no session
        """
        key = self._key(context_id)
        with self._lock:
            session = self._sessions.get(key)
        if session is None:
            raise NotInitializedError(
                f"Browser session not initialized for context {key}. Call initialize() first."
            )
        return session

    def wait(self, context_id: Optional[Hashable] = None) -> WaitPolicy:
        """Wait policy of the calling context's session."""
        return self.current(context_id).wait

    def is_active(self, context_id: Optional[Hashable] = None) -> bool:
        key = self._key(context_id)
        with self._lock:
            return key in self._sessions

    def teardown(self, context_id: Optional[Hashable] = None) -> None:
        """
        Release the calling context's session and forget it.

        Never raises; calling it without a session is a no-op.
        """
        key = self._key(context_id)
        with self._lock:
            session = self._sessions.pop(key, None)
        if session is None:
            logger.debug(f"No session to tear down for context {key}")
            return

        self._release(key, session)
        logger.info(f"Tore down {session.browser_type} session for context {key}")

    @staticmethod
    def _release(key: Hashable, session: BrowserSession) -> None:
        try:
            session.close()
        except Exception as e:
            logger.warning(f"Error while releasing session for context {key}: {e}")

    def teardown_all(self) -> None:
        """Release every registered session."""
        with self._lock:
            keys = list(self._sessions)
        for key in keys:
            self.teardown(key)

    def active_contexts(self) -> List[Hashable]:
        with self._lock:
            return list(self._sessions)

    @contextmanager
    def session(
        self,
        browser_type: Optional[str] = None,
        config: Optional[TestConfig] = None,
    ) -> Iterator[BrowserSession]:
        """Initialize a session for the block and always tear it down."""
        key = self._key(None)
        session = self.initialize(browser_type, config, context_id=key)
        try:
            yield session
        finally:
            self.teardown(key)


# =============================================================================
# Default Registry
# =============================================================================

registry = SessionRegistry()

# Browsers must not outlive the interpreter even if teardown was skipped
atexit.register(registry.teardown_all)


def get_session() -> BrowserSession:
    """Session of the calling thread in the default registry."""
    return registry.current()


def navigate_to(url: str) -> None:
    get_session().navigate_to(url)


def get_page_title() -> str:
    return get_session().title


def get_current_url() -> str:
    return get_session().current_url


def refresh_page() -> None:
    get_session().refresh()


def navigate_back() -> None:
    get_session().back()


def navigate_forward() -> None:
    get_session().forward()


__all__ = [
    "SessionRegistry",
    "registry",
    "get_session",
    "navigate_to",
    "get_page_title",
    "get_current_url",
    "refresh_page",
    "navigate_back",
    "navigate_forward",
]

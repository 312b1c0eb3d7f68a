"""
================================================================================
UI Testing Framework
================================================================================

Playwright-based UI automation framework driven by pytest-bdd scenarios.

Components:
    - config: YAML settings with defaults and environment overrides
    - browser_manager: Browser session construction and release
    - session_registry: Execution-context to browser-session mapping
    - locator: Immutable element locators
    - waits: Fixed-bound condition polling
    - page_base: Base page object (interaction contract)
    - listeners: Scenario lifecycle listener with failure screenshots

Author: Automation Team
License: MIT
================================================================================
"""

from .exceptions import (
    BrowserSetupError,
    FrameworkError,
    NotInitializedError,
    UnsupportedBrowserError,
    WaitTimeoutError,
)
from .config import TestConfig, get_test_config, reset_test_config
from .locator import By, Locator
from .waits import WaitPolicy
from .browser_manager import BrowserFactory, BrowserSession, SUPPORTED_BROWSERS
from .session_registry import SessionRegistry, registry, get_session
from .page_base import BasePage, PageBase
from .listeners import LifecycleEvent, ScenarioContext, TestListener

__all__ = [
    "BrowserSetupError",
    "FrameworkError",
    "NotInitializedError",
    "UnsupportedBrowserError",
    "WaitTimeoutError",
    "TestConfig",
    "get_test_config",
    "reset_test_config",
    "By",
    "Locator",
    "WaitPolicy",
    "BrowserFactory",
    "BrowserSession",
    "SUPPORTED_BROWSERS",
    "SessionRegistry",
    "registry",
    "get_session",
    "BasePage",
    "PageBase",
    "LifecycleEvent",
    "ScenarioContext",
    "TestListener",
]

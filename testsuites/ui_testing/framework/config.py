"""
================================================================================
UI Test Configuration
================================================================================

YAML-based settings store for browser sessions, waits and reporting.

Features:
    - Flat dotted keys (``page.load.timeout: 30``) or nested YAML sections
    - Environment variable override (UI_PAGE_LOAD_TIMEOUT overrides page.load.timeout)
    - Complete built-in defaults; a missing or broken file is never fatal
    - Typed accessors that fall back to the caller's default on bad values
    - Read-only after load

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import os
import threading
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

import yaml
from loguru import logger


CONFIG_ENV_VAR = "UI_CONFIG_FILE"
ENV_PREFIX = "UI_"
# First match wins
DEFAULT_CONFIG_PATHS = (
    Path("config") / "config.yaml",
    Path(__file__).resolve().parents[3] / "config" / "config.yaml",
)

DEFAULTS: Dict[str, Any] = {
    "browser": "chrome",
    "implicit.wait": 10,
    "explicit.wait": 10,
    "page.load.timeout": 30,
    "script.timeout": 30,
    "base.url": "https://www.google.com",
    "headless": False,
    "window.size": "1920x1080",
    "screenshot.on.failure": True,
    "video.recording": False,
    "parallel.execution": False,
    "thread.count": 1,
    "retry.count": 0,
    "allure.results.directory": "target/allure-results",
    "cucumber.reports.directory": "target/cucumber-reports",
    "screenshots.directory": "target/screenshots",
    "videos.directory": "target/videos",
    "logging.level": "INFO",
}

_TRUE_VALUES = ("true", "1", "yes", "on")
_FALSE_VALUES = ("false", "0", "no", "off")


def _flatten(data: Mapping[str, Any], prefix: str = "") -> Dict[str, Any]:
    """Flatten nested YAML sections into dotted keys."""
    flat: Dict[str, Any] = {}
    for key, value in data.items():
        full_key = f"{prefix}{key}"
        if isinstance(value, Mapping):
            flat.update(_flatten(value, f"{full_key}."))
        else:
            flat[full_key] = value
    return flat


def env_key(key: str) -> str:
    """Environment variable name for a dotted key (page.load.timeout -> UI_PAGE_LOAD_TIMEOUT)."""
    return ENV_PREFIX + key.upper().replace(".", "_")


class TestConfig:
    """
    Immutable view over the UI test settings.

    Configuration hierarchy (highest to lowest priority):
        1. Environment variables (UI_BROWSER, UI_PAGE_LOAD_TIMEOUT, ...)
        2. YAML configuration file
        3. Built-in defaults

    Usage:
        >>> config = TestConfig.load()
        >>> config.browser
        'chrome'
        >>> config.get_int("implicit.wait", 10)
        10
    """

    # Not a pytest test class despite the name
    __test__ = False

    def __init__(self, properties: Optional[Mapping[str, Any]] = None, source: Optional[Path] = None):
        merged = dict(DEFAULTS)
        merged.update(properties or {})
        self._properties = MappingProxyType(merged)
        self.source = source

    @classmethod
    def load(cls, path: Optional[Path] = None, apply_env: bool = True) -> "TestConfig":
        """
        Load configuration from YAML, falling back to defaults on any failure.

        Args:
            path: Explicit YAML file. Defaults to $UI_CONFIG_FILE or config/config.yaml.
            apply_env: Apply environment variable overrides.
        """
        config_path = cls._resolve_path(path)
        properties: Dict[str, Any] = {}

        if config_path is None:
            logger.warning("No UI configuration file found. Using default values.")
        else:
            try:
                with open(config_path, "r", encoding="utf-8") as f:
                    data = yaml.safe_load(f) or {}
                if not isinstance(data, Mapping):
                    raise ValueError(f"top-level YAML must be a mapping, got {type(data).__name__}")
                properties = _flatten(data)
                logger.info(f"Loaded UI configuration from: {config_path}")
            except (OSError, yaml.YAMLError, ValueError) as e:
                logger.warning(
                    f"Could not load configuration file {config_path}: {e}. Using default values."
                )
                properties = {}

        if apply_env:
            known_keys = set(DEFAULTS) | set(properties)
            for key in known_keys:
                value = os.environ.get(env_key(key))
                if value is not None:
                    properties[key] = value

        return cls(properties, source=config_path)

    @staticmethod
    def _resolve_path(path: Optional[Path]) -> Optional[Path]:
        if path is not None:
            return Path(path)
        env_path = os.environ.get(CONFIG_ENV_VAR)
        if env_path:
            return Path(env_path)
        for candidate in DEFAULT_CONFIG_PATHS:
            if candidate.exists():
                return candidate
        return None

    # =========================================================================
    # Generic Accessors
    # =========================================================================

    def get(self, key: str, default: Any = None) -> Any:
        """Raw value for key, or default when absent."""
        value = self._properties.get(key)
        return default if value is None else value

    def get_str(self, key: str, default: str = "") -> str:
        value = self.get(key)
        return default if value is None else str(value)

    def get_int(self, key: str, default: int = 0) -> int:
        """Integer value; malformed values fall back to default."""
        value = self.get(key)
        if value is None or isinstance(value, bool):
            return default
        try:
            return int(str(value).strip())
        except ValueError:
            logger.warning(f"Invalid integer for '{key}': {value!r}. Using default {default}")
            return default

    def get_float(self, key: str, default: float = 0.0) -> float:
        """Float value; malformed values fall back to default."""
        value = self.get(key)
        if value is None or isinstance(value, bool):
            return default
        try:
            return float(str(value).strip())
        except ValueError:
            logger.warning(f"Invalid number for '{key}': {value!r}. Using default {default}")
            return default

    def get_bool(self, key: str, default: bool = False) -> bool:
        """Boolean value; unrecognized values fall back to default."""
        value = self.get(key)
        if value is None:
            return default
        if isinstance(value, bool):
            return value
        text = str(value).strip().lower()
        if text in _TRUE_VALUES:
            return True
        if text in _FALSE_VALUES:
            return False
        logger.warning(f"Invalid boolean for '{key}': {value!r}. Using default {default}")
        return default

    def as_dict(self) -> Dict[str, Any]:
        return dict(self._properties)

    def __contains__(self, key: str) -> bool:
        return key in self._properties

    # =========================================================================
    # Named Settings
    # =========================================================================

    @property
    def browser(self) -> str:
        return self.get_str("browser", "chrome")

    @property
    def base_url(self) -> str:
        return self.get_str("base.url", "https://www.google.com")

    @property
    def implicit_wait(self) -> float:
        return self.get_float("implicit.wait", 10.0)

    @property
    def explicit_wait(self) -> float:
        return self.get_float("explicit.wait", 10.0)

    @property
    def page_load_timeout(self) -> float:
        return self.get_float("page.load.timeout", 30.0)

    @property
    def script_timeout(self) -> float:
        return self.get_float("script.timeout", 30.0)

    @property
    def headless(self) -> bool:
        return self.get_bool("headless", False)

    @property
    def window_size(self) -> str:
        return self.get_str("window.size", "1920x1080")

    @property
    def window_dimensions(self) -> Tuple[int, int]:
        """Window size as (width, height); malformed sizes give 1920x1080."""
        try:
            width, height = (int(part) for part in self.window_size.lower().split("x"))
        except ValueError:
            logger.warning(f"Invalid window.size: {self.window_size!r}. Using 1920x1080")
            return 1920, 1080
        return width, height

    @property
    def screenshot_on_failure(self) -> bool:
        return self.get_bool("screenshot.on.failure", True)

    @property
    def video_recording(self) -> bool:
        return self.get_bool("video.recording", False)

    @property
    def parallel_execution(self) -> bool:
        return self.get_bool("parallel.execution", False)

    @property
    def thread_count(self) -> int:
        return self.get_int("thread.count", 1)

    @property
    def retry_count(self) -> int:
        return self.get_int("retry.count", 0)

    @property
    def allure_results_directory(self) -> str:
        return self.get_str("allure.results.directory", "target/allure-results")

    @property
    def cucumber_reports_directory(self) -> str:
        return self.get_str("cucumber.reports.directory", "target/cucumber-reports")

    @property
    def screenshots_directory(self) -> str:
        return self.get_str("screenshots.directory", "target/screenshots")

    @property
    def videos_directory(self) -> str:
        return self.get_str("videos.directory", "target/videos")

    def __repr__(self) -> str:
        return f"TestConfig(source={self.source}, browser={self.browser!r})"


# =============================================================================
# Process-wide Configuration
# =============================================================================

_config: Optional[TestConfig] = None
_config_lock = threading.Lock()


def get_test_config() -> TestConfig:
    """Return the process-wide configuration, loading it on first use."""
    global _config
    if _config is None:
        with _config_lock:
            if _config is None:
                _config = TestConfig.load()
    return _config


def reset_test_config() -> None:
    """Drop the cached configuration so the next access reloads it."""
    global _config
    with _config_lock:
        _config = None


__all__ = [
    "DEFAULTS",
    "TestConfig",
    "env_key",
    "get_test_config",
    "reset_test_config",
]

"""
================================================================================
Framework Exceptions
================================================================================

Error taxonomy shared by the session registry, the browser factory and the
page interaction layer.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations


class FrameworkError(Exception):
    """Base exception for all UI framework failures."""
    pass


class NotInitializedError(FrameworkError):
    """Raised when a browser session is requested before initialize()."""
    pass


class UnsupportedBrowserError(FrameworkError):
    """Raised when a browser tag is outside the supported set."""

    def __init__(self, browser_type: str, supported=()):
        self.browser_type = browser_type
        message = f"Unsupported browser type: {browser_type!r}"
        if supported:
            message += f" (supported: {', '.join(sorted(supported))})"
        super().__init__(message)


class BrowserSetupError(FrameworkError):
    """Raised when the browser backend fails to start."""
    pass


class WaitTimeoutError(FrameworkError, TimeoutError):
    """
    Raised when a wait condition does not hold within its bound.

    Also a builtin ``TimeoutError`` so callers can catch either.

    Attributes:
        description: Locator or condition that was being waited for
        timeout: Wait bound in seconds
    """

    def __init__(self, description: str, timeout: float, detail: str = ""):
        self.description = description
        self.timeout = timeout
        message = f"Timed out after {timeout:g}s waiting for {description}"
        if detail:
            message += f": {detail}"
        super().__init__(message)


__all__ = [
    "FrameworkError",
    "NotInitializedError",
    "UnsupportedBrowserError",
    "BrowserSetupError",
    "WaitTimeoutError",
]

# ================================================================================
# Wait Policy Module
# ================================================================================
#
# Fixed-bound polling used by the page interaction layer for conditions that
# Playwright cannot express as a single built-in wait (clickable, frame
# present, alert present, title/url contains, ...).
#
# Key Features:
#   - One immutable policy per browser session
#   - Blocking poll on the calling thread, no retries beyond the bound
#   - Injectable sleep so pollers can pump browser events while waiting
#
# Usage:
#   policy = WaitPolicy(timeout=10)
#   element = policy.until(lambda: find() or None, "login button")
#
# ================================================================================

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Callable, Optional, TypeVar

from loguru import logger

from .exceptions import WaitTimeoutError


T = TypeVar("T")


@dataclass(frozen=True)
class WaitPolicy:
    """
    Bound for condition polling.

    Attributes:
        timeout: Maximum seconds to wait
        poll_interval: Seconds between condition checks
    """
    timeout: float = 10.0
    poll_interval: float = 0.5
    clock: Callable[[], float] = field(default=time.monotonic, repr=False, compare=False)

    @property
    def timeout_ms(self) -> float:
        """Bound in milliseconds, the unit Playwright expects."""
        return self.timeout * 1000

    def until(
        self,
        condition: Callable[[], Optional[T]],
        description: str,
        timeout: Optional[float] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> T:
        """
        Poll condition until it returns a truthy value.

        Exceptions raised by condition count as "not yet"; the last one is
        reported in the timeout message.

        Args:
            condition: Callable returning a truthy value once satisfied
            description: Locator or condition text for log and error messages
            timeout: Override for this call only (seconds)
            sleep: Sleep function used between polls

        Returns:
            The first truthy value returned by condition

        Raises:
            WaitTimeoutError: If the bound elapses first
        """
        bound = self.timeout if timeout is None else timeout
        deadline = self.clock() + bound
        last_error: Optional[Exception] = None

        while True:
            try:
                result = condition()
                if result:
                    return result
            except Exception as e:
                last_error = e

            remaining = deadline - self.clock()
            if remaining <= 0:
                detail = f"last error: {last_error}" if last_error else ""
                logger.warning(f"Wait timed out after {bound:g}s: {description}")
                raise WaitTimeoutError(description, bound, detail)

            sleep(min(self.poll_interval, remaining))

    def until_not(
        self,
        condition: Callable[[], object],
        description: str,
        timeout: Optional[float] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> bool:
        """Poll until condition returns a falsy value."""
        return self.until(lambda: not condition(), description, timeout=timeout, sleep=sleep)


__all__ = [
    "WaitPolicy",
]

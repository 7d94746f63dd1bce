"""
Minimum-interval throttle for Reddit API requests.

Blocks the calling thread until at least ``interval`` seconds have passed
since the previous request made through the same throttle. It is a rate
limiter, not a scheduler: there is no queue and no fairness between
callers.
"""

import threading
import time
from typing import Any, Callable, Dict, Optional

import structlog

logger = structlog.get_logger(__name__)


def _checked_interval(interval: Optional[float]) -> float:
    if interval is not None and interval < 0:
        raise ValueError("throttle interval must not be negative")
    return interval or 0.0


class Throttle:
    """
    Enforce a minimum interval between consecutive requests.

    An interval of 0 (or None) disables the throttle; wait() then returns
    immediately without touching any state.

    Example:
        >>> throttle = Throttle(interval=1.0)
        >>> throttle.wait()  # returns immediately
        0.0
        >>> throttle.wait()  # sleeps ~1s
        1.0
    """

    def __init__(
        self,
        interval: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """
        Initialize the throttle.

        Args:
            interval: Minimum seconds between requests (None/0 disables)
            clock: Monotonic clock returning seconds
            sleep: Blocking sleep function
        """
        self.interval = _checked_interval(interval)
        self._clock = clock
        self._sleep = sleep
        self._last_call: Optional[float] = None
        self._lock = threading.Lock()
        self.logger = logger

        self.logger.debug("throttle_initialized", interval_seconds=self.interval)

    def set_interval(self, interval: Optional[float]) -> None:
        """Change the interval, keeping the time of the previous request."""
        interval = _checked_interval(interval)
        with self._lock:
            self.interval = interval
        self.logger.debug("throttle_interval_changed", interval_seconds=interval)

    @property
    def enabled(self) -> bool:
        return self.interval > 0

    def wait(self) -> float:
        """
        Block until the next request may be sent, then record it.

        Returns:
            Seconds spent sleeping (0.0 when no wait was needed)
        """
        if not self.enabled:
            return 0.0

        with self._lock:
            now = self._clock()
            waited = 0.0

            if self._last_call is not None:
                wait_time = self._last_call + self.interval - now
                if wait_time > 0:
                    self.logger.debug(
                        "throttle_wait",
                        wait_seconds=round(wait_time, 3),
                        interval_seconds=self.interval,
                    )
                    self._sleep(wait_time)
                    waited = wait_time
                    now = self._clock()

            self._last_call = now
            return waited

    def reset(self) -> None:
        """Forget the previous request so the next wait() returns at once."""
        with self._lock:
            self._last_call = None

    def get_stats(self) -> Dict[str, Any]:
        """
        Get current throttle state.

        Returns:
            Dictionary with interval, enabled flag and seconds since the
            last recorded request (None if no request yet)
        """
        since_last: Optional[float] = None
        if self._last_call is not None:
            since_last = round(self._clock() - self._last_call, 3)

        return {
            "interval_seconds": self.interval,
            "enabled": self.enabled,
            "seconds_since_last_call": since_last,
        }

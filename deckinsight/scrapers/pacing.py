"""Minimum-interval request pacing for polite scraping."""

import time
from collections.abc import Callable
from threading import Lock


class RequestPacer:
    """
    Blocks until at least `min_interval` seconds have passed since the last request.

    Safe to share between threads: callers are released one at a time, each
    at least `min_interval` after the previous one. Clock and sleep are
    injectable for tests.
    """

    def __init__(
        self,
        min_interval: float,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.min_interval = min_interval
        self._clock = clock
        self._sleep = sleep
        self._last_request: float | None = None
        # Held across the sleep so waiting callers queue up behind it
        self._lock = Lock()

    def wait(self) -> None:
        """Call right before issuing a request."""
        with self._lock:
            now = self._clock()
            if self._last_request is not None:
                elapsed = now - self._last_request
                if elapsed < self.min_interval:
                    self._sleep(self.min_interval - elapsed)
                    now = self._clock()
            self._last_request = now
